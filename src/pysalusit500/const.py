"""Constants for pysalusit500 library."""

from __future__ import annotations


# Portal Configuration
DEFAULT_BASE_URL = "https://salus-it500.com"
DEFAULT_TIMEOUT = 30  # seconds, per HTTP request

# Portal Endpoints (relative to base URL)
LOGIN_PATH = "/public/login.php"
LOGIN_PARAMS = {"lang": "en"}
DEVICES_PATH = "/public/devices.php"
TELEMETRY_PATH = "/public/ajax_device_values.php"
CONTROL_PATH = "/includes/set.php"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"

# Anti-forgery token embedded in the devices page
TOKEN_PATTERN = r'name="token" type="hidden" value="(.*)" />'

# Telemetry Fields
FIELD_ROOM_TEMP = "CH1currentRoomTemp"
FIELD_SET_POINT = "CH1currentSetPoint"
FIELD_AUTO_OFF = "CH1autoOff"
FIELD_HEAT_STATUS = "CH1heatOnOffStatus"

# Parameter Validation
TARGET_TEMPERATURE_MIN = 5.0
TARGET_TEMPERATURE_MAX = 35.0

# Synchronizer Configuration
DEFAULT_SETTLE_DELAY = 2.5  # seconds a write waits before returning to the caller
DEFAULT_READ_TIMEOUT = 45.0  # bound on a live read issued by the synchronizer
