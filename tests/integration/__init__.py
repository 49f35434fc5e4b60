"""Integration tests for pysalusit500 library.

These tests log in to the real salus-it500.com portal using credentials from a
.env file. They are marked with @pytest.mark.integration and deselected by
default.

To run integration tests:
    pytest tests/integration -v -m integration

Environment variables required in .env:
    SALUS_USERNAME: Account email
    SALUS_PASSWORD: Account password
    SALUS_DEVICE_ID: Numeric thermostat id shown on the portal
    SALUS_BASE_URL: Portal base URL (optional, defaults to production)
"""
