"""Tests for pysalusit500 data models."""

from __future__ import annotations

import pytest

from pysalusit500.exceptions import OperationFailedError
from pysalusit500.models import AutoMode, ControlAck, DeviceField, DeviceState, OperationResult


@pytest.fixture
def state() -> DeviceState:
    """Create a state with the schedule running and the boiler firing."""
    return DeviceState(
        current_room_temp="19.8",
        current_set_point="21.0",
        auto_off="0",
        heat_on_off_status="1",
        raw_data={"CH1currentRoomTemp": "19.8"},
    )


class TestAutoMode:
    """Test the inverted auto-off flag conversion."""

    def test_from_wire(self) -> None:
        """Test '0' is automatic and '1' is manual."""
        assert AutoMode.from_wire("0") is AutoMode.AUTOMATIC
        assert AutoMode.from_wire("1") is AutoMode.MANUAL

    def test_to_wire(self) -> None:
        """Test conversion back to the portal flag."""
        assert AutoMode.AUTOMATIC.to_wire() == "0"
        assert AutoMode.MANUAL.to_wire() == "1"

    def test_from_wire_unknown(self) -> None:
        """Test unknown flags are rejected."""
        with pytest.raises(ValueError, match="Unknown auto-off flag"):
            AutoMode.from_wire("2")


class TestDeviceState:
    """Test DeviceState parsing on access and cloning."""

    def test_parsed_properties(self, state: DeviceState) -> None:
        """Test text fields are parsed on access."""
        assert state.room_temperature == 19.8
        assert state.set_point == 21.0
        assert state.auto_mode is AutoMode.AUTOMATIC
        assert state.heating_active is True

    def test_heating_inactive(self, state: DeviceState) -> None:
        """Test '0' means the boiler is idle."""
        idle = DeviceState(
            current_room_temp=state.current_room_temp,
            current_set_point=state.current_set_point,
            auto_off=state.auto_off,
            heat_on_off_status="0",
        )
        assert idle.heating_active is False

    def test_with_set_point(self, state: DeviceState) -> None:
        """Test cloning changes only the set point."""
        clone = state.with_set_point(22.5)

        assert clone.set_point == 22.5
        assert clone.current_room_temp == state.current_room_temp
        assert clone.auto_off == state.auto_off
        assert clone.heat_on_off_status == state.heat_on_off_status
        assert state.set_point == 21.0

    def test_with_auto_mode(self, state: DeviceState) -> None:
        """Test cloning changes only the auto-off flag."""
        clone = state.with_auto_mode(AutoMode.MANUAL)

        assert clone.auto_off == "1"
        assert clone.set_point == state.set_point
        assert state.auto_mode is AutoMode.AUTOMATIC

    def test_raw_data_excluded_from_equality(self, state: DeviceState) -> None:
        """Test snapshots compare by their telemetry values."""
        clone = state.with_set_point(21.0)

        assert clone == state


class TestDeviceField:
    """Test field metadata."""

    def test_writable(self) -> None:
        """Test only target temperature and auto mode are writable."""
        assert DeviceField.TARGET_TEMPERATURE.writable
        assert DeviceField.AUTO_MODE.writable
        assert not DeviceField.CURRENT_TEMPERATURE.writable
        assert not DeviceField.HEATING_ACTIVE.writable


class TestOperationResult:
    """Test the opaque result wrapper."""

    def test_success(self) -> None:
        """Test a successful result exposes its value."""
        ack = ControlAck(success=True)
        result = OperationResult.success(ack)

        assert result.ok
        assert result.unwrap() is ack

    def test_failure(self) -> None:
        """Test a failed result carries nothing and raises on unwrap."""
        result: OperationResult[ControlAck] = OperationResult.failure()

        assert not result.ok
        assert result.value is None
        with pytest.raises(OperationFailedError):
            result.unwrap()

    def test_failures_are_equal(self) -> None:
        """Test all failures look the same."""
        assert OperationResult.failure() == OperationResult.failure()
