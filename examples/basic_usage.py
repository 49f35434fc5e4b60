"""Basic usage example for pysalusit500 library."""

import asyncio

from pysalusit500 import SalusConnectAPI


async def main() -> None:
    """Read the thermostat state once through the session client."""
    async with SalusConnectAPI(
        "your@email.com",
        "your_password",
        device_id=12345,
    ) as api:
        print("Logging in to the Salus portal...")

        result = await api.read_state()
        if not result.ok:
            print("Could not read the thermostat (see log for details)")
            return

        state = result.unwrap()
        print(f"Room temperature: {state.room_temperature:.1f} °C")
        print(f"Target temperature: {state.set_point:.1f} °C")
        print(f"Schedule: {state.auto_mode.value}")
        print(f"Boiler heating: {state.heating_active}")


if __name__ == "__main__":
    asyncio.run(main())
