"""Basic thermostat control example for pysalusit500.

This example demonstrates:
- Reading thermostat state through the synchronizer
- Setting a target temperature with an optimistic update
- Watching the optimistic state appear and clear
"""

import asyncio
import logging

from pysalusit500 import SalusClient, StateSynchronizer


# Configure logging to see what's happening
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def on_state_change(synchronizer: StateSynchronizer) -> None:
    """Print whether reads are optimistic or live."""
    if synchronizer.cached_state is not None:
        print(f"  -> optimistic target: {synchronizer.cached_state.set_point} °C")
    else:
        print("  -> write settled, reads are live again")


async def main() -> None:
    """Main example function."""
    # Replace with your credentials
    username = "your@email.com"
    password = "your_password"
    device_id = 12345

    async with SalusClient(username, password, device_id) as client:
        thermostat = client.synchronizer
        thermostat.add_listener(on_state_change)

        print(f"Room: {await thermostat.current_temperature()} °C")
        print(f"Target: {await thermostat.target_temperature()} °C")
        print(f"Schedule: {await thermostat.auto_mode()}")

        print("\nSetting target to 21.5 °C...")
        await thermostat.set_target_temperature(21.5)

        # Served from the optimistic cache while the portal catches up
        print(f"Target now reads: {await thermostat.target_temperature()} °C")
        print(f"Schedule now reads: {await thermostat.auto_mode()}")

        # Leaving the context waits for the background write to settle


if __name__ == "__main__":
    asyncio.run(main())
