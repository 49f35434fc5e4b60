"""Example showing session injection for Home Assistant integration."""

import asyncio

from aiohttp import ClientSession, DummyCookieJar

from pysalusit500 import SalusClient


async def main() -> None:
    """Demonstrate session injection pattern for HA integration."""
    # The portal cookie is attached per request. A session with a regular
    # cookie jar also works: portal cookies are cleared around each operation.
    async with ClientSession(cookie_jar=DummyCookieJar()) as session:
        print("Using application-managed aiohttp session")

        client = SalusClient(
            "your@email.com",
            "your_password",
            device_id=12345,
            session=session,  # Inject existing session
        )

        async with client:
            state = await client.thermostat.get_current_heating_state()
            print(f"Current heating state: {state!r}")

            contact = await client.boiler_sensor.get_contact_state()
            print(f"Boiler contact sensor: {contact!r}")

        # Session remains open after client exits
        print("\nClient closed, but session still available for other requests")


if __name__ == "__main__":
    asyncio.run(main())
