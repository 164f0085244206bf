"""Basic thermostat control example for pythermostat.

This example demonstrates:
- Connecting to the thermostat
- Reading the mirrored state
- Toggling power
- Setting the target temperature
- Simulating a slider drag with debounced updates
"""

import asyncio
import logging

from pythermostat import InvalidParameterError, ThermostatClient


# Configure logging to see what's happening
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


async def main() -> None:
    """Main example function."""
    # Replace with your device address
    base_url = "http://192.168.4.1"

    print(f"Connecting to thermostat at {base_url}...")

    async with ThermostatClient(base_url=base_url) as client:
        model = client.model

        if not client.is_online:
            print("Device did not answer. Polling continues in the background.")

        # Display device state
        print(f"Status:   {model.status_label}")
        print(f"Power:    {model.power_label}")
        print(f"Setpoint: {model.setpoint_display} °C")
        print(f"Current:  {model.current_temp_display} °C")
        print()

        # Turn the thermostat on
        print("Turning thermostat ON...")
        if await client.turn_on():
            print("  ✓ Thermostat turned on")
        else:
            print("  ✗ Failed to turn on (switch rolled back)")

        # Set the target temperature directly
        print("\nSetting target to 72.5 °C...")
        try:
            success = await client.set_setpoint(72.5)
        except InvalidParameterError as err:
            print(f"  ✗ {err}")
        else:
            print("  ✓ Setpoint accepted" if success else "  ✗ Setpoint not accepted")

        # Simulate dragging a slider: only the last value is sent
        print("\nDragging slider 60 → 70 °C...")
        for value in range(60, 71, 2):
            client.input_setpoint(float(value))
            print(f"  display: {model.setpoint_display} °C")
            await asyncio.sleep(0.05)

        await asyncio.sleep(0.5)  # Quiet period elapses, one request is sent

        # Watch a few polls
        for _ in range(3):
            await asyncio.sleep(2)
            print(f"\n{model.status_label}: {model.power_label}, "
                  f"setpoint {model.setpoint_display} °C, current {model.current_temp_display} °C")


if __name__ == "__main__":
    asyncio.run(main())
