"""Monitor a thermostat example.

This example demonstrates:
- Reacting to model changes with a listener
- Watching connectivity flip between Connected and Offline
- Displaying relay state when the device reports it
"""

import asyncio
from datetime import datetime

from pythermostat import ControlModel, ThermostatClient


def on_change(model: ControlModel) -> None:
    """Print a status line whenever the model changes.

    Args:
        model: The client's control model.
    """
    relay = "n/a" if model.relay_state is None else ("ON" if model.relay_state else "OFF")
    print(
        f"[{datetime.now().strftime('%H:%M:%S')}] "
        f"{model.status_label:<9} "
        f"power={model.power_label:<3} "
        f"setpoint={model.setpoint_display:>5} °C "
        f"current={model.current_temp_display:>5} °C "
        f"relay={relay}"
    )


async def main() -> None:
    """Main monitoring loop."""
    base_url = "http://192.168.4.1"

    async with ThermostatClient(base_url=base_url, poll_interval=2.0) as client:
        client.add_listener(on_change)
        on_change(client.model)

        # Listener fires on every poll until interrupted
        while True:
            await asyncio.sleep(60)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nStopping monitor")
