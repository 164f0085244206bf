"""Integration tests for pythermostat library.

These tests talk to a real thermostat on the local network and change its
power and setpoint (both are restored afterwards). They are marked with
@pytest.mark.integration and skipped by default.

To run integration tests:
    pytest tests/integration -v -m integration

Environment variables (in .env at the project root or the environment):
    THERMOSTAT_BASE_URL: Device base URL, e.g. http://192.168.4.1
"""
