"""
Config test fixtures — clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "ServiceBusConnection", "ServiceBusConnectionString",
        "SERVICE_BUS_NAMESPACE", "ServiceBusConnection__fullyQualifiedNamespace",
        "SERVICE_BUS_QUEUE_NAME", "QueueName",
        "SERVICE_BUS_MAX_BATCH_SIZE", "SERVICE_BUS_MESSAGE_TTL_HOURS",
        "DEBUG_MODE", "DEBUG_LOGGING", "ENVIRONMENT", "LOG_LEVEL", "SIMULATED_DELAY_SCALE",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
