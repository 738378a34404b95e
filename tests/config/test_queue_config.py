"""
Configuration tests — environment loading, defaults, placeholder detection.
"""

import pytest
from pydantic import ValidationError

from config import AppConfig, QueueConfig, debug_config, get_config, reset_config
from config.defaults import QueueDefaults


class TestQueueConfigFromEnvironment:

    def test_defaults_when_unset(self, clean_env):
        config = QueueConfig.from_environment()
        assert config.queue_name == "task-queue"
        assert config.connection_string is None
        assert config.namespace is None
        assert config.max_batch_size == 100
        assert config.message_ttl_hours == 24

    def test_functions_connection_setting_preferred(self, clean_env):
        clean_env.setenv("ServiceBusConnection", "Endpoint=sb://primary/")
        clean_env.setenv("ServiceBusConnectionString", "Endpoint=sb://secondary/")
        assert QueueConfig.from_environment().connection_string == "Endpoint=sb://primary/"

    def test_client_connection_setting_fallback(self, clean_env):
        clean_env.setenv("ServiceBusConnectionString", "Endpoint=sb://secondary/")
        assert QueueConfig.from_environment().connection_string == "Endpoint=sb://secondary/"

    def test_queue_name_sources(self, clean_env):
        clean_env.setenv("QueueName", "from-client")
        assert QueueConfig.from_environment().queue_name == "from-client"
        clean_env.setenv("SERVICE_BUS_QUEUE_NAME", "from-app")
        assert QueueConfig.from_environment().queue_name == "from-app"

    def test_identity_namespace_setting(self, clean_env):
        clean_env.setenv("ServiceBusConnection__fullyQualifiedNamespace", "mybus.servicebus.windows.net")
        config = QueueConfig.from_environment()
        assert config.namespace == "mybus.servicebus.windows.net"
        assert config.is_configured()

    def test_batch_size_above_service_limit_rejected(self, clean_env):
        clean_env.setenv("SERVICE_BUS_MAX_BATCH_SIZE", "500")
        with pytest.raises(ValidationError):
            QueueConfig.from_environment()


class TestQueueConfigBehaviour:

    def test_short_namespace_gets_suffix(self):
        assert QueueConfig(namespace="mybus").fully_qualified_namespace == "mybus.servicebus.windows.net"

    def test_full_namespace_unchanged(self):
        assert QueueConfig(namespace="mybus.example.net").fully_qualified_namespace == "mybus.example.net"

    def test_no_namespace(self):
        assert QueueConfig().fully_qualified_namespace is None

    def test_unset_connection_is_placeholder(self):
        assert QueueConfig().has_placeholder_connection()

    def test_documented_placeholder_detected(self):
        config = QueueConfig(connection_string=QueueDefaults.PLACEHOLDER_CONNECTION_STRING)
        assert config.has_placeholder_connection()

    def test_real_connection_not_placeholder(self):
        config = QueueConfig(connection_string="Endpoint=sb://realbus.servicebus.windows.net/;SharedAccessKey=x")
        assert not config.has_placeholder_connection()

    def test_connection_string_masked(self):
        config = QueueConfig(connection_string="Endpoint=sb://secret/")
        assert "secret" not in str(config.debug_dict())
        assert "secret" not in repr(config)

    def test_empty_queue_name_rejected(self):
        with pytest.raises(ValidationError):
            QueueConfig(queue_name="")


class TestAppConfig:

    def test_defaults_when_unset(self, clean_env):
        config = AppConfig.from_environment()
        assert config.debug_mode is False
        assert config.environment == "dev"
        assert config.simulated_delay_scale == 1.0
        assert config.queues.queue_name == "task-queue"

    def test_values_from_environment(self, clean_env):
        clean_env.setenv("DEBUG_MODE", "true")
        clean_env.setenv("ENVIRONMENT", "qa")
        clean_env.setenv("SIMULATED_DELAY_SCALE", "0.25")
        config = AppConfig.from_environment()
        assert config.debug_mode is True
        assert config.environment == "qa"
        assert config.simulated_delay_scale == 0.25

    def test_effective_log_level_from_log_level(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "warning")
        config = AppConfig.from_environment()
        assert config.log_level == "WARNING"
        assert config.effective_log_level == "WARNING"

    @pytest.mark.parametrize("var", ["DEBUG_MODE", "DEBUG_LOGGING"])
    def test_debug_flags_force_debug_level(self, clean_env, var):
        clean_env.setenv("LOG_LEVEL", "ERROR")
        clean_env.setenv(var, "true")
        config = AppConfig.from_environment()
        assert config.debug_mode is True
        assert config.effective_log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValidationError):
            AppConfig.from_environment()

    def test_negative_delay_scale_rejected(self, clean_env):
        clean_env.setenv("SIMULATED_DELAY_SCALE", "-1")
        with pytest.raises(ValidationError):
            AppConfig.from_environment()

    def test_singleton_until_reset(self, clean_env):
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first

    def test_debug_config_masks_connection(self, clean_env):
        clean_env.setenv("ServiceBusConnection", "Endpoint=sb://hidden/")
        info = debug_config()
        assert info['queues']['connection'] == '***MASKED***'
        assert "hidden" not in str(info)
