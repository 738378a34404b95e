"""
Configuration Package - Domain-Specific Configuration Modules

This package provides application configuration using a composition-based approach.

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── queue_config.py          # Service Bus connection and queue
    └── defaults.py              # Default value constants

Usage:
    # Singleton pattern (preferred)
    from config import get_config
    config = get_config()
    queue = config.queues.queue_name

    # Debug output
    from config import debug_config
    info = debug_config()  # Connection string masked
"""

from typing import Optional

from .queue_config import QueueConfig
from .app_config import AppConfig
from .defaults import QueueDefaults, AppDefaults, TaskDefaults, SampleDefaults


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, connection string masked
    """
    try:
        config = get_config()
        return {
            'queues': config.queues.debug_dict(),
            'debug_mode': config.debug_mode,
            'environment': config.environment,
            'log_level': config.log_level,
            'simulated_delay_scale': config.simulated_delay_scale,
        }
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    # Main config
    'AppConfig',
    'get_config',
    'reset_config',
    'debug_config',

    # Queues
    'QueueConfig',

    # Defaults
    'QueueDefaults',
    'AppDefaults',
    'TaskDefaults',
    'SampleDefaults',
]
