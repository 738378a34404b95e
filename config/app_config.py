"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - QueueConfig (Service Bus connection and queue)

Exports:
    AppConfig: Main configuration class

Dependencies:
    pydantic: BaseModel for configuration validation
    config.queue_config: QueueConfig
    config.defaults: Default value constants

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os
from pydantic import BaseModel, Field, field_validator

from .queue_config import QueueConfig
from .defaults import AppDefaults


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    # ========================================================================
    # Core Application Settings
    # ========================================================================

    debug_mode: bool = Field(
        default=AppDefaults.DEBUG_MODE,
        description="Enable debug mode for verbose diagnostics. "
                    "Set DEBUG_MODE=true (or DEBUG_LOGGING=true) in environment to enable.",
        examples=[True, False]
    )

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)",
        examples=["dev", "qa", "prod"]
    )

    log_level: str = Field(
        default=AppDefaults.LOG_LEVEL,
        description="Logging level for application diagnostics",
        examples=["DEBUG", "INFO", "WARNING", "ERROR"]
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    # ========================================================================
    # Simulated Workload
    # ========================================================================

    simulated_delay_scale: float = Field(
        default=AppDefaults.SIMULATED_DELAY_SCALE,
        ge=0.0,
        description="Multiplier applied to every simulated handler delay. "
                    "0 disables sleeping (tests), 1.0 keeps the documented durations."
    )

    # ========================================================================
    # Domain Configurations (Composition Pattern)
    # ========================================================================

    queues: QueueConfig = Field(
        default_factory=QueueConfig.from_environment,
        description="Azure Service Bus queue configuration"
    )

    @property
    def effective_log_level(self) -> str:
        """Log level the app runs with: DEBUG in debug mode, else log_level."""
        return "DEBUG" if self.debug_mode else self.log_level

    @classmethod
    def from_environment(cls):
        """Load all configs from environment."""
        return cls(
            debug_mode=(
                os.environ.get("DEBUG_MODE", str(AppDefaults.DEBUG_MODE).lower()).lower() == "true"
                or os.environ.get("DEBUG_LOGGING", "").lower() == "true"
            ),
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),
            simulated_delay_scale=float(
                os.environ.get("SIMULATED_DELAY_SCALE", str(AppDefaults.SIMULATED_DELAY_SCALE))
            ),
            queues=QueueConfig.from_environment(),
        )
