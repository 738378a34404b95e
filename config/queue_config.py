"""
Azure Service Bus Queue Configuration.

Provides configuration for:
    - Service Bus connection settings (connection string or namespace + identity)
    - Task queue name
    - Batch size limit
    - Placeholder detection for unconfigured local setups

Environment Variables:
    ServiceBusConnection: Connection string (Functions binding setting)
    ServiceBusConnectionString: Connection string (test client, fallback)
    SERVICE_BUS_NAMESPACE: Fully qualified namespace for managed identity
    ServiceBusConnection__fullyQualifiedNamespace: Same, Functions identity binding form
    SERVICE_BUS_QUEUE_NAME / QueueName: Task queue name
    SERVICE_BUS_MAX_BATCH_SIZE: Max messages per batch

Exports:
    QueueConfig: Pydantic queue configuration model
"""

import os
from typing import Optional
from pydantic import BaseModel, Field

from .defaults import QueueDefaults


class QueueConfig(BaseModel):
    """
    Azure Service Bus queue configuration.

    Either connection_string or namespace must be set before a
    producer can connect. The trigger binding resolves its own
    connection from the same app settings.
    """

    connection_string: Optional[str] = Field(
        default=None,
        repr=False,
        description="Service Bus connection string (ServiceBusConnection or ServiceBusConnectionString)"
    )

    namespace: Optional[str] = Field(
        default=None,
        description="Service Bus namespace for managed identity auth (alternative to connection string)"
    )

    queue_name: str = Field(
        default=QueueDefaults.QUEUE_NAME,
        min_length=1,
        description="Service Bus queue carrying task messages"
    )

    max_batch_size: int = Field(
        default=QueueDefaults.MAX_BATCH_SIZE,
        ge=1,
        le=QueueDefaults.MAX_BATCH_SIZE,
        description="Maximum number of messages per Service Bus batch"
    )

    message_ttl_hours: int = Field(
        default=QueueDefaults.MESSAGE_TTL_HOURS,
        ge=1,
        description="Time-to-live applied to published messages"
    )

    @property
    def fully_qualified_namespace(self) -> Optional[str]:
        """Namespace with the servicebus.windows.net suffix added when missing."""
        if not self.namespace:
            return None
        if "." in self.namespace:
            return self.namespace
        return f"{self.namespace}.servicebus.windows.net"

    def is_configured(self) -> bool:
        """True when there is something to connect with."""
        return bool(self.connection_string or self.namespace)

    def has_placeholder_connection(self) -> bool:
        """
        True when the connection is unset or still the documented placeholder.

        Used by the test client to warn before attempting to connect.
        """
        if not self.is_configured():
            return True
        if self.connection_string and QueueDefaults.PLACEHOLDER_NAMESPACE in self.connection_string:
            return True
        if self.namespace and QueueDefaults.PLACEHOLDER_NAMESPACE in self.namespace:
            return True
        return False

    def debug_dict(self) -> dict:
        """Config values safe to log (connection string masked)."""
        return {
            'queue_name': self.queue_name,
            'namespace': self.namespace,
            'connection': '***MASKED***' if self.connection_string else None,
            'max_batch_size': self.max_batch_size,
            'message_ttl_hours': self.message_ttl_hours,
        }

    @classmethod
    def from_environment(cls):
        """Load from environment variables."""
        return cls(
            connection_string=(
                os.environ.get("ServiceBusConnection")
                or os.environ.get("ServiceBusConnectionString")
            ),
            # Check both SERVICE_BUS_NAMESPACE and Azure Functions identity binding variable
            namespace=(
                os.environ.get("SERVICE_BUS_NAMESPACE")
                or os.environ.get("ServiceBusConnection__fullyQualifiedNamespace")
            ),
            queue_name=(
                os.environ.get("SERVICE_BUS_QUEUE_NAME")
                or os.environ.get("QueueName")
                or QueueDefaults.QUEUE_NAME
            ),
            max_batch_size=int(os.environ.get("SERVICE_BUS_MAX_BATCH_SIZE", str(QueueDefaults.MAX_BATCH_SIZE))),
            message_ttl_hours=int(os.environ.get("SERVICE_BUS_MESSAGE_TTL_HOURS", str(QueueDefaults.MESSAGE_TTL_HOURS))),
        )
