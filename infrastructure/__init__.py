"""
Infrastructure Package - Lazy Loading Implementation.

Provides the Service Bus message producer with lazy loading so that
importing the package never touches azure-servicebus, azure-identity or
environment variables.

Azure Functions imports function_app.py on every cold start, before the
host guarantees app settings and managed identity tokens are ready. The
consumer side never needs the producer, so nothing here is imported until
a producer is actually requested (the local test client, tests).

Usage:
    from infrastructure import MessageProducer

    with MessageProducer() as producer:
        producer.send_one(MessageProducer.create_sample())
"""

from typing import TYPE_CHECKING

# For type checking only - doesn't actually import at runtime
if TYPE_CHECKING:
    from .service_bus import MessageProducer as _MessageProducer
    from .service_bus import BatchResult as _BatchResult


def __getattr__(name: str):
    """Lazy-load infrastructure classes on first access."""
    if name in ("MessageProducer", "BatchResult"):
        from . import service_bus
        return getattr(service_bus, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'MessageProducer',
    'BatchResult',
]
