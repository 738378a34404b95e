"""
Core Message Schema Package.

Exports:
    TaskMessage, UNSET_TIMESTAMP: Queue message schema
    TaskMessageCodec: JSON codec for TaskMessage
"""

from .queue import TaskMessage, UNSET_TIMESTAMP
from .codec import TaskMessageCodec

__all__ = [
    'TaskMessage',
    'UNSET_TIMESTAMP',
    'TaskMessageCodec',
]
