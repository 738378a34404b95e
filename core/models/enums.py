"""
Pure Enumeration Types for Core Framework.

No business logic - pure type definitions only.

Exports:
    DispatchOutcome: How the dispatcher disposed of one delivered message
"""

from enum import Enum


class DispatchOutcome(Enum):
    """
    Successful dispatch outcomes.

    Every value means the message is safe to complete on the broker.
    Failures are not an outcome - they propagate as exceptions.

    - COMPLETED: Parsed TaskMessage, handler ran and reported success
    - TEXT_FALLBACK: Payload was not a task descriptor, handled as plain text
    - EMPTY_ACKNOWLEDGED: Payload was JSON null, nothing to do
    """

    COMPLETED = "completed"
    TEXT_FALLBACK = "text_fallback"
    EMPTY_ACKNOWLEDGED = "empty_acknowledged"
