"""
Handler Execution Context.

Per-invocation values passed from the dispatcher to a task handler.
Nothing in here is shared between invocations: the dispatcher builds
a new random source for every message, and delay_scale/correlation_id
are plain values.

Exports:
    HandlerContext: Context handed to every task handler
"""

import random
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class HandlerContext:
    """
    Context for one handler invocation.

    Attributes:
        correlation_id: 8-char id used as log prefix for this delivery
        rng: This invocation's random source for simulated outcomes
        delay_scale: Multiplier for simulated durations (0 = no sleep)
        message_id: Service Bus message id, when the host supplied one
    """
    correlation_id: str
    rng: random.Random = field(default_factory=random.Random)
    delay_scale: float = 1.0
    message_id: Optional[str] = None

    def scaled(self, seconds: float) -> float:
        """Simulated duration after applying delay_scale."""
        return max(0.0, seconds * self.delay_scale)
