"""
Execution Result Data Models.

No business logic - pure data structures.

Exports:
    DispatchResult: What the dispatcher reports back to the trigger
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field

from .enums import DispatchOutcome


class DispatchResult(BaseModel):
    """
    Result of handling one delivered message.

    Only produced on success - a returned DispatchResult means the
    message can be completed. Failures propagate as exceptions instead.
    """

    outcome: DispatchOutcome = Field(..., description="How the message was disposed of")
    correlation_id: str = Field(..., description="Per-invocation correlation id")
    task_id: Optional[str] = Field(default=None, description="TaskId, when the payload parsed")
    task_type: Optional[str] = Field(default=None, description="TaskType as received")
    handler: Optional[str] = Field(default=None, description="Registry name of the handler that ran")
    result: Dict[str, Any] = Field(default_factory=dict, description="Handler result payload")
    elapsed_ms: float = Field(default=0.0, ge=0.0, description="Wall time spent in the dispatcher")
