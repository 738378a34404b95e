"""
Queue Message Schemas - Transport Boundary.

Message format carried on the Service Bus task queue.

Wire format (JSON, PascalCase keys):
    {
        "TaskId": "3f0c...",
        "TaskName": "Sample data-processing task",
        "TaskType": "data-processing",
        "Parameters": {"inputPath": "/data/input", "timeout": 300},
        "CreatedAt": "2026-10-19T08:30:00Z",
        "CreatedBy": "system",
        "Priority": 2
    }

Python code uses the snake_case field names; the aliases exist only
for the wire. Both are accepted on input.

Exports:
    TaskMessage: Task descriptor for queue transport
    UNSET_TIMESTAMP: Value of created_at when the payload omits CreatedAt
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator


# Stand-in for a missing CreatedAt (the minimum representable UTC instant)
UNSET_TIMESTAMP = datetime.min.replace(tzinfo=timezone.utc)


class TaskMessage(BaseModel):
    """
    Task queue message.

    Exists for the duration of one handling attempt only; it is not
    persisted. Only TaskId is mandatory on the wire, every other field
    falls back to an empty/zero default.

    Attributes:
        task_id: Globally unique id, assigned by the producer
        task_name: Human-readable label (non-normative)
        task_type: Routing key, matched case-insensitively
        parameters: Open JSON mapping, never None
        created_at: UTC creation time
        created_by: Originator identity
        priority: Metadata only, no enforced range
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra='ignore',
        validate_assignment=True,
    )

    task_id: str = Field(..., alias="TaskId", min_length=1)
    task_name: str = Field(default="", alias="TaskName")
    task_type: str = Field(default="", alias="TaskType")
    parameters: Dict[str, JsonValue] = Field(default_factory=dict, alias="Parameters")
    created_at: datetime = Field(default=UNSET_TIMESTAMP, alias="CreatedAt")
    created_by: str = Field(default="", alias="CreatedBy")
    priority: int = Field(default=0, alias="Priority")

    @field_validator('task_name', 'task_type', 'created_by', mode='before')
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator('parameters', mode='before')
    @classmethod
    def _parameters_never_absent(cls, v):
        return {} if v is None else v

    @field_validator('priority', mode='before')
    @classmethod
    def _priority_default(cls, v):
        return 0 if v is None else v

    @field_validator('created_at', mode='before')
    @classmethod
    def _created_at_default(cls, v):
        return UNSET_TIMESTAMP if v is None else v

    @field_validator('created_at')
    @classmethod
    def _created_at_utc(cls, v: datetime) -> datetime:
        # Naive timestamps are read as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    def routing_properties(self) -> Dict[str, Any]:
        """Application properties mirrored onto the Service Bus message."""
        return {
            "TaskType": self.task_type,
            "Priority": self.priority,
            "CreatedBy": self.created_by,
        }
