# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by codec, dispatcher, producer and test client
# PURPOSE: Exception hierarchy separating contract violations from task failures
# EXPORTS: ContractViolationError, BusinessLogicError, ParseError, HandlerError,
#          ServiceBusError, PublishError, PublishErrorReason, ConfigurationError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues)

How each failure reaches the broker:
    ParseError   -> recovered by the dispatcher (text fallback), message completed
    HandlerError -> propagated, Functions host abandons the message (retry / DLQ)
    PublishError -> propagated to whoever called the producer
"""

from enum import Enum
from typing import Optional


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Task handler returns a list instead of a result dict
        - Task handler result has no boolean 'success' field
        - Registry entry is not callable
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime failures.

    These are normal failures that occur during system operation
    and should be handled gracefully without crashing.
    """
    pass


class ParseError(BusinessLogicError):
    """
    Message payload is not a structurally valid task descriptor.

    Examples:
        - Plain text body ("hello world")
        - JSON that is not an object
        - Object without a TaskId
        - Body that is not valid UTF-8
    """

    def __init__(self, message: str, payload_preview: Optional[str] = None):
        super().__init__(message)
        self.payload_preview = payload_preview


class HandlerError(BusinessLogicError):
    """
    A task handler reported failure.

    Propagates out of the dispatcher so Service Bus applies its
    redelivery and dead-letter policy.
    """

    def __init__(self, task_id: str, task_type: str, reason: str):
        super().__init__(f"Task {task_id} ({task_type or '<none>'}) failed: {reason}")
        self.task_id = task_id
        self.task_type = task_type
        self.reason = reason


class ServiceBusError(BusinessLogicError):
    """
    Service Bus communication failures.

    Examples:
        - Service Bus unavailable
        - Queue not found
        - Message size exceeded
        - Authentication failure
        - Network timeout
    """
    pass


class PublishErrorReason(str, Enum):
    """Why a publish attempt failed."""
    MESSAGE_TOO_LARGE = "MessageTooLarge"
    CONNECTIVITY = "Connectivity"
    AUTHENTICATION = "Authentication"
    SERIALIZATION = "Serialization"


class PublishError(ServiceBusError):
    """
    Producer-side failure. Not retried internally.

    Attributes:
        reason: PublishErrorReason category
        task_id: Task that triggered the failure (when known)
        messages_sent: Messages already published by the failing call
    """

    def __init__(
        self,
        reason: PublishErrorReason,
        message: str,
        task_id: Optional[str] = None,
        messages_sent: int = 0
    ):
        super().__init__(f"[{reason.value}] {message}")
        self.reason = reason
        self.task_id = task_id
        self.messages_sent = messages_sent


class ConfigurationError(Exception):
    """
    System configuration error.

    These are typically fatal and indicate misconfiguration
    that prevents the system from operating.

    Examples:
        - Neither ServiceBusConnection nor SERVICE_BUS_NAMESPACE set
        - Malformed environment values
    """
    pass
