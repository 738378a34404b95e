"""
Service Handler Registry - Explicit Registration (No Decorators!)

All task handlers are registered here explicitly. No decorators, no
auto-discovery, no import magic. If you don't see it in ALL_HANDLERS,
it's not registered - and it will run through the generic fallback.

Registration Process:
1. Create your handler in services/your_module.py (async, see contract below)
2. Import it at the top of this file
3. Add an entry to ALL_HANDLERS: `"task-type": handler_function`

Handler Function Contract (ENFORCED BY TaskDispatcher):
    async def handler(task: TaskMessage, context: HandlerContext) -> Dict[str, Any]:
        '''
        Returns:
            Dict with REQUIRED 'success' field (bool):

            SUCCESS FORMAT:
                {"success": True, "result": {...}}

            FAILURE FORMAT:
                {"success": False, "error": "error message", "error_type": "ValueError"}

        CONTRACT ENFORCEMENT:
            - Missing or non-boolean 'success' -> ContractViolationError
            - success=False -> HandlerError (message retried / dead-lettered)
            - Raised exceptions propagate unchanged (message retried / dead-lettered)
        '''

Task type keys are matched case-insensitively ("Data-Processing" and
"DATA-PROCESSING" both resolve to "data-processing").
"""

from .registry import TaskHandler, TaskHandlerRegistry
from .simulated_tasks import (
    handle_data_processing,
    handle_file_upload,
    handle_email_notification,
    handle_report_generation,
    handle_generic_task,
    handle_text_message,
)

# ============================================================================
# EXPLICIT HANDLER REGISTRY
# ============================================================================

ALL_HANDLERS = {
    "data-processing": handle_data_processing,
    "file-upload": handle_file_upload,
    "email-notification": handle_email_notification,
    "report-generation": handle_report_generation,
}

FALLBACK_HANDLER_NAME = TaskHandlerRegistry.DEFAULT_FALLBACK_NAME
FALLBACK_HANDLER = handle_generic_task


# ============================================================================
# VALIDATION
# ============================================================================

def validate_handler_registry():
    """
    Validate all handlers in registry on startup.

    This catches configuration errors immediately at import time,
    not when a message tries to execute.
    """
    for task_type, handler in ALL_HANDLERS.items():
        if task_type != task_type.lower():
            raise ValueError(f"Task type keys must be lower case, got '{task_type}'")
        if not callable(handler):
            raise ValueError(
                f"Handler for '{task_type}' is not callable. "
                f"Got {type(handler).__name__} instead of function."
            )

    return True


def build_default_registry() -> TaskHandlerRegistry:
    """Fresh registry holding ALL_HANDLERS plus the generic fallback."""
    return TaskHandlerRegistry(
        ALL_HANDLERS,
        fallback=FALLBACK_HANDLER,
        fallback_name=FALLBACK_HANDLER_NAME,
    )


# Validate on import - fail fast if something's wrong.
validate_handler_registry()

__all__ = [
    # Handler registry
    'ALL_HANDLERS',
    'FALLBACK_HANDLER',
    'FALLBACK_HANDLER_NAME',
    'TaskHandler',
    'TaskHandlerRegistry',
    'build_default_registry',
    'validate_handler_registry',
    # Text fallback
    'handle_text_message',
]
