# ============================================================================
# SERVICE BUS HANDLERS MODULE
# ============================================================================
# STATUS: Trigger layer - Service Bus message handling
# PURPOSE: Handlers for Service Bus queue triggers
# ============================================================================
"""
Service Bus Handlers Module.

Usage in function_app.py:
    from triggers.service_bus import handle_task_queue_message

Exports:
    handle_task_queue_message: Task queue handler
"""

from .task_handler import handle_task_queue_message

__all__ = [
    'handle_task_queue_message',
]
