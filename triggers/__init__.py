"""
Triggers Package.

Azure Functions trigger implementations.

Service Bus:
    task queue (%SERVICE_BUS_QUEUE_NAME%): triggers.service_bus.handle_task_queue_message

Trigger functions should be imported directly from their modules.
"""
