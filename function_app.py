"""
Azure Functions entry point for the Service Bus task queue.

Consumes task messages from one Service Bus queue and routes each to a
simulated task handler by its TaskType.

Architecture:
    Producer (local/send_test_messages.py)
        -> Service Bus queue (%SERVICE_BUS_QUEUE_NAME%)
            -> process_task_queue (this module)
                -> TaskDispatcher -> TaskHandlerRegistry -> handler

Settlement:
    - Trigger returns normally -> host completes the message
    - Trigger raises           -> host abandons the message; Service Bus
                                  redelivers until maxDeliveryCount, then
                                  dead-letters it

Exports:
    app: Azure Function App instance
    dispatcher: TaskDispatcher shared by all invocations

Dependencies:
    azure.functions: Azure Functions SDK
    core.dispatcher: TaskDispatcher
    triggers.service_bus: Binding adapter

Environment Variables:
    ServiceBusConnection: Connection string (or ServiceBusConnection__fullyQualifiedNamespace
                          for managed identity) used by the trigger binding
    SERVICE_BUS_QUEUE_NAME: Queue the trigger listens on
    SIMULATED_DELAY_SCALE: Multiplier for simulated handler delays (default 1.0)
    DEBUG_LOGGING / DEBUG_MODE: Enable DEBUG level logging (optional)
    LOG_LEVEL: Default log level when not in debug mode (default INFO)
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.servicebus").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("uamqp").setLevel(logging.WARNING)

# ========================================================================
# APPLICATION IMPORTS - Our modules
# ========================================================================
# Handlers are registered explicitly in services/__init__.py (ALL_HANDLERS),
# validated on import. No decorators, no auto-discovery.
from config import get_config
from config.defaults import QueueDefaults
from core.dispatcher import TaskDispatcher
from services import ALL_HANDLERS
from triggers.service_bus import handle_task_queue_message
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")

_config = get_config()
LoggerFactory.set_default_level(_config.effective_log_level)

# One dispatcher per worker process. It holds no per-message state, so
# concurrent invocations share it safely.
dispatcher = TaskDispatcher()

logger.info(
    f"Task queue function app loaded: queue={_config.queues.queue_name}, "
    f"handlers={sorted(ALL_HANDLERS)}, delay_scale={_config.simulated_delay_scale}"
)

app = func.FunctionApp()


# ============================================================================
# SERVICE BUS TRIGGERS
# ============================================================================

@app.service_bus_queue_trigger(
    arg_name="msg",
    queue_name="%SERVICE_BUS_QUEUE_NAME%",
    connection=QueueDefaults.CONNECTION_SETTING
)
async def process_task_queue(msg: func.ServiceBusMessage) -> None:
    """
    Process one task message from the task queue.

    Parse failures are handled as plain text and still complete the
    message. Handler failures raise so the host abandons the message.
    """
    await handle_task_queue_message(msg, dispatcher, queue_name=_config.queues.queue_name)
