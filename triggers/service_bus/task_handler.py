# ============================================================================
# SERVICE BUS TASK HANDLER
# ============================================================================
# STATUS: Trigger layer - Task queue message processing
# PURPOSE: Adapt a Functions ServiceBusMessage to TaskDispatcher.handle
# ============================================================================
"""
Task Queue Message Handler Module.

Bridges the Azure Functions Service Bus binding and the TaskDispatcher.

Task Processing Flow:
    1. Log message receipt with broker metadata
    2. Hand body + metadata to TaskDispatcher.handle
    3. Return the DispatchResult -> host completes the message
       Raise -> host abandons the message (redelivery, then dead-letter
       once maxDeliveryCount is reached)

Failures are logged here and re-raised unchanged. Completing a message
whose handler failed would hide the failure from the broker.

Usage:
    from triggers.service_bus import handle_task_queue_message

    @app.service_bus_queue_trigger(
        arg_name="msg",
        queue_name="%SERVICE_BUS_QUEUE_NAME%",
        connection="ServiceBusConnection"
    )
    async def process_task_queue(msg: func.ServiceBusMessage) -> None:
        await handle_task_queue_message(msg, dispatcher, queue_name="task-queue")
"""

import time
from typing import Any, Dict

import azure.functions as func

from core.dispatcher import TaskDispatcher
from core.models import DispatchResult
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "TaskQueueTrigger")


async def handle_task_queue_message(
    msg: func.ServiceBusMessage,
    dispatcher: TaskDispatcher,
    queue_name: str
) -> DispatchResult:
    """
    Process one message from the task queue.

    Args:
        msg: Service Bus message from the Functions binding
        dispatcher: TaskDispatcher shared by all invocations
        queue_name: Queue name for logging

    Returns:
        DispatchResult from the dispatcher

    Raises:
        Exception: Whatever the dispatcher raised, unchanged
    """
    start_time = time.time()
    metadata = _message_metadata(msg, queue_name)

    _log_message_received(metadata)

    try:
        result = await dispatcher.handle(msg.get_body(), metadata)
    except Exception as e:
        elapsed = time.time() - start_time
        logger.error(
            f"[{metadata.get('message_id')}] Task queue message failed after {elapsed:.3f}s: "
            f"{type(e).__name__}: {e} (delivery {metadata.get('delivery_count')}) - "
            f"abandoning for redelivery",
            extra={'custom_dimensions': metadata}
        )
        raise

    logger.info(
        f"[{result.correlation_id}] Message {metadata.get('message_id')} handled "
        f"({result.outcome.value}) in {time.time() - start_time:.3f}s"
    )
    return result


def _message_metadata(msg: func.ServiceBusMessage, queue_name: str) -> Dict[str, Any]:
    """Delivery metadata handed to the dispatcher (logging only)."""
    enqueued = msg.enqueued_time_utc
    return {
        'queue_name': queue_name,
        'message_id': msg.message_id,
        'sequence_number': msg.sequence_number,
        'delivery_count': msg.delivery_count,
        'enqueued_time': enqueued.isoformat() if enqueued else None,
        'content_type': msg.content_type,
    }


def _log_message_received(metadata: Dict[str, Any]) -> None:
    """Log Service Bus message metadata immediately on receipt."""
    logger.info(
        f"SERVICE BUS MESSAGE RECEIVED ({metadata['queue_name']}): "
        f"message_id={metadata['message_id']}, delivery_count={metadata['delivery_count']}",
        extra={
            'checkpoint': 'TRIGGER_RECEIVED',
            'custom_dimensions': metadata
        }
    )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ['handle_task_queue_message']
