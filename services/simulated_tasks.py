"""
Simulated Task Handlers.

Placeholder units of work: each handler sleeps for a bounded duration
and logs a numeric outcome. A real implementation replaces the body of
a handler, never the dispatch contract.

Handler contract:
    async def handler(task: TaskMessage, context: HandlerContext) -> Dict[str, Any]

    SUCCESS FORMAT:
        {"success": True, "result": {...}}

    FAILURE FORMAT:
        {"success": False, "error": "message", "error_type": "SimulatedFailure"}

A task whose parameters contain {"simulateFailure": true} makes its
handler return the failure format after the simulated work.

Exports:
    handle_data_processing, handle_file_upload, handle_email_notification,
    handle_report_generation, handle_generic_task: Task handlers
    handle_text_message: Handler for payloads that are not task descriptors
"""

import asyncio
from typing import Dict, Any

from config.defaults import TaskDefaults
from core.models import HandlerContext
from core.schema import TaskMessage
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "SimulatedTasks")


def _failure_requested(task: TaskMessage) -> bool:
    return task.parameters.get(TaskDefaults.SIMULATE_FAILURE_PARAMETER) is True


def _simulated_failure(task: TaskMessage, label: str) -> Dict[str, Any]:
    return {
        "success": False,
        "error": f"Simulated {label} failure requested by task {task.task_id}",
        "error_type": "SimulatedFailure",
    }


async def handle_data_processing(task: TaskMessage, context: HandlerContext) -> Dict[str, Any]:
    """
    Simulate a data processing run.

    Returns:
        {"success": True, "result": {"records_processed": int}}
    """
    logger.info(f"[{context.correlation_id}] Processing data for task: {task.task_id}")

    await asyncio.sleep(context.scaled(TaskDefaults.DATA_PROCESSING_SECONDS))
    if _failure_requested(task):
        return _simulated_failure(task, "data processing")

    records_processed = context.rng.randint(*TaskDefaults.DATA_PROCESSING_RECORDS)
    logger.info(
        f"[{context.correlation_id}] Data processing completed. Records processed: {records_processed}"
    )
    return {"success": True, "result": {"records_processed": records_processed}}


async def handle_file_upload(task: TaskMessage, context: HandlerContext) -> Dict[str, Any]:
    """
    Simulate a file upload.

    Returns:
        {"success": True, "result": {"file_size_mb": int}}
    """
    logger.info(f"[{context.correlation_id}] Uploading file for task: {task.task_id}")

    await asyncio.sleep(context.scaled(TaskDefaults.FILE_UPLOAD_SECONDS))
    if _failure_requested(task):
        return _simulated_failure(task, "file upload")

    file_size_mb = context.rng.randint(*TaskDefaults.FILE_UPLOAD_SIZE_MB)
    logger.info(f"[{context.correlation_id}] File upload completed. File size: {file_size_mb} MB")
    return {"success": True, "result": {"file_size_mb": file_size_mb}}


async def handle_email_notification(task: TaskMessage, context: HandlerContext) -> Dict[str, Any]:
    """Simulate sending a notification email."""
    logger.info(f"[{context.correlation_id}] Sending email notification for task: {task.task_id}")

    await asyncio.sleep(context.scaled(TaskDefaults.EMAIL_NOTIFICATION_SECONDS))
    if _failure_requested(task):
        return _simulated_failure(task, "email notification")

    logger.info(f"[{context.correlation_id}] Email notification sent successfully")
    return {"success": True, "result": {"notifications_sent": 1}}


async def handle_report_generation(task: TaskMessage, context: HandlerContext) -> Dict[str, Any]:
    """
    Simulate report generation.

    Returns:
        {"success": True, "result": {"page_count": int}}
    """
    logger.info(f"[{context.correlation_id}] Generating report for task: {task.task_id}")

    await asyncio.sleep(context.scaled(TaskDefaults.REPORT_GENERATION_SECONDS))
    if _failure_requested(task):
        return _simulated_failure(task, "report generation")

    page_count = context.rng.randint(*TaskDefaults.REPORT_GENERATION_PAGES)
    logger.info(f"[{context.correlation_id}] Report generation completed. Pages generated: {page_count}")
    return {"success": True, "result": {"page_count": page_count}}


async def handle_generic_task(task: TaskMessage, context: HandlerContext) -> Dict[str, Any]:
    """Fallback for task types with no registered handler (including empty)."""
    logger.info(
        f"[{context.correlation_id}] Executing generic task: {task.task_id} "
        f"(task_type={task.task_type!r})"
    )

    await asyncio.sleep(context.scaled(TaskDefaults.GENERIC_TASK_SECONDS))
    if _failure_requested(task):
        return _simulated_failure(task, "generic task")

    logger.info(f"[{context.correlation_id}] Generic task completed successfully")
    return {"success": True, "result": {"parameter_count": len(task.parameters)}}


async def handle_text_message(text: str, context: HandlerContext) -> Dict[str, Any]:
    """
    Handle a payload that is not a task descriptor.

    Never fails: this path exists so that malformed messages are
    acknowledged instead of cycling through redelivery.
    """
    await asyncio.sleep(context.scaled(TaskDefaults.TEXT_MESSAGE_SECONDS))

    logger.info(f"[{context.correlation_id}] Custom task executed for text message with length {len(text)}")
    return {"success": True, "result": {"length": len(text)}}
