# ============================================================================
# TASK DISPATCHER
# ============================================================================
# STATUS: Core - consumption entry point, one call per delivered message
# PURPOSE: Decode payload, route by task type, report success or propagate failure
# ============================================================================
"""
Task Dispatcher.

The only contract with the broker: `handle(payload, metadata)` either
returns a DispatchResult (complete the message) or raises (abandon it and
let Service Bus redeliver / dead-letter). No internal retry.

Decision table:
    decode -> ParseError         text fallback, success (never fails)
    decode -> None (JSON null)   warning, success, no handler runs
    decode -> TaskMessage        resolve handler (generic fallback), await it
        handler success=True     success
        handler success=False    HandlerError raised
        handler raises           exception propagates unchanged
        bad result shape         ContractViolationError raised
    decode raises anything else  exception propagates unchanged

Log checkpoints (extra={'checkpoint': ...}) in order for a normal task:
    MESSAGE_RECEIVED -> MESSAGE_PARSED -> TASK_DISPATCHED -> TASK_COMPLETED
Other paths: TEXT_FALLBACK, EMPTY_MESSAGE, TASK_FAILED.

Invocations share no mutable state. The registry is read-only after
construction and every invocation gets its own random source. With a
seed, that source is derived from the seed and the task id, so a
message draws the same outcome whatever was handled before it.

Exports:
    TaskDispatcher: Message consumption entry point
"""

import random
import time
import uuid
from dataclasses import replace
from typing import Any, Mapping, Optional

from config import get_config
from core.models import DispatchOutcome, DispatchResult, HandlerContext
from core.schema import TaskMessage, TaskMessageCodec
from core.schema.codec import Payload
from exceptions import ContractViolationError, HandlerError, ParseError
from services import TaskHandlerRegistry, build_default_registry, handle_text_message
from util_logger import LoggerFactory, ComponentType, LogContext

logger = LoggerFactory.create_logger(ComponentType.DISPATCHER, "TaskDispatcher")


class TaskDispatcher:
    """
    Routes one delivered message to its task handler.

    Args:
        registry: Handler table (defaults to services.build_default_registry())
        seed: Makes simulated outcomes reproducible per task id (tests)
        delay_scale: Simulated delay multiplier (defaults to config value)
        text_handler: Handler for payloads that are not task descriptors
    """

    def __init__(
        self,
        registry: Optional[TaskHandlerRegistry] = None,
        seed: Optional[int] = None,
        delay_scale: Optional[float] = None,
        text_handler=None
    ):
        self.registry = registry if registry is not None else build_default_registry()
        self.seed = seed
        self.delay_scale = (
            delay_scale if delay_scale is not None else get_config().simulated_delay_scale
        )
        self.text_handler = text_handler or handle_text_message

    async def handle(
        self,
        payload: Payload,
        metadata: Optional[Mapping[str, Any]] = None
    ) -> DispatchResult:
        """
        Handle one message body.

        Args:
            payload: Raw body (bytes or str)
            metadata: Delivery metadata (message_id, delivery_count, ...);
                only used for logging

        Returns:
            DispatchResult - the message is fully handled

        Raises:
            HandlerError: Handler reported failure
            ContractViolationError: Handler broke the result contract
            Exception: Anything the handler or decoding raised, unchanged
        """
        metadata = dict(metadata or {})
        correlation_id = str(uuid.uuid4())[:8]
        start_time = time.monotonic()

        log_context = LogContext(
            correlation_id=correlation_id,
            message_id=metadata.get('message_id'),
            queue_name=metadata.get('queue_name'),
            delivery_count=metadata.get('delivery_count'),
        )
        context = HandlerContext(
            correlation_id=correlation_id,
            rng=self._new_rng(),
            delay_scale=self.delay_scale,
            message_id=metadata.get('message_id'),
        )

        logger.info(
            f"[{correlation_id}] Message received ({_payload_size(payload)} bytes)",
            extra={
                'checkpoint': 'MESSAGE_RECEIVED',
                'custom_dimensions': log_context.to_dict()
            }
        )

        try:
            try:
                task = TaskMessageCodec.decode(payload)
            except ParseError as e:
                return await self._handle_text(payload, e, context, log_context, start_time)

            if task is None:
                logger.warning(
                    f"[{correlation_id}] Received null or empty task message - nothing to do",
                    extra={
                        'checkpoint': 'EMPTY_MESSAGE',
                        'custom_dimensions': log_context.to_dict()
                    }
                )
                return DispatchResult(
                    outcome=DispatchOutcome.EMPTY_ACKNOWLEDGED,
                    correlation_id=correlation_id,
                    elapsed_ms=_elapsed_ms(start_time),
                )

            return await self._handle_task(task, context, log_context, start_time)

        except Exception as e:
            logger.error(
                f"[{correlation_id}] Error processing message after {_elapsed_ms(start_time):.1f}ms: "
                f"{type(e).__name__}: {e}",
                exc_info=True,
                extra={
                    'checkpoint': 'TASK_FAILED',
                    'custom_dimensions': log_context.to_dict()
                }
            )
            raise

    def _new_rng(self, task_id: Optional[str] = None) -> random.Random:
        """Fresh random source for one invocation."""
        if self.seed is None:
            return random.Random()
        return random.Random(f"{self.seed}:{task_id or ''}")

    async def _handle_task(
        self,
        task: TaskMessage,
        context: HandlerContext,
        log_context: LogContext,
        start_time: float
    ) -> DispatchResult:
        context = replace(context, rng=self._new_rng(task.task_id))
        correlation_id = context.correlation_id
        log_context.task_id = task.task_id
        log_context.task_type = task.task_type

        logger.info(
            f"[{correlation_id}] Processing task: {task.task_id} - {task.task_name}",
            extra={
                'checkpoint': 'MESSAGE_PARSED',
                'custom_dimensions': log_context.to_dict()
            }
        )

        handler_name, handler = self.registry.resolve(task.task_type)
        logger.info(
            f"[{correlation_id}] Dispatching task {task.task_id} "
            f"(task_type={task.task_type!r}) to handler '{handler_name}'",
            extra={
                'checkpoint': 'TASK_DISPATCHED',
                'custom_dimensions': {**log_context.to_dict(), 'handler': handler_name}
            }
        )

        result = await handler(task, context)
        _check_result_contract(handler_name, result)

        if not result['success']:
            raise HandlerError(
                task.task_id,
                task.task_type,
                result.get('error') or f"handler '{handler_name}' reported failure"
            )

        elapsed_ms = _elapsed_ms(start_time)
        logger.info(
            f"[{correlation_id}] Successfully completed task: {task.task_id} in {elapsed_ms:.1f}ms",
            extra={
                'checkpoint': 'TASK_COMPLETED',
                'custom_dimensions': {**log_context.to_dict(), 'handler': handler_name}
            }
        )

        return DispatchResult(
            outcome=DispatchOutcome.COMPLETED,
            correlation_id=correlation_id,
            task_id=task.task_id,
            task_type=task.task_type,
            handler=handler_name,
            result=result.get('result') or {},
            elapsed_ms=elapsed_ms,
        )

    async def _handle_text(
        self,
        payload: Payload,
        parse_error: ParseError,
        context: HandlerContext,
        log_context: LogContext,
        start_time: float
    ) -> DispatchResult:
        text = TaskMessageCodec.to_lenient_text(payload)

        logger.info(
            f"[{context.correlation_id}] Processing non-task message as text ({parse_error})",
            extra={
                'checkpoint': 'TEXT_FALLBACK',
                'custom_dimensions': log_context.to_dict()
            }
        )

        result = await self.text_handler(text, context)

        return DispatchResult(
            outcome=DispatchOutcome.TEXT_FALLBACK,
            correlation_id=context.correlation_id,
            handler="text",
            result=result.get('result') or {},
            elapsed_ms=_elapsed_ms(start_time),
        )


def _check_result_contract(handler_name: str, result: Any) -> None:
    """Handler results must be dicts with a boolean 'success'."""
    if not isinstance(result, dict):
        raise ContractViolationError(
            f"Handler '{handler_name}' returned {type(result).__name__}, expected dict"
        )
    if not isinstance(result.get('success'), bool):
        raise ContractViolationError(
            f"Handler '{handler_name}' result must contain boolean 'success', "
            f"got {result.get('success')!r}"
        )


def _payload_size(payload: Any) -> int:
    if isinstance(payload, str):
        return len(payload.encode('utf-8', errors='replace'))
    try:
        return len(payload)
    except TypeError:
        return 0


def _elapsed_ms(start_time: float) -> float:
    return (time.monotonic() - start_time) * 1000
