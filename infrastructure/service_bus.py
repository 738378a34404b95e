# ============================================================================
# SERVICE BUS MESSAGE PRODUCER
# ============================================================================
# STATUS: Infrastructure - publishes TaskMessage instances to the task queue
# PURPOSE: Single and batch sends with routing metadata, sample message factory
# DEPENDENCIES: azure-servicebus, azure-identity
# ============================================================================

"""
Service Bus Message Producer

Publishes TaskMessage instances to a Service Bus queue.

Key Features:
- One long-lived ServiceBusClient per producer
- A fresh sender per send call, closed by its context manager on success
  or failure (senders are never shared between calls)
- Routing metadata on every message: message_id=TaskId, subject=TaskType,
  content_type=application/json, application properties TaskType,
  Priority, CreatedBy (broker-side filtering without parsing the body)
- Batch sends split across as many ServiceBusMessageBatch objects as needed;
  every batch is assembled before the first one is sent, so an oversized
  message fails the call with nothing published
- No internal retry: failures surface as PublishError

Authentication:
- Connection string (ServiceBusConnection / ServiceBusConnectionString), or
- Namespace + DefaultAzureCredential (managed identity in Azure)

Exports:
    MessageProducer: Producer class
    BatchResult: Outcome of send_batch
"""

import random
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Tuple

from azure.core.exceptions import ClientAuthenticationError
from azure.identity import DefaultAzureCredential
from azure.servicebus import ServiceBusClient, ServiceBusMessage
from azure.servicebus import exceptions as sb_exceptions

from config import QueueConfig, get_config
from config.defaults import QueueDefaults, SampleDefaults
from core.schema import TaskMessage, TaskMessageCodec
from exceptions import ConfigurationError, PublishError, PublishErrorReason
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "MessageProducer")


@dataclass
class BatchResult:
    """Result of a batch send operation."""
    messages_sent: int
    batch_count: int
    elapsed_ms: float
    message_ids: List[str] = field(default_factory=list)


class MessageProducer:
    """
    Publishes task messages to one Service Bus queue.

    Args:
        client: ServiceBusClient to use (built from config when omitted)
        queue_name: Target queue (config value when omitted)
        config: QueueConfig (get_config().queues when omitted)

    Usage:
        with MessageProducer() as producer:
            producer.send_one(MessageProducer.create_sample("file-upload"))
    """

    def __init__(
        self,
        client: Optional[ServiceBusClient] = None,
        queue_name: Optional[str] = None,
        config: Optional[QueueConfig] = None
    ):
        self.config = config if config is not None else get_config().queues
        self.queue_name = queue_name or self.config.queue_name
        self.max_batch_size = self.config.max_batch_size
        self.time_to_live = timedelta(hours=self.config.message_ttl_hours)
        self._client = client if client is not None else self._create_client(self.config)
        logger.info(
            f"🚌 MessageProducer ready for queue '{self.queue_name}' "
            f"(max_batch_size={self.max_batch_size})"
        )

    @staticmethod
    def _create_client(config: QueueConfig) -> ServiceBusClient:
        """Connection string first (local development), then managed identity."""
        if config.connection_string:
            logger.info("🔑 Using connection string authentication")
            return ServiceBusClient.from_connection_string(config.connection_string)

        namespace = config.fully_qualified_namespace
        if not namespace:
            raise ConfigurationError(
                "Service Bus is not configured. Set ServiceBusConnection (connection string) "
                "or SERVICE_BUS_NAMESPACE (managed identity)."
            )

        logger.info(f"🔐 Using DefaultAzureCredential for namespace: {namespace}")
        return ServiceBusClient(
            fully_qualified_namespace=namespace,
            credential=DefaultAzureCredential()
        )

    # ========================================================================
    # Message construction
    # ========================================================================

    def build_message(self, task: TaskMessage) -> ServiceBusMessage:
        """Encode a TaskMessage and attach transport routing metadata."""
        try:
            body = TaskMessageCodec.encode(task)
        except ValueError as e:
            raise PublishError(
                PublishErrorReason.SERIALIZATION,
                f"Cannot serialize task {task.task_id}: {e}",
                task_id=task.task_id
            ) from e

        return ServiceBusMessage(
            body=body,
            message_id=task.task_id,
            subject=task.task_type,
            content_type=QueueDefaults.CONTENT_TYPE,
            time_to_live=self.time_to_live,
            application_properties=task.routing_properties()
        )

    # ========================================================================
    # Sending
    # ========================================================================

    @log_exceptions(ComponentType.REPOSITORY, "MessageProducer")
    def send_one(self, task: TaskMessage) -> str:
        """
        Publish a single task message.

        Args:
            task: Message to publish

        Returns:
            The Service Bus message id (== task.task_id)

        Raises:
            PublishError: Message too large, authentication or connectivity failure
        """
        sb_message = self.build_message(task)
        logger.debug(f"📤 Sending task {task.task_id} ({task.task_type}) to {self.queue_name}")

        try:
            with self._client.get_queue_sender(self.queue_name) as sender:
                sender.send_messages(sb_message)
        except Exception as e:
            publish_error = _to_publish_error(e, task_id=task.task_id)
            if publish_error is None:
                raise
            raise publish_error from e

        logger.info(f"✅ Message sent successfully: {task.task_id}")
        return task.task_id

    @log_exceptions(ComponentType.REPOSITORY, "MessageProducer")
    def send_batch(self, tasks: Iterable[TaskMessage]) -> BatchResult:
        """
        Publish several task messages using Service Bus batches.

        Messages are packed into as few batches as the size limits allow
        (byte limit from the broker, count limit from max_batch_size).
        No message is ever dropped: a message that does not fit the
        current batch starts a new one.

        Returns:
            BatchResult with counts and timing

        Raises:
            PublishError(MESSAGE_TOO_LARGE): A message does not fit an empty
                batch. Raised before anything is sent.
            PublishError: Authentication or connectivity failure while sending.
                messages_sent says how many went out before the failure.
        """
        tasks = list(tasks)
        start_time = time.time()
        message_ids = [task.task_id for task in tasks]

        if not tasks:
            logger.debug("📦 send_batch called with no messages - nothing to send")
            return BatchResult(messages_sent=0, batch_count=0, elapsed_ms=0.0)

        logger.info(f"📦 Batch sending {len(tasks)} messages to {self.queue_name}")
        messages_sent = 0
        batch_count = 0

        try:
            with self._client.get_queue_sender(self.queue_name) as sender:
                batches = self._pack_batches(sender, tasks)

                for batch, batch_ids in batches:
                    sender.send_messages(batch)
                    messages_sent += len(batch_ids)
                    batch_count += 1
                    logger.debug(
                        f"Batch {batch_count}/{len(batches)} sent "
                        f"({messages_sent}/{len(tasks)} messages)"
                    )
        except PublishError:
            raise
        except Exception as e:
            publish_error = _to_publish_error(e, messages_sent=messages_sent)
            if publish_error is None:
                raise
            raise publish_error from e

        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(
            f"✅ Batch of {messages_sent} messages sent successfully "
            f"in {batch_count} batches, {elapsed_ms:.2f}ms"
        )
        return BatchResult(
            messages_sent=messages_sent,
            batch_count=batch_count,
            elapsed_ms=elapsed_ms,
            message_ids=message_ids
        )

    def _pack_batches(self, sender, tasks: List[TaskMessage]) -> List[Tuple[object, List[str]]]:
        """Split messages into ServiceBusMessageBatch objects. Sends nothing."""
        batches: List[Tuple[object, List[str]]] = []
        current = sender.create_message_batch()
        current_ids: List[str] = []

        for task in tasks:
            sb_message = self.build_message(task)

            if len(current_ids) >= self.max_batch_size:
                batches.append((current, current_ids))
                current = sender.create_message_batch()
                current_ids = []

            try:
                current.add_message(sb_message)
            except sb_exceptions.MessageSizeExceededError as e:
                if not current_ids:
                    raise _too_large(task, e) from e

                # Full batch - close it and retry in a fresh one
                batches.append((current, current_ids))
                current = sender.create_message_batch()
                current_ids = []
                try:
                    current.add_message(sb_message)
                except sb_exceptions.MessageSizeExceededError as retry_error:
                    raise _too_large(task, retry_error) from retry_error

            current_ids.append(task.task_id)

        if current_ids:
            batches.append((current, current_ids))

        return batches

    # ========================================================================
    # Sample messages
    # ========================================================================

    @staticmethod
    def create_sample(
        task_type: str = SampleDefaults.DEFAULT_TASK_TYPE,
        rng: Optional[random.Random] = None,
        created_at: Optional[datetime] = None
    ) -> TaskMessage:
        """
        Build a sample task message for testing.

        Shape is fixed, content is random: fresh id, priority 1-4, the
        standard sample parameters. Passing a seeded rng (and created_at)
        makes the result fully deterministic, id included.
        """
        if rng is None:
            rng = random.Random()
            task_id = str(uuid.uuid4())
        else:
            task_id = str(uuid.UUID(int=rng.getrandbits(128), version=4))

        return TaskMessage(
            task_id=task_id,
            task_name=f"Sample {task_type} task",
            task_type=task_type,
            parameters=dict(SampleDefaults.SAMPLE_PARAMETERS),
            created_at=created_at or datetime.now(timezone.utc),
            created_by=SampleDefaults.SAMPLE_CREATED_BY,
            priority=rng.randint(*SampleDefaults.SAMPLE_PRIORITY),
        )

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def close(self) -> None:
        """Release the Service Bus client connection."""
        logger.debug("🔌 Closing ServiceBusClient")
        self._client.close()

    def __enter__(self) -> 'MessageProducer':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


def _too_large(task: TaskMessage, error: Exception) -> PublishError:
    return PublishError(
        PublishErrorReason.MESSAGE_TOO_LARGE,
        f"Message {task.task_id} is too large for the batch: {error}",
        task_id=task.task_id
    )


def _to_publish_error(
    error: Exception,
    task_id: Optional[str] = None,
    messages_sent: int = 0
) -> Optional[PublishError]:
    """
    Map SDK errors onto PublishError reasons.

    Returns None for errors that are not Service Bus / authentication
    failures; the caller re-raises those unchanged.
    """
    if isinstance(error, sb_exceptions.MessageSizeExceededError):
        reason = PublishErrorReason.MESSAGE_TOO_LARGE
    elif isinstance(error, (
        sb_exceptions.ServiceBusAuthenticationError,
        sb_exceptions.ServiceBusAuthorizationError,
        ClientAuthenticationError,
    )):
        reason = PublishErrorReason.AUTHENTICATION
    elif isinstance(error, sb_exceptions.ServiceBusError):
        reason = PublishErrorReason.CONNECTIVITY
    else:
        return None

    logger.error(f"❌ Publish failed ({reason.value}): {type(error).__name__}: {error}")
    return PublishError(reason, str(error), task_id=task_id, messages_sent=messages_sent)
