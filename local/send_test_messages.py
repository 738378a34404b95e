#!/usr/bin/env python3
"""
Service Bus Test Client

Interactive menu that publishes sample task messages to the task queue so
the function app has something to consume.

Options:
    1. Send a single test message (random task type)
    2. Send multiple test messages (1-10, one batch send)
    3. Send a custom message (name, type, priority)
    4. Exit

Environment:
    ServiceBusConnectionString (or ServiceBusConnection): connection string
    SERVICE_BUS_NAMESPACE: namespace for DefaultAzureCredential instead
    QueueName (or SERVICE_BUS_QUEUE_NAME): queue, default task-queue

Usage:
    python -m local.send_test_messages
"""

import os
import random
import sys
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from config import QueueConfig
from config.defaults import QueueDefaults, SampleDefaults
from core.schema import TaskMessage
from exceptions import ConfigurationError, PublishError, PublishErrorReason
from infrastructure import MessageProducer

REMEDIATION_HINTS = {
    PublishErrorReason.MESSAGE_TOO_LARGE: [
        "Reduce the size of the task parameters",
        "Send fewer messages per batch",
    ],
    PublishErrorReason.AUTHENTICATION: [
        "Check the SharedAccessKey in the connection string",
        "For managed identity, grant 'Azure Service Bus Data Sender' on the namespace",
    ],
    PublishErrorReason.CONNECTIVITY: [
        "Ensure the Service Bus connection string is correct",
        "Verify the queue exists in your Service Bus namespace",
        "Check your network connectivity to Azure",
    ],
    PublishErrorReason.SERIALIZATION: [
        "Task parameters must be JSON values (str, number, bool, null, list, object)",
    ],
}


# ============================================================================
# Configuration
# ============================================================================

def load_client_config() -> QueueConfig:
    """
    Queue settings for the test client.

    ServiceBusConnectionString wins over ServiceBusConnection. With no
    connection string and no namespace the documented placeholder is used,
    so the menu still starts and the first send reports the problem.
    """
    config = QueueConfig.from_environment()
    connection_string = os.environ.get("ServiceBusConnectionString") or config.connection_string

    if not connection_string and not config.namespace:
        connection_string = QueueDefaults.PLACEHOLDER_CONNECTION_STRING

    return config.model_copy(update={'connection_string': connection_string})


# ============================================================================
# Message construction
# ============================================================================

def parse_task_type_choice(choice: Optional[str]) -> str:
    """Menu number (1-4) -> known task type; anything else is used verbatim."""
    choice = (choice or "").strip()
    if choice.isdigit() and 1 <= int(choice) <= len(SampleDefaults.TASK_TYPES):
        return SampleDefaults.TASK_TYPES[int(choice) - 1]
    return choice or "custom"


def parse_priority(value: Optional[str]) -> int:
    """Priority 1-5; blank or out of range gives the default (3)."""
    low, high = SampleDefaults.CUSTOM_PRIORITY_RANGE
    try:
        priority = int((value or "").strip())
    except ValueError:
        return SampleDefaults.CUSTOM_PRIORITY_DEFAULT
    if low <= priority <= high:
        return priority
    return SampleDefaults.CUSTOM_PRIORITY_DEFAULT


def create_custom_message(
    task_name: Optional[str],
    task_type: str,
    priority: int,
    now: Optional[datetime] = None
) -> TaskMessage:
    """Build a hand-entered task message."""
    now = now or datetime.now(timezone.utc)
    return TaskMessage(
        task_id=str(uuid.uuid4()),
        task_name=(task_name or "").strip() or "Custom Task",
        task_type=task_type,
        created_at=now,
        created_by=SampleDefaults.CUSTOM_CREATED_BY,
        priority=priority,
        parameters={
            "customParam": "Custom parameter value",
            "timestamp": now.strftime("%Y-%m-%d %H:%M:%S"),
        },
    )


# ============================================================================
# Menu actions
# ============================================================================

def send_single_message(producer: MessageProducer, rng: random.Random) -> None:
    task_type = rng.choice(SampleDefaults.TASK_TYPES)
    message = MessageProducer.create_sample(task_type, rng=rng)

    print(f"📤 Sending message with Task ID: {message.task_id}")
    print(f"   Task Type: {message.task_type}")
    print(f"   Task Name: {message.task_name}")

    producer.send_one(message)
    print("✅ Message sent successfully!")


def send_multiple_messages(
    producer: MessageProducer,
    rng: random.Random,
    input_fn: Callable[[str], str] = input
) -> None:
    raw = input_fn(f"Enter number of messages to send (1-{SampleDefaults.MAX_BATCH_MESSAGES}): ")
    try:
        count = int(raw.strip())
    except ValueError:
        count = 0
    if not 1 <= count <= SampleDefaults.MAX_BATCH_MESSAGES:
        print(f"❌ Invalid number. Please enter a number between 1 and {SampleDefaults.MAX_BATCH_MESSAGES}.")
        return

    messages = []
    for i in range(count):
        message = MessageProducer.create_sample(rng.choice(SampleDefaults.TASK_TYPES), rng=rng)
        message.task_name = f"Batch task {i + 1}"
        messages.append(message)

    print(f"📤 Sending {count} messages...")
    result = producer.send_batch(messages)

    print(f"✅ All messages sent successfully! ({result.batch_count} batch(es), {result.elapsed_ms:.0f}ms)")
    print("📋 Messages sent:")
    for message in messages:
        print(f"   - {message.task_id}: {message.task_type} ({message.task_name})")


def send_custom_message(
    producer: MessageProducer,
    input_fn: Callable[[str], str] = input
) -> None:
    print("📝 Create custom message:")
    task_name = input_fn("Task Name: ")

    print("Available task types:")
    for i, task_type in enumerate(SampleDefaults.TASK_TYPES, 1):
        print(f"   {i}. {task_type}")
    task_type = parse_task_type_choice(
        input_fn(f"Select task type (1-{len(SampleDefaults.TASK_TYPES)}) or enter custom: ")
    )
    priority = parse_priority(input_fn("Priority (1-5, default 3): "))

    message = create_custom_message(task_name, task_type, priority)

    print("📤 Sending custom message:")
    print(f"   Task ID: {message.task_id}")
    print(f"   Task Type: {message.task_type}")
    print(f"   Task Name: {message.task_name}")
    print(f"   Priority: {message.priority}")

    producer.send_one(message)
    print("✅ Custom message sent successfully!")


def report_publish_error(error: PublishError) -> None:
    print(f"❌ Error: {error}")
    print()
    print("💡 Troubleshooting tips:")
    for hint in REMEDIATION_HINTS.get(error.reason, []):
        print(f"   - {hint}")


# ============================================================================
# Menu loop
# ============================================================================

def run_menu(
    producer: MessageProducer,
    input_fn: Callable[[str], str] = input,
    rng: Optional[random.Random] = None
) -> None:
    """
    Run the menu until the user exits (or input ends).

    A failed send is reported and the menu keeps running.
    """
    rng = rng or random.Random()

    while True:
        print()
        print("Choose an option:")
        print("1. Send a single test message")
        print("2. Send multiple test messages")
        print("3. Send custom message")
        print("4. Exit")

        try:
            choice = input_fn("Enter your choice (1-4): ").strip()
        except EOFError:
            print("👋 Goodbye!")
            return

        try:
            if choice == "1":
                send_single_message(producer, rng)
            elif choice == "2":
                send_multiple_messages(producer, rng, input_fn)
            elif choice == "3":
                send_custom_message(producer, input_fn)
            elif choice == "4":
                print("👋 Goodbye!")
                return
            else:
                print("❌ Invalid choice. Please try again.")
        except PublishError as e:
            report_publish_error(e)


def main() -> int:
    print("🧪 Service Bus Function Test Client")
    print("====================================")

    config = load_client_config()

    if config.has_placeholder_connection():
        print("⚠️  Please update the Service Bus connection string in local.settings.json or environment variables")
        print("   Current connection string appears to be a placeholder.")
        print()

    try:
        producer = MessageProducer(config=config)
    except (ConfigurationError, ValueError) as e:
        print(f"❌ Error: {e}")
        print()
        print("💡 Set ServiceBusConnectionString or SERVICE_BUS_NAMESPACE and try again")
        return 1

    with producer:
        run_menu(producer)
    return 0


if __name__ == "__main__":
    sys.exit(main())
