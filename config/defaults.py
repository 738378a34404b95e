"""
Configuration Defaults - Single source of truth for all default values.

Organization:
    - QueueDefaults: Service Bus queue name, batch limits, placeholder detection
    - AppDefaults: Environment, logging, debug mode
    - TaskDefaults: Simulated handler durations and outcome ranges
    - SampleDefaults: Sample/custom message content for the test client

Usage:
    from config.defaults import QueueDefaults

    # In Pydantic Field definitions:
    queue_name: str = Field(default=QueueDefaults.QUEUE_NAME, ...)
"""


# =============================================================================
# SERVICE BUS QUEUE DEFAULTS
# =============================================================================

class QueueDefaults:
    """
    Service Bus queue defaults.

    One queue carries every task type; the dispatcher routes by TaskType
    after delivery, not the broker.
    """

    QUEUE_NAME = "task-queue"

    # Connection setting name used by the Functions trigger binding
    CONNECTION_SETTING = "ServiceBusConnection"

    # Service Bus caps a batch at 100 messages regardless of byte size
    MAX_BATCH_SIZE = 100

    # Message TTL applied by the producer (hours)
    MESSAGE_TTL_HOURS = 24

    # Shipped in local.settings.example.json - means "not configured yet"
    PLACEHOLDER_NAMESPACE = "your-servicebus-namespace"
    PLACEHOLDER_CONNECTION_STRING = (
        "Endpoint=sb://your-servicebus-namespace.servicebus.windows.net/;"
        "SharedAccessKeyName=RootManageSharedAccessKey;"
        "SharedAccessKey=your-shared-access-key"
    )

    CONTENT_TYPE = "application/json"


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """
    Application-wide defaults.

    Controls debug mode, logging and the simulated workload speed.
    """

    DEBUG_MODE = False
    ENVIRONMENT = "dev"
    LOG_LEVEL = "INFO"

    # Multiplier applied to every simulated handler delay (0 = no sleeping)
    SIMULATED_DELAY_SCALE = 1.0


# =============================================================================
# SIMULATED TASK DEFAULTS
# =============================================================================

class TaskDefaults:
    """
    Simulated handler timings (seconds) and outcome ranges.

    Ranges are inclusive on both ends.
    """

    DATA_PROCESSING_SECONDS = 2.0
    DATA_PROCESSING_RECORDS = (100, 999)

    FILE_UPLOAD_SECONDS = 3.0
    FILE_UPLOAD_SIZE_MB = (1, 99)

    EMAIL_NOTIFICATION_SECONDS = 0.5

    REPORT_GENERATION_SECONDS = 5.0
    REPORT_GENERATION_PAGES = (10, 99)

    GENERIC_TASK_SECONDS = 1.0
    TEXT_MESSAGE_SECONDS = 0.5

    # Parameter that makes a simulated handler report failure
    SIMULATE_FAILURE_PARAMETER = "simulateFailure"


# =============================================================================
# SAMPLE MESSAGE DEFAULTS (test client)
# =============================================================================

class SampleDefaults:
    """Content of generated sample and custom messages."""

    TASK_TYPES = (
        "data-processing",
        "file-upload",
        "email-notification",
        "report-generation",
    )

    DEFAULT_TASK_TYPE = "data-processing"

    SAMPLE_CREATED_BY = "system"
    CUSTOM_CREATED_BY = "test-client"

    # Inclusive range for randomized sample priority
    SAMPLE_PRIORITY = (1, 4)

    CUSTOM_PRIORITY_RANGE = (1, 5)
    CUSTOM_PRIORITY_DEFAULT = 3

    SAMPLE_PARAMETERS = {
        "inputPath": "/data/input",
        "outputPath": "/data/output",
        "timeout": 300,
    }

    MAX_BATCH_MESSAGES = 10
