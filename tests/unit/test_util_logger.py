"""
Logging tests — JSON formatting, custom dimensions, exception decorator.
"""

import json
import logging
import sys

import pytest

from util_logger import (
    ComponentConfig,
    ComponentType,
    JSONFormatter,
    LogContext,
    LoggerFactory,
    LogLevel,
    log_exceptions,
)


@pytest.fixture
def restore_default_level():
    previous = LoggerFactory._default_level
    yield
    LoggerFactory.set_default_level(previous)


class TestJSONFormatter:

    def test_checkpoint_and_dimensions_emitted(self):
        record = logging.LogRecord("dispatcher.Test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
        record.checkpoint = "MESSAGE_RECEIVED"
        record.custom_dimensions = {"task_id": "t-1"}

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["checkpoint"] == "MESSAGE_RECEIVED"
        assert data["customDimensions"] == {"task_id": "t-1"}

    def test_exception_details_emitted(self):
        try:
            raise ValueError("bad value")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        data = json.loads(JSONFormatter().format(record))

        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad value"


class TestLoggerFactory:

    def test_logger_name_is_hierarchical(self):
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "NameTest")
        assert logger.name == "service.NameTest"

    def test_single_json_handler_when_created_twice(self):
        LoggerFactory.create_logger(ComponentType.SERVICE, "Twice")
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "Twice")
        json_handlers = [h for h in logger.handlers if isinstance(h.formatter, JSONFormatter)]
        assert len(json_handlers) == 1

    def test_component_dimensions_injected(self, caplog):
        caplog.set_level(logging.INFO)
        logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "DimsTest")

        logger.info("hi", extra={"custom_dimensions": {"queue_name": "q"}})

        record = [r for r in caplog.records if r.name == "trigger.DimsTest"][0]
        assert record.custom_dimensions == {
            "component_type": "trigger",
            "component_name": "DimsTest",
            "queue_name": "q",
        }

    def test_set_default_level_relevels_existing_loggers(self, restore_default_level):
        service_logger = LoggerFactory.create_logger(ComponentType.SERVICE, "LevelTest")
        repository_logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "LevelTest")

        assert LoggerFactory.set_default_level("warning") is LogLevel.WARNING

        assert service_logger.level == logging.WARNING
        assert LoggerFactory.create_logger(ComponentType.TRIGGER, "LevelTestNew").level == logging.WARNING
        assert repository_logger.level == logging.DEBUG

    def test_custom_config_not_relevelled(self, restore_default_level):
        custom = ComponentConfig(component_type=ComponentType.SERVICE, log_level=LogLevel.ERROR)
        logger = LoggerFactory.create_logger(ComponentType.SERVICE, "CustomLevelTest", config=custom)

        LoggerFactory.set_default_level(LogLevel.DEBUG)

        assert logger.level == logging.ERROR

    def test_log_level_from_string(self):
        assert LogLevel.from_string("warning") is LogLevel.WARNING
        assert LogLevel.WARNING.to_python_level() == logging.WARNING


class TestLogContext:

    def test_to_dict_drops_unset_fields(self):
        context = LogContext(task_id="t-1", correlation_id="abcd1234")
        assert context.to_dict() == {"task_id": "t-1", "correlation_id": "abcd1234"}


class TestLogExceptions:

    def test_exception_logged_and_reraised(self, caplog):
        caplog.set_level(logging.ERROR)
        logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "DecoratorTest")

        @log_exceptions(logger=logger)
        def fails():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            fails()

        record = [r for r in caplog.records if r.name == "repository.DecoratorTest"][0]
        assert record.custom_dimensions["exception_type"] == "KeyError"
        assert record.custom_dimensions["function_name"] == "fails"

    def test_return_value_passed_through(self):
        @log_exceptions(ComponentType.REPOSITORY, "DecoratorTest")
        def works(x):
            return x * 2

        assert works(21) == 42
