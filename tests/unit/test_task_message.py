"""
TaskMessage model tests — defaults, aliases, timestamp normalization.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from core.schema import TaskMessage, UNSET_TIMESTAMP


class TestTaskMessageDefaults:

    def test_only_task_id_required(self):
        msg = TaskMessage(task_id="t-1")
        assert msg.task_name == ""
        assert msg.task_type == ""
        assert msg.parameters == {}
        assert msg.created_at == UNSET_TIMESTAMP
        assert msg.created_by == ""
        assert msg.priority == 0

    def test_missing_task_id_rejected(self):
        with pytest.raises(ValidationError):
            TaskMessage(task_type="file-upload")

    def test_empty_task_id_rejected(self):
        with pytest.raises(ValidationError):
            TaskMessage(task_id="")

    def test_none_values_become_defaults(self):
        msg = TaskMessage.model_validate({
            "TaskId": "t-2",
            "TaskName": None,
            "TaskType": None,
            "Parameters": None,
            "CreatedAt": None,
            "CreatedBy": None,
            "Priority": None,
        })
        assert msg.task_type == ""
        assert msg.parameters == {}
        assert msg.created_at == UNSET_TIMESTAMP
        assert msg.priority == 0

    def test_parameters_never_none_after_assignment(self):
        msg = TaskMessage(task_id="t-3", parameters={"a": 1})
        msg.parameters = None
        assert msg.parameters == {}


class TestTaskMessageAliases:

    def test_wire_names_accepted(self, task_message_data):
        msg = TaskMessage.model_validate({
            "TaskId": task_message_data["task_id"],
            "TaskType": task_message_data["task_type"],
            "Priority": task_message_data["priority"],
        })
        assert msg.task_id == task_message_data["task_id"]
        assert msg.task_type == task_message_data["task_type"]
        assert msg.priority == task_message_data["priority"]

    def test_python_names_accepted(self, task_message_data):
        msg = TaskMessage(**task_message_data)
        assert msg.created_by == task_message_data["created_by"]

    def test_dump_by_alias_uses_wire_names(self, task_message):
        dumped = task_message.model_dump(by_alias=True)
        assert set(dumped) == {
            "TaskId", "TaskName", "TaskType", "Parameters",
            "CreatedAt", "CreatedBy", "Priority",
        }

    def test_unknown_keys_ignored(self):
        msg = TaskMessage.model_validate({"TaskId": "t-4", "Extra": "ignored"})
        assert not hasattr(msg, "Extra")


class TestTaskMessageTimestamps:

    def test_naive_timestamp_read_as_utc(self):
        msg = TaskMessage(task_id="t-5", created_at=datetime(2026, 1, 1, 10, 0, 0))
        assert msg.created_at.tzinfo == timezone.utc
        assert msg.created_at.hour == 10

    def test_offset_timestamp_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        msg = TaskMessage(task_id="t-6", created_at=datetime(2026, 1, 1, 10, 0, 0, tzinfo=plus_two))
        assert msg.created_at.tzinfo == timezone.utc
        assert msg.created_at.hour == 8

    def test_iso_string_with_z_suffix(self):
        msg = TaskMessage.model_validate({"TaskId": "t-7", "CreatedAt": "2026-10-19T08:30:00Z"})
        assert msg.created_at == datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


class TestTaskMessageParameters:

    def test_arbitrary_json_values_preserved(self):
        params = {
            "s": "text",
            "i": 3,
            "f": 1.5,
            "b": False,
            "n": None,
            "list": [1, "two", {"three": 3}],
            "map": {"inner": [True, None]},
        }
        msg = TaskMessage(task_id="t-8", parameters=params)
        assert msg.parameters == params

    def test_non_json_value_rejected(self):
        with pytest.raises(ValidationError):
            TaskMessage(task_id="t-9", parameters={"bad": object()})


class TestTaskMessageRouting:

    def test_routing_properties(self, task_message):
        props = task_message.routing_properties()
        assert props == {
            "TaskType": task_message.task_type,
            "Priority": task_message.priority,
            "CreatedBy": task_message.created_by,
        }
