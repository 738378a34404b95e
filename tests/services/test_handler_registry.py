"""
Handler registry tests — ALL_HANDLERS, default registry, TaskHandlerRegistry.
"""

import pytest

from services import (
    ALL_HANDLERS,
    FALLBACK_HANDLER,
    FALLBACK_HANDLER_NAME,
    TaskHandlerRegistry,
    build_default_registry,
    handle_text_message,
)
from services.simulated_tasks import (
    handle_data_processing,
    handle_email_notification,
    handle_file_upload,
    handle_generic_task,
    handle_report_generation,
)


async def _noop(task, context):
    return {"success": True}


class TestHandlerRegistry:

    def test_registry_is_non_empty(self):
        assert len(ALL_HANDLERS) > 0

    def test_every_handler_is_callable(self):
        for task_type, handler in ALL_HANDLERS.items():
            assert callable(handler), f"Handler '{task_type}' is not callable"

    def test_keys_are_lower_case(self):
        for task_type in ALL_HANDLERS:
            assert task_type == task_type.lower()

    def test_known_task_types_registered(self):
        assert ALL_HANDLERS == {
            "data-processing": handle_data_processing,
            "file-upload": handle_file_upload,
            "email-notification": handle_email_notification,
            "report-generation": handle_report_generation,
        }

    def test_default_registry_resolves_any_case(self):
        registry = build_default_registry()
        assert registry.resolve("File-Upload") == ("file-upload", handle_file_upload)
        assert registry.resolve("REPORT-GENERATION") == ("report-generation", handle_report_generation)

    def test_default_registry_unknown_type_uses_fallback(self):
        registry = build_default_registry()
        assert registry.resolve("nonexistent_handler_xyz") == (FALLBACK_HANDLER_NAME, FALLBACK_HANDLER)
        assert registry.resolve("")[1] is handle_generic_task
        assert registry.resolve(None)[1] is handle_generic_task

    def test_fallback_not_in_registry(self):
        assert FALLBACK_HANDLER_NAME not in ALL_HANDLERS

    def test_default_registry_matches_all_handlers(self):
        registry = build_default_registry()
        assert registry.task_types == sorted(ALL_HANDLERS)
        assert registry.fallback_name == FALLBACK_HANDLER_NAME

    def test_text_handler_exported(self):
        assert callable(handle_text_message)


class TestTaskHandlerRegistry:

    def test_resolve_normalizes_case(self):
        registry = TaskHandlerRegistry({"Data-Processing": _noop}, fallback=handle_generic_task)
        assert registry.resolve("DATA-processing") == ("data-processing", _noop)
        assert "data-processing" in registry
        assert "DATA-PROCESSING" in registry

    def test_resolve_unknown_returns_fallback(self):
        registry = TaskHandlerRegistry({"a": _noop}, fallback=handle_generic_task)
        assert registry.resolve("b") == ("generic", handle_generic_task)
        assert registry.resolve(None) == ("generic", handle_generic_task)

    def test_is_registered_excludes_fallback(self):
        registry = TaskHandlerRegistry({"a": _noop}, fallback=handle_generic_task)
        assert registry.is_registered("a")
        assert not registry.is_registered("generic")
        assert not registry.is_registered("zzz")

    def test_duplicate_registration_rejected(self):
        registry = TaskHandlerRegistry({"a": _noop}, fallback=handle_generic_task)
        with pytest.raises(ValueError, match="already registered"):
            registry.register("A", _noop)

    def test_fallback_name_cannot_be_registered(self):
        with pytest.raises(ValueError, match="already registered"):
            TaskHandlerRegistry({"generic": _noop}, fallback=handle_generic_task)

    def test_empty_task_type_rejected(self):
        registry = TaskHandlerRegistry({}, fallback=handle_generic_task)
        with pytest.raises(ValueError, match="empty task type"):
            registry.register("", _noop)

    def test_sync_handler_rejected(self):
        def sync_handler(task, context):
            return {"success": True}

        with pytest.raises(ValueError, match="async"):
            TaskHandlerRegistry({"sync": sync_handler}, fallback=handle_generic_task)

    def test_non_callable_rejected(self):
        with pytest.raises(ValueError, match="not callable"):
            TaskHandlerRegistry({"bad": "not a function"}, fallback=handle_generic_task)

    def test_len_counts_registered_types(self):
        registry = TaskHandlerRegistry({"a": _noop, "b": _noop}, fallback=handle_generic_task)
        assert len(registry) == 2
        assert registry.task_types == ["a", "b"]
