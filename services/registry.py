"""
Task Handler Registry - Case-Insensitive Routing Table.

Maps a normalized task type (lower case) to an async handler, with one
fallback handler for everything else. Built once at startup; after that
it is only read, so concurrent dispatches can share one instance.

Usage:
    registry = TaskHandlerRegistry(
        {"data-processing": handle_data_processing},
        fallback=handle_generic_task,
    )
    name, handler = registry.resolve("Data-Processing")   # ("data-processing", handle_data_processing)
    name, handler = registry.resolve("unknown-xyz")       # ("generic", handle_generic_task)

Exports:
    TaskHandler: Handler callable type
    TaskHandlerRegistry: Routing table
"""

import inspect
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from core.models import HandlerContext
from core.schema import TaskMessage

TaskHandler = Callable[[TaskMessage, HandlerContext], Awaitable[Dict[str, Any]]]


class TaskHandlerRegistry:
    """Explicit task type -> handler table with a fallback."""

    DEFAULT_FALLBACK_NAME = "generic"

    def __init__(
        self,
        handlers: Mapping[str, TaskHandler],
        fallback: TaskHandler,
        fallback_name: str = DEFAULT_FALLBACK_NAME
    ):
        self._check_handler(fallback_name, fallback)
        self._fallback_name = fallback_name
        self._fallback = fallback
        self._handlers: Dict[str, TaskHandler] = {}
        for task_type, handler in handlers.items():
            self.register(task_type, handler)

    @staticmethod
    def normalize(task_type: Optional[str]) -> str:
        """Lower-case routing key; None and "" both become ""."""
        return (task_type or "").lower()

    @staticmethod
    def _check_handler(task_type: str, handler: Any) -> None:
        if not callable(handler):
            raise ValueError(
                f"Handler for '{task_type}' is not callable. "
                f"Got {type(handler).__name__} instead of function."
            )
        if not inspect.iscoroutinefunction(handler):
            raise ValueError(
                f"Handler for '{task_type}' must be an async function "
                f"(got {getattr(handler, '__name__', type(handler).__name__)})"
            )

    def register(self, task_type: str, handler: TaskHandler) -> None:
        """
        Add a handler.

        Raises:
            ValueError: Empty task type, duplicate task type, or a
                handler that is not an async callable
        """
        key = self.normalize(task_type)
        if not key:
            raise ValueError("Cannot register a handler for an empty task type")
        if key == self._fallback_name or key in self._handlers:
            raise ValueError(f"Handler already registered for task type '{key}'")
        self._check_handler(key, handler)
        self._handlers[key] = handler

    def resolve(self, task_type: Optional[str]) -> Tuple[str, TaskHandler]:
        """
        Find the handler for a task type.

        Returns:
            (registry name, handler) - the fallback for unknown types
        """
        key = self.normalize(task_type)
        handler = self._handlers.get(key)
        if handler is None:
            return self._fallback_name, self._fallback
        return key, handler

    def is_registered(self, task_type: Optional[str]) -> bool:
        """True when the task type has its own handler (not the fallback)."""
        return self.normalize(task_type) in self._handlers

    @property
    def fallback_name(self) -> str:
        return self._fallback_name

    @property
    def task_types(self) -> List[str]:
        """Registered task types, sorted."""
        return sorted(self._handlers)

    def __contains__(self, task_type: object) -> bool:
        return isinstance(task_type, str) and self.is_registered(task_type)

    def __len__(self) -> int:
        return len(self._handlers)
