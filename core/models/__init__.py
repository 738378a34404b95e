"""
Core Data Models Package.

Contains pure data structures without business logic.

Exports:
    DispatchOutcome: Dispatch outcome enum
    HandlerContext: Per-invocation handler context
    DispatchResult: Dispatcher result
"""

from .enums import DispatchOutcome
from .context import HandlerContext
from .results import DispatchResult

__all__ = [
    'DispatchOutcome',
    'HandlerContext',
    'DispatchResult',
]
