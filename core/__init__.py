"""
Core Message Processing Components.

Contains the building blocks for consuming task messages, separated
from the Azure Functions trigger and from the task handlers themselves.

Structure:
    models/: Pure data structures (no business logic)
    schema/: Queue message schema and JSON codec
    dispatcher.py: TaskDispatcher consumption entry point

Exports:
    TaskDispatcher: Message consumption entry point
"""

# Make subpackages available first (no circular dependencies)
from . import models
from . import schema

# Lazy imports to avoid circular dependencies (dispatcher imports services,
# services import core.models / core.schema)
_LAZY_IMPORTS = {
    'TaskDispatcher': '.dispatcher',
}

def __getattr__(name):
    """Lazy import core classes to avoid circular dependencies."""
    if name in _LAZY_IMPORTS:
        from importlib import import_module
        module = import_module(_LAZY_IMPORTS[name], package='core')
        return getattr(module, name)
    raise AttributeError(f"module 'core' has no attribute '{name}'")

__all__ = [
    'TaskDispatcher',
    'models',
    'schema'
]
