"""
Unit test fixtures — factory-built messages.
"""

import pytest

from tests.factories.model_factories import make_task_message, make_task_message_data


@pytest.fixture
def task_message_data():
    """Return randomized TaskMessage field values."""
    return make_task_message_data()


@pytest.fixture
def task_message():
    """Return a randomized TaskMessage."""
    return make_task_message()
