import pytest

from ticketdesk.core.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class ChangeRecorder:
    """Collects the statuses reported by a stepper."""

    def __init__(self):
        self.calls = []

    def __call__(self, status):
        self.calls.append(status)


@pytest.fixture
def recorder():
    return ChangeRecorder()
