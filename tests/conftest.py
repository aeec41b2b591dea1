from unittest.mock import create_autospec

import pytest

from ventrelay.core import conversation_service
from ventrelay.core.config import get_settings
from ventrelay.core.conversation_service import HttpConversationService


@pytest.fixture(autouse=True)
def fresh_state():
    """Settings cache and the shared transport must not leak between tests."""
    get_settings.cache_clear()
    conversation_service._service = None
    yield
    get_settings.cache_clear()
    conversation_service._service = None


@pytest.fixture
def service():
    """Backend double with the real transport's method signatures."""
    return create_autospec(HttpConversationService, instance=True)
