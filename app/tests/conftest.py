"""Shared pytest fixtures.

Application modules are importable because ``app`` is on the pytest
pythonpath (see pyproject.toml).
"""

import pytest
import structlog

from api.dependencies.rate_limits import get_limiter
from infrastructure.services import providers


@pytest.fixture(autouse=True)
def clear_provider_caches():
    """Reset application singletons and logging context between tests."""
    yield
    providers.get_translation_service.cache_clear()
    providers.get_message_store.cache_clear()
    providers.get_locale_registry.cache_clear()
    providers.get_settings.cache_clear()
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Rate limit counters are process-wide; start every test at zero."""
    get_limiter().reset()
    yield
