"""Fixtures for server module unit tests."""

import pytest
from fastapi import APIRouter, Request

from tests.factories.i18n import make_registry
from utils.tests import create_localized_test_app


@pytest.fixture
def echo_router():
    """Router that reports what the middleware left on the request."""
    router = APIRouter()

    @router.get("/{full_path:path}")
    def echo(request: Request, full_path: str):
        return {
            "path": f"/{full_path}",
            "locale": getattr(request.state, "locale", None),
        }

    return router


@pytest.fixture
def middleware_app(echo_router):
    """Echo app behind LocaleMiddleware over the en/fr/ar registry."""
    return create_localized_test_app(
        echo_router,
        registry=make_registry(),
        excluded_prefixes=["/api", "/health"],
    )
