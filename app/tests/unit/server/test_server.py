"""Unit tests for server.server module."""

import pytest
from fastapi.testclient import TestClient

from server import server


@pytest.mark.unit
def test_handler_is_fastapi_app():
    """Test that handler is a properly initialized FastAPI app."""
    assert server.handler is not None
    assert hasattr(server.handler, "routes")
    assert hasattr(server.handler, "user_middleware")
    assert hasattr(server.handler, "dependency_overrides")


@pytest.mark.unit
def test_cors_middleware_configured():
    """Test that CORS middleware is present in the server."""
    middleware_classes = [m.cls.__name__ for m in server.handler.user_middleware]
    assert "CORSMiddleware" in middleware_classes


@pytest.mark.unit
def test_locale_middleware_configured():
    """Locale negotiation wraps every request."""
    middleware = {m.cls.__name__: m for m in server.handler.user_middleware}

    assert "LocaleMiddleware" in middleware
    options = middleware["LocaleMiddleware"].kwargs
    assert options["cookie_name"] == server.settings.i18n.COOKIE_NAME
    assert "/api" in options["excluded_prefixes"]


@pytest.mark.unit
def test_rate_limiter_attached():
    """The shared limiter is registered on the app state."""
    assert server.handler.state.limiter is server.limiter


@pytest.mark.unit
def test_api_router_included():
    """System, v1 and page routes are all mounted."""
    paths = server.handler.openapi()["paths"]

    assert "/health" in paths
    assert "/version" in paths
    assert "/api/v1/i18n/locales" in paths
    assert "/api/v1/i18n/{locale}/messages" in paths
    assert "/{locale}" in paths
    assert "/{locale}/{page_path}" in paths


@pytest.mark.unit
def test_page_routes_do_not_shadow_api_routes():
    """Catch-all page routes never answer for API paths."""
    client = TestClient(server.handler)

    response = client.get("/api/v1/i18n/locales")

    assert response.status_code == 200
    assert "default_locale" in response.json()
    assert client.get("/api/v1/unknown").status_code == 404
