from typing import Any, Callable, Optional

import httpx
from fastapi import FastAPI

from infrastructure.i18n.registry import LocaleRegistry


def create_test_app(
    routers,
    middlewares=None,
    dependency_overrides: Optional[dict[Callable, Callable]] = None,
) -> FastAPI:
    """
    Create a FastAPI test application with the given routers and middlewares.

    Args:
        routers: A router or list of routers to include in the app.
        middlewares: Optional list of (middleware_class, config_dict) tuples.
        dependency_overrides: Optional provider -> replacement mapping.

    Returns:
        FastAPI: A configured FastAPI application.

    Example:
        app = create_test_app(
            [router1, router2],
            middlewares=[(MiddlewareClass, config_dict)],
            dependency_overrides={get_message_store: lambda: store},
        )
    """
    app = FastAPI()

    from api.dependencies.rate_limits import setup_rate_limiter

    setup_rate_limiter(app)

    if middlewares:
        for middleware_class, middleware_config in middlewares:
            app.add_middleware(middleware_class, **middleware_config)

    if not isinstance(routers, list):
        routers = [routers]
    for router in routers:
        app.include_router(router)

    app.dependency_overrides.update(dependency_overrides or {})
    return app


def create_localized_test_app(
    routers,
    registry: LocaleRegistry,
    dependency_overrides: Optional[dict[Callable, Callable]] = None,
    **middleware_options: Any,
) -> FastAPI:
    """
    Create a test application behind LocaleMiddleware.

    Args:
        routers: A router or list of routers to include in the app.
        registry: Registry the middleware negotiates against.
        dependency_overrides: Optional provider -> replacement mapping.
        **middleware_options: Extra LocaleMiddleware arguments
            (cookie_name, excluded_prefixes, ...).
    """
    from server.locale_middleware import LocaleMiddleware

    return create_test_app(
        routers,
        middlewares=[(LocaleMiddleware, {"registry": registry, **middleware_options})],
        dependency_overrides=dependency_overrides,
    )


async def rate_limiting_helper(
    app,
    endpoint: str,
    request_limit: int,
    method: str = "get",
    expected_status: int = 200,
    headers: Optional[dict] = None,
):
    """
    Helper function to test rate limiting for an endpoint.

    Args:
        app: The FastAPI app instance.
        endpoint: The endpoint to test.
        request_limit: Number of requests allowed before rate limiting.
        method: HTTP method to use (e.g., "get", "post").
        headers: Optional headers to include in the requests.
        expected_status: Expected status code for successful requests.
    """
    transport = httpx.ASGITransport(app=app)
    headers = headers or {}

    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        http_method = getattr(client, method.lower())

        for i in range(request_limit):
            response = await http_method(endpoint, headers=headers)
            assert (
                response.status_code == expected_status
            ), f"Request {i+1} failed with status {response.status_code}"

        response = await http_method(endpoint, headers=headers)
        assert response.status_code == 429, "Expected rate limiting to trigger"
        assert response.json() == {"message": "Rate limit exceeded"}
