import uvicorn

from infrastructure.services import get_settings
from server import server

server_app = server.handler


def main() -> None:
    """Run the localization service with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        server_app,
        host="0.0.0.0",
        port=8000,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
