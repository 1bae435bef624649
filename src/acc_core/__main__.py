import asyncio

import structlog
import uvicorn

from .api.server import create_app
from .application.core_facade import RealCoreFacade
from .config import get_settings
from .domain.errors import EngineError
from .infrastructure.http_publisher import AiohttpPublisher
from .infrastructure.logging import setup_logging

logger = structlog.get_logger()


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.env)

    logger.info("service_starting", env=settings.env.value, publisher_url=settings.publisher.url)

    facade = RealCoreFacade(settings)
    directory = AiohttpPublisher(settings.publisher)

    # 1. Optional autostart from configuration
    if settings.publisher.channel:
        try:
            await asyncio.to_thread(
                facade.start_tracking,
                settings.publisher.channel,
                settings.publisher.password.get_secret_value(),
            )
        except EngineError as e:
            logger.error("autostart_failed", channel=settings.publisher.channel, error=str(e))

    # 2. HTTP Server (control API)
    api_app = create_app(facade, directory)
    http_config = uvicorn.Config(api_app, host=settings.api.host, port=settings.api.port, log_level="info")
    http_server = uvicorn.Server(http_config)

    logger.info("api_server_starting", host=settings.api.host, port=settings.api.port)

    try:
        # Run HTTP server - this blocks until shutdown signal
        await http_server.serve()
    except asyncio.CancelledError:
        pass
    finally:
        logger.info("shutdown_initiated")
        await asyncio.to_thread(facade.cleanup)
        logger.info("shutdown_complete")


def run() -> None:
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
