import asyncio
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException

from ..domain.errors import EngineError, ServerError, SourceUnavailable, TransportError
from ..domain.interfaces import IChannelDirectory, ICoreFacade
from .schemas import (
    ChannelListResponse,
    ChannelResponse,
    OperationResponse,
    PublisherStartRequest,
    PublisherStatusResponse,
)

logger = structlog.get_logger()


def _upstream_error(error: EngineError) -> HTTPException:
    if isinstance(error, ServerError) and error.status in (401, 403):
        return HTTPException(status_code=401, detail="channel password rejected")
    if isinstance(error, ServerError) and error.status == 404:
        return HTTPException(status_code=404, detail="channel not found")
    return HTTPException(status_code=502, detail=str(error))


def create_app(facade: ICoreFacade, directory: IChannelDirectory) -> FastAPI:
    """
    Factory to create FastAPI app with injected dependencies.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("api_startup")
        yield
        await directory.close()
        logger.info("api_shutdown")

    app = FastAPI(lifespan=lifespan)

    @app.get("/channels", response_model=ChannelListResponse)
    async def list_channels():
        try:
            channels = await directory.list_channels()
        except (TransportError, ServerError) as e:
            logger.warning("api_list_channels_failed", error=str(e))
            raise _upstream_error(e) from e
        return ChannelListResponse(
            channels=[ChannelResponse(id=channel.id, name=channel.name) for channel in channels]
        )

    @app.post("/publisher/start", response_model=OperationResponse)
    async def start_publisher(request: PublisherStartRequest):
        logger.info("api_start_publisher", channel=request.channel)
        if facade.is_tracking():
            return OperationResponse(status="noop", message="Publisher already running")

        password = request.password.get_secret_value()
        try:
            await directory.login(request.channel, password)
        except (TransportError, ServerError) as e:
            logger.warning("api_login_failed", channel=request.channel, error=str(e))
            raise _upstream_error(e) from e

        try:
            # blocks until the worker signals ready
            await asyncio.to_thread(facade.start_tracking, request.channel, password)
        except SourceUnavailable as e:
            raise HTTPException(status_code=503, detail=str(e)) from e
        except EngineError as e:
            raise HTTPException(status_code=500, detail=str(e)) from e
        return OperationResponse(status="success", message="Publisher started")

    @app.post("/publisher/stop", response_model=OperationResponse)
    async def stop_publisher():
        logger.info("api_stop_publisher")
        if not facade.is_tracking():
            return OperationResponse(status="noop", message="Publisher not running")
        await asyncio.to_thread(facade.stop_tracking)
        return OperationResponse(status="success", message="Publisher stopped")

    @app.get("/publisher/status", response_model=PublisherStatusResponse)
    async def publisher_status():
        status = facade.status()
        return PublisherStatusResponse(
            state=status.state.value,
            channel=status.channel,
            last_error=status.last_error,
            cycles=status.cycles,
            overruns=status.overruns,
        )

    return app
