import asyncio
from typing import List, Optional

import aiohttp
import orjson
import structlog

from ..config import PublisherConfig
from ..domain.errors import ServerError, TransportError
from ..domain.interfaces import Channel

logger = structlog.get_logger()

PASSWORD_HEADER = "Channel-Password"


class AiohttpPublisher:
    """
    Client for the telemetry server: publishes events to a channel and
    browses/unlocks channels. One ClientSession is reused for every request.
    """

    def __init__(self, config: PublisherConfig, channel: str = "", password: str = ""):
        self._base_url = config.url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=config.timeout)
        self._channel = channel
        self._password = password
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self) -> "AiohttpPublisher":
        self._ensure_session()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    def _url(self, *parts: str) -> str:
        return "/".join([self._base_url, *(part.strip("/") for part in parts)])

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    async def _request(self, method: str, url: str, **kwargs) -> bytes:
        session = self._ensure_session()
        try:
            async with session.request(method, url, **kwargs) as response:
                body = await response.read()
                if response.status >= 400:
                    raise ServerError(response.status, body.decode("utf-8", errors="replace"))
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"{method} {url} failed: {e!r}") from e

    async def publish(self, payload: bytes) -> None:
        await self._request(
            "POST",
            self._url("publish", self._channel),
            data=payload,
            headers={
                "Content-Type": "application/json",
                PASSWORD_HEADER: self._password,
            },
        )

    async def list_channels(self) -> List[Channel]:
        body = await self._request("GET", self._url("channel"))
        try:
            entries = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            raise ServerError(200, "channel list is not valid JSON") from e

        channels = []
        for entry in entries if isinstance(entries, list) else []:
            if not isinstance(entry, dict):
                continue
            channel_id, name = entry.get("id"), entry.get("name")
            if isinstance(channel_id, str) and isinstance(name, str):
                channels.append(Channel(id=channel_id, name=name))
            else:
                logger.warning("channel_entry_skipped", entry=entry)
        return channels

    async def login(self, channel: str, password: str) -> None:
        await self._request(
            "POST",
            self._url("channel", channel, "login"),
            data=orjson.dumps({"password": password}),
            headers={"Content-Type": "application/json"},
        )
        logger.info("channel_login_succeeded", channel=channel)
