"""HTTP transport: commands executed as platform REST calls."""
import asyncio
import time
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

import httpx

from core.logging_config import get_logger
from core.metrics import record_command
from .command import Command
from .dispatcher import CommandDispatcher
from .exceptions import CommandTimeoutError, HttpCommandError

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True, kw_only=True)
class HttpRequest(Command[T, R]):
    """Command routed to a REST endpoint; payload is sent as the JSON body."""

    url: str
    method: str = "GET"
    params: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({"url": self.url, "method": self.method, "params": self.params})
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HttpRequest":
        """Rebuild as a plain HttpRequest; subclasses fix url and method in __init__."""
        base = Command.from_dict(data)
        return HttpRequest(
            payload=base.payload,
            type=base.type,
            expect_reply=base.expect_reply,
            ttl=base.ttl,
            correlation_id=base.correlation_id,
            created_at=base.created_at,
            url=data["url"],
            method=data.get("method", "GET"),
            params=data.get("params"),
        )


class HttpCommandDispatcher(CommandDispatcher):
    """
    Executes HttpRequest commands against the platform API using httpx.

    - The whole round-trip is bounded by the command's ttl
    - 204 / empty bodies and expect_reply=False resolve to None
    - 4xx/5xx responses raise HttpCommandError
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            base_url: Platform API URL (e.g., https://app.brightsec.com)
            api_key: API key sent in the Authorization header
            client: Preconfigured httpx client (tests inject a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._session: Optional[httpx.AsyncClient] = client

    async def _get_session(self) -> httpx.AsyncClient:
        """Get or create async HTTP session."""
        if not self._session:
            self._session = httpx.AsyncClient(follow_redirects=True)
        return self._session

    def _build_headers(self, command: HttpRequest) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-Correlation-Id": command.correlation_id,
        }
        if self.api_key:
            headers["Authorization"] = f"api-key {self.api_key}"
        return headers

    async def execute(self, command: Command[Any, R]) -> R | None:
        if not isinstance(command, HttpRequest):
            raise TypeError(
                f"{type(self).__name__} can only execute HttpRequest commands, "
                f"got {command.type}"
            )

        client = await self._get_session()
        started = time.monotonic()

        try:
            # httpx timeouts apply per phase; wait_for bounds the whole round-trip
            response = await asyncio.wait_for(
                client.request(
                    command.method,
                    f"{self.base_url}{command.url}",
                    params=command.params,
                    json=command.payload,
                    headers=self._build_headers(command),
                    timeout=command.ttl / 1000,
                ),
                timeout=command.ttl / 1000,
            )
            response.raise_for_status()

        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            record_command(command.type, "timeout")
            logger.warning(
                "command_timed_out",
                type=command.type,
                ttl_ms=command.ttl,
                correlation_id=command.correlation_id,
            )
            raise CommandTimeoutError(command) from e

        except httpx.HTTPStatusError as e:
            record_command(command.type, "error")
            logger.error(
                "command_failed",
                type=command.type,
                status_code=e.response.status_code,
                method=command.method,
                url=command.url,
            )
            raise HttpCommandError(e.response.status_code, e.response.text[:200]) from e

        duration = time.monotonic() - started

        if not command.expect_reply or response.status_code == 204 or not response.content:
            record_command(command.type, "empty", duration)
            return None

        record_command(command.type, "success", duration)
        logger.debug("command_completed", type=command.type, duration_s=round(duration, 3))
        return response.json()

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            await self._session.aclose()
            self._session = None
