"""Redis-backed event bus with correlated request/reply.

Key layout (per exchange):
- {exchange}:{type}                    - FIFO list of messages of one type (LPUSH/BRPOP)
- {exchange}:reply:{correlation_id}    - Reply list for one outstanding command

Commands carry `correlationId` and `replyTo`; consumers push their reply to
`replyTo` with the same `correlationId`. Delivery is at-most-once: there is no
acknowledgement or redelivery.
"""

import asyncio
import contextlib
import json
import time
from typing import Any, Optional

import redis

from core.logging_config import get_logger
from core.metrics import record_command, record_event
from .command import Command
from .dispatcher import EventBus, EventHandler
from .event import Event
from .exceptions import CommandTimeoutError

logger = get_logger(__name__)

DEFAULT_EXCHANGE = "EventBus"


class RedisEventBus(EventBus):
    """
    EventBus over Redis lists.

    Blocking redis-py calls run in the default thread pool so the event loop
    keeps serving other tasks while a BRPOP waits.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379",
        exchange: str = DEFAULT_EXCHANGE,
        redis_client: Optional[Any] = None,
        poll_timeout: float = 1.0,
    ) -> None:
        """
        Initialize RedisEventBus.

        Args:
            redis_url: Redis connection URL (redis://host:port/db)
            exchange: Key prefix isolating this bus from other users of the server
            redis_client: Preconfigured client (tests inject a mock)
            poll_timeout: BRPOP timeout in seconds for handler consumers
        """
        self.redis_client = redis_client or redis.from_url(redis_url, decode_responses=True)
        self.exchange = exchange
        self.poll_timeout = poll_timeout
        self._consumers: dict[str, asyncio.Task] = {}
        self._running = False

    def _routing_key(self, message_type: str) -> str:
        return f"{self.exchange}:{message_type}"

    def _reply_key(self, correlation_id: str) -> str:
        return f"{self.exchange}:reply:{correlation_id}"

    async def init(self) -> None:
        """Verify connection."""
        try:
            await asyncio.to_thread(self.redis_client.ping)
            self._running = True
            logger.info("bus_connected", exchange=self.exchange)
        except redis.ConnectionError as e:
            logger.error("bus_connection_failed", exchange=self.exchange, error=str(e))
            raise

    async def publish(self, event: Event) -> None:
        message = json.dumps(event.to_dict())
        await asyncio.to_thread(
            self.redis_client.lpush, self._routing_key(event.type), message
        )
        record_event(event.type)
        logger.debug("event_published", type=event.type)

    async def execute(self, command: Command) -> Any:
        message = command.to_dict()
        reply_key = self._reply_key(command.correlation_id)
        if command.expect_reply:
            message["replyTo"] = reply_key

        started = time.monotonic()
        await asyncio.to_thread(
            self.redis_client.lpush, self._routing_key(command.type), json.dumps(message)
        )

        if not command.expect_reply:
            record_command(command.type, "empty")
            return None

        deadline = started + command.ttl / 1000
        try:
            return await self._await_reply(command, reply_key, deadline, started)
        finally:
            with contextlib.suppress(redis.RedisError):
                await asyncio.to_thread(self.redis_client.delete, reply_key)

    async def _await_reply(
        self, command: Command, reply_key: str, deadline: float, started: float
    ) -> Any:
        """Wait on the reply list until a reply with our correlation id arrives."""
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                record_command(command.type, "timeout")
                raise CommandTimeoutError(command)

            result = await asyncio.to_thread(
                self.redis_client.brpop, reply_key, timeout=remaining
            )
            if not result:
                record_command(command.type, "timeout")
                raise CommandTimeoutError(command)

            _, reply_json = result
            try:
                reply = json.loads(reply_json)
            except json.JSONDecodeError as e:
                logger.error("reply_malformed", type=command.type, error=str(e))
                continue

            if not isinstance(reply, dict):
                logger.error(
                    "reply_not_an_object", type=command.type, reply_type=type(reply).__name__
                )
                continue

            if reply.get("correlationId") != command.correlation_id:
                logger.warning(
                    "reply_foreign_correlation_id",
                    type=command.type,
                    correlation_id=reply.get("correlationId"),
                    expected=command.correlation_id,
                )
                continue

            payload = reply.get("payload")
            record_command(
                command.type,
                "success" if payload is not None else "empty",
                time.monotonic() - started,
            )
            return payload

    async def register(self, event_type: str, handler: EventHandler) -> None:
        if event_type in self._consumers:
            raise ValueError(f"Handler already registered for {event_type}")

        self._running = True
        self._consumers[event_type] = asyncio.create_task(
            self._consume(event_type, handler)
        )
        logger.info("handler_registered", type=event_type)

    async def _consume(self, event_type: str, handler: EventHandler) -> None:
        """Deliver messages of event_type to handler until destroyed."""
        key = self._routing_key(event_type)

        while self._running:
            try:
                result = await asyncio.to_thread(
                    self.redis_client.brpop, key, timeout=self.poll_timeout
                )
                if not result:
                    continue

                _, message_json = result
                message = json.loads(message_json)
                if not isinstance(message, dict):
                    logger.error(
                        "message_not_an_object",
                        type=event_type,
                        message_type=type(message).__name__,
                    )
                    continue

                await self._dispatch(event_type, handler, message)

            except json.JSONDecodeError as e:
                logger.error("message_malformed", type=event_type, error=str(e))
            except redis.RedisError as e:
                logger.error("bus_consume_failed", type=event_type, error=str(e))
                await asyncio.sleep(self.poll_timeout)

    async def _dispatch(
        self, event_type: str, handler: EventHandler, message: dict[str, Any]
    ) -> None:
        try:
            reply = await handler.handle(message.get("payload"))
        except Exception as e:
            logger.error("handler_failed", type=event_type, error=str(e), exc_info=True)
            return

        reply_to = message.get("replyTo")
        if reply_to:
            await asyncio.to_thread(
                self.redis_client.lpush,
                reply_to,
                json.dumps({"correlationId": message.get("correlationId"), "payload": reply}),
            )

    async def destroy(self) -> None:
        """Cancel consumers and close the Redis connection."""
        self._running = False

        for task in self._consumers.values():
            task.cancel()
        for task in self._consumers.values():
            with contextlib.suppress(asyncio.CancelledError):
                await task

        self._consumers.clear()

        try:
            self.redis_client.close()
            logger.info("bus_closed", exchange=self.exchange)
        except Exception as e:
            logger.error("bus_close_failed", error=str(e))
