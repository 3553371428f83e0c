"""ASGI middleware that abandons work for clients that went away."""

import logging
import math

import anyio
from anyio import CancelScope
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class CancelOnDisconnectMiddleware:
    """Cancel a request's handler when its client disconnects early.

    The transport's ``receive`` channel is watched in a sibling task and
    relayed to the application. If ``http.disconnect`` arrives before the
    response has started, the task group's cancel scope is cancelled, so
    whatever the handler is awaiting (typically a database call) is
    interrupted and its pooled connection is released.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        send_channel, receive_channel = anyio.create_memory_object_stream[Message](math.inf)
        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        async def watch_client(cancel_scope: CancelScope) -> None:
            while True:
                message = await receive()
                if message["type"] == "http.disconnect" and not response_started:
                    logger.info(
                        "Client disconnected during %s %s; cancelling request",
                        scope["method"],
                        scope["path"],
                    )
                    cancel_scope.cancel()
                    return
                await send_channel.send(message)
                if message["type"] == "http.disconnect":
                    return

        async with anyio.create_task_group() as task_group:
            task_group.start_soon(watch_client, task_group.cancel_scope)
            await self.app(scope, receive_channel.receive, send_wrapper)
            task_group.cancel_scope.cancel()
