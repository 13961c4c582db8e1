"""
Exception handling middleware for FastAPI.

Catches every exception escaping a route and hands it to the
ExceptionHandler. HTTPException and request validation errors are
answered by FastAPI before they reach this middleware.
"""

import logging
from collections.abc import Callable
from typing import Optional

from fastapi import FastAPI
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from faultmap.application.handling.exception_handler import ExceptionHandler
from faultmap.core.config import Settings
from faultmap.core.config import settings as default_settings
from faultmap.domain.handling.configuration import (
    ConfigurationBuilder,
    build_configuration,
)
from faultmap.infrastructure.handling.contract_filter import JsonPayloadSerializer
from faultmap.infrastructure.handling.response_sink import BufferedResponseSink

logger = logging.getLogger(__name__)


class ExceptionHandlingMiddleware:
    """ASGI middleware that converts unhandled exceptions into JSON responses.

    Exceptions raised after the response has started cannot be answered
    any more and are re-raised.
    """

    def __init__(
        self, app: ASGIApp, handler: ExceptionHandler, development: bool = False
    ) -> None:
        self.app = app
        self._handler = handler
        self._development = development

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            if response_started:
                logger.warning("Exception raised after response start: %s", type(exc).__name__)
                raise
            sink = BufferedResponseSink()
            self._handler.handle(exc, sink, development=self._development)
            await sink.to_response()(scope, receive, send)


def add_exception_handling(
    app: FastAPI,
    configure: Optional[Callable[[ConfigurationBuilder], None]] = None,
    *,
    settings: Optional[Settings] = None,
) -> ExceptionHandler:
    """Build the exception handler once and install it on the application.

    Args:
        app: The FastAPI application instance.
        configure: Optional builder callback registering behaviors and
            interception events. Without it only the default rules apply.
        settings: Settings to read the development flag and serializer
            depth from. Defaults to the process settings.

    Returns:
        The installed handler.
    """
    settings = settings or default_settings
    configuration = build_configuration(configure) if configure is not None else None
    handler = ExceptionHandler(
        logger=logging.getLogger("faultmap.exception_handler"),
        configuration=configuration,
        serializer=JsonPayloadSerializer(max_depth=settings.serializer_max_depth),
    )
    app.add_middleware(
        ExceptionHandlingMiddleware,
        handler=handler,
        development=settings.is_development,
    )
    logger.info(
        "Exception handling installed (environment=%s, configured=%s)",
        settings.environment,
        configuration is not None,
    )
    return handler
