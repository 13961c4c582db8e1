"""
Application entry point.

Creates the FastAPI application and wires together:
- Logging configuration
- Exception handling (configuration built once, at startup)

No business logic belongs here.
"""

from collections.abc import Callable
from typing import Optional

from fastapi import FastAPI

from faultmap.core.config import Settings
from faultmap.core.config import settings as default_settings
from faultmap.domain.handling.configuration import ConfigurationBuilder
from faultmap.shared.errors.handlers import add_exception_handling
from faultmap.shared.logging import configure_logging


def create_app(
    configure: Optional[Callable[[ConfigurationBuilder], None]] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        configure: Optional exception handling builder callback.
        settings: Settings override, mainly for tests.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or default_settings
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # --- Exception Handling ---
    app.state.exception_handler = add_exception_handling(app, configure, settings=settings)

    return app


app = create_app()
