"""
Shared error handling package.

Installs the exception handler on a FastAPI application so that every
unhandled exception is classified into a consistent JSON response.
"""

from faultmap.shared.errors.handlers import (
    ExceptionHandlingMiddleware,
    add_exception_handling,
)

__all__ = ["ExceptionHandlingMiddleware", "add_exception_handling"]
