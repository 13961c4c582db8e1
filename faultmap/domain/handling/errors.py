"""
Errors for the exception-handling bounded context.

CoreError is the marker for expected business-rule violations: any
exception deriving from it is classified as a client fault (HTTP 400)
unless configuration says otherwise.
No framework imports allowed.
"""


class CoreError(Exception):
    """Base error for business-rule violations safe to expose to callers.

    Subclasses declare extra attributes in ``__init__``; those attributes
    are serialized into the response body next to ``message``.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ExceptionHandlingError(Exception):
    """Base error raised by faultmap itself."""


class HandlerConfigurationError(ExceptionHandlingError):
    """Raised when the handler or its configuration is wired incorrectly."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid exception handling configuration: {reason}")
        self.reason = reason
