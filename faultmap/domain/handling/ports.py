"""
Port interfaces (ABCs) for the exception-handling bounded context.

Ports define the contracts the classification core requires from the
embedding application. Adapters live in the infrastructure layer or are
supplied by callers (interception events).
"""

from abc import ABC, abstractmethod
from typing import Any

from faultmap.domain.handling.entities import Interception


class InterceptionEvent(ABC):
    """Eligibility-gated transform applied before default classification."""

    @abstractmethod
    def is_eligible(self, status_code: int, failure: BaseException) -> bool:
        """Return True when this event should intercept the exception."""
        raise NotImplementedError

    @abstractmethod
    def intercept(self, status_code: int, failure: BaseException) -> Interception:
        """Return the replacement status code, exception and behavior."""
        raise NotImplementedError


class ResponseSink(ABC):
    """Port for the outgoing HTTP response.

    The status code is both read (as the incoming default) and written.
    """

    status_code: int

    @abstractmethod
    def write_body(self, content_type: str, body: bytes) -> None:
        """Write an encoded response body.

        Args:
            content_type: MIME type of the body.
            body: Encoded body bytes.
        """
        raise NotImplementedError


class PayloadSerializer(ABC):
    """Port for turning a response payload into bytes."""

    content_type: str = "application/json"

    @abstractmethod
    def serialize(self, payload: Any, *, indent: bool = False) -> bytes:
        """Encode a payload.

        Args:
            payload: Exception, dataclass, mapping or plain value.
            indent: Produce human-readable output.
        """
        raise NotImplementedError
