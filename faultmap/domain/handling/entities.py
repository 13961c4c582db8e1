"""
Domain entities for the exception-handling bounded context.

Value objects flowing through one classification pass. All of them are
created and discarded within a single ``ExceptionHandler.handle`` call,
except BehaviorRule which lives in the long-lived configuration.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from uuid import UUID


class BehaviorKind(Enum):
    """How a resolved exception is reported back to the caller."""

    CLIENT_FAULT = "client_fault"
    SERVER_FAULT = "server_fault"


class BodyKind(Enum):
    """Shape of the emitted response body."""

    CLIENT_FAULT = "client_fault"
    FORBIDDEN = "forbidden"
    SERVER_FAULT = "server_fault"


@dataclass(frozen=True)
class BehaviorRule:
    """Explicit override: exceptions of ``match_type`` get ``kind``/``status_code``."""

    match_type: type
    kind: BehaviorKind
    status_code: int

    def matches(self, failure: BaseException) -> bool:
        return isinstance(failure, self.match_type)


@dataclass(frozen=True)
class Interception:
    """Output of one interception event.

    ``behavior`` may be left as None; the running behavior is then kept.
    """

    status_code: int
    failure: BaseException
    behavior: Optional[BehaviorKind] = None


@dataclass(frozen=True)
class PipelineState:
    """Accumulator threaded through the configuration pass.

    Attributes:
        status_code: Current response status code.
        failure: Current exception (events may substitute it).
        behavior: Resolved behavior, None until something sets it.
        status_overridden: True once an event or rule changed the status
            code away from the value the transport handed in.
    """

    status_code: int
    failure: BaseException
    behavior: Optional[BehaviorKind] = None
    status_overridden: bool = False


@dataclass(frozen=True)
class Forbidden:
    """Fixed body returned for access-denied exceptions."""

    key: str = "Forbidden"
    message: str = "Access to this resource is forbidden."


@dataclass(frozen=True)
class InternalError:
    """Body returned for server faults.

    ``exception`` is only populated in development deployments.
    """

    log_entry_id: UUID
    exception: Optional[BaseException] = None


@dataclass(frozen=True)
class ClassificationResult:
    """Terminal output of one classification pass."""

    status_code: int
    body_kind: Optional[BodyKind]
    payload: Any = field(default=None, compare=False)
