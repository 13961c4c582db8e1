"""
Buffered response sink.

Collects status code and body writes made while handling one exception
and turns them into a Starlette response. Every write is kept so that
repeated emissions (aggregate exceptions) stay observable; the response
carries the last one.
"""

from dataclasses import dataclass

from starlette.responses import Response

from faultmap.domain.handling.ports import ResponseSink

DEFAULT_STATUS_CODE = 200


@dataclass(frozen=True)
class BodyWrite:
    """One body emission."""

    status_code: int
    content_type: str
    body: bytes


class BufferedResponseSink(ResponseSink):
    """In-memory ResponseSink adapter."""

    def __init__(self, status_code: int = DEFAULT_STATUS_CODE) -> None:
        self.status_code = status_code
        self.writes: list[BodyWrite] = []

    def write_body(self, content_type: str, body: bytes) -> None:
        self.writes.append(
            BodyWrite(status_code=self.status_code, content_type=content_type, body=body)
        )

    @property
    def last_write(self) -> BodyWrite | None:
        return self.writes[-1] if self.writes else None

    def to_response(self) -> Response:
        """Build the HTTP response from the final status code and last body."""
        last = self.last_write
        if last is None:
            return Response(status_code=self.status_code)
        return Response(
            content=last.body,
            status_code=self.status_code,
            media_type=last.content_type,
        )
