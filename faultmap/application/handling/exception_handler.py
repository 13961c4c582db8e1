"""
Use case: Classify an exception into an HTTP status code and JSON body.

Input: the exception, the response sink (carrying the current status
code), the development flag.
Output: ClassificationResult; status code and body written to the sink.
Side effects: one info or error log entry per emitted response.
Failure cases: none raised for the exception being handled. Errors from
the logger or the response sink propagate unmodified.
"""

import logging
from typing import Optional
from uuid import uuid4

from faultmap.domain.handling.configuration import ExceptionHandlerConfiguration
from faultmap.domain.handling.entities import (
    BehaviorKind,
    BodyKind,
    ClassificationResult,
    Forbidden,
    InternalError,
    PipelineState,
)
from faultmap.domain.handling.errors import CoreError, HandlerConfigurationError
from faultmap.domain.handling.ports import PayloadSerializer, ResponseSink
from faultmap.infrastructure.handling.contract_filter import JsonPayloadSerializer

HTTP_400 = 400
HTTP_403 = 403
HTTP_500 = 500

FORBIDDEN = Forbidden()


def root_cause(failure: BaseException) -> BaseException:
    """Return the innermost exception of an explicit or implicit chain."""
    seen = {id(failure)}
    current = failure
    while True:
        inner = current.__cause__
        if inner is None and not current.__suppress_context__:
            inner = current.__context__
        if inner is None or id(inner) in seen:
            return current
        seen.add(id(inner))
        current = inner


class ExceptionHandler:
    """Turns one exception into one response (per flattened exception).

    Resolution order:
        1. Configuration: interception events, then behavior rules.
        2. Exception groups: every inner exception is handled in turn
           against the same response; the last one wins.
        3. Defaults: PermissionError -> 403 Forbidden, CoreError -> client
           fault 400, anything else -> server fault 500.
        4. Emission of the body for the resolved behavior.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger],
        configuration: Optional[ExceptionHandlerConfiguration] = None,
        serializer: Optional[PayloadSerializer] = None,
    ) -> None:
        if logger is None:
            raise HandlerConfigurationError("a logger is required")
        self._logger = logger
        self._configuration = configuration
        self._serializer = serializer or JsonPayloadSerializer()

    @property
    def configuration(self) -> Optional[ExceptionHandlerConfiguration]:
        return self._configuration

    def handle(
        self,
        failure: BaseException,
        response: ResponseSink,
        *,
        development: bool = False,
    ) -> ClassificationResult:
        """Classify ``failure`` and write the response.

        Args:
            failure: The exception to classify.
            response: Sink holding the current status code; receives the
                final status code and body.
            development: Expose the root cause in server fault bodies and
                indent the JSON.

        Returns:
            The classification of ``failure``, or of its last inner
            exception for exception groups.
        """
        state = self._run_configuration(response.status_code, failure)
        response.status_code = state.status_code
        failure = state.failure

        if isinstance(failure, BaseExceptionGroup):
            result = ClassificationResult(status_code=response.status_code, body_kind=None)
            for inner in failure.exceptions:
                result = self.handle(inner, response, development=development)
            return result

        behavior = state.behavior
        if behavior is None:
            if isinstance(failure, PermissionError):
                response.status_code = HTTP_403
                return self._emit_forbidden(response, development)
            behavior = self._identify_behavior(state, response)

        if behavior is BehaviorKind.CLIENT_FAULT:
            return self._emit_client_fault(failure, response, development)
        return self._emit_server_fault(failure, response, development)

    def _run_configuration(self, status_code: int, failure: BaseException) -> PipelineState:
        if self._configuration is None:
            return PipelineState(status_code=status_code, failure=failure)
        return self._configuration.run(status_code, failure)

    def _identify_behavior(self, state: PipelineState, response: ResponseSink) -> BehaviorKind:
        if isinstance(state.failure, CoreError):
            behavior, default_status = BehaviorKind.CLIENT_FAULT, HTTP_400
        else:
            behavior, default_status = BehaviorKind.SERVER_FAULT, HTTP_500

        if not state.status_overridden:
            response.status_code = default_status
        return behavior

    def _emit_client_fault(
        self, failure: BaseException, response: ResponseSink, development: bool
    ) -> ClassificationResult:
        self._logger.info("A business error occurred.", exc_info=failure)
        self._write(failure, response, development)
        return ClassificationResult(
            status_code=response.status_code,
            body_kind=BodyKind.CLIENT_FAULT,
            payload=failure,
        )

    def _emit_forbidden(self, response: ResponseSink, development: bool) -> ClassificationResult:
        self._logger.info("An unauthorized access occurred.")
        self._write(FORBIDDEN, response, development)
        return ClassificationResult(
            status_code=response.status_code,
            body_kind=BodyKind.FORBIDDEN,
            payload=FORBIDDEN,
        )

    def _emit_server_fault(
        self, failure: BaseException, response: ResponseSink, development: bool
    ) -> ClassificationResult:
        log_entry_id = uuid4()
        self._logger.error(
            "%s: An unexpected error occurred.",
            log_entry_id,
            exc_info=failure,
            extra={"log_entry_id": str(log_entry_id)},
        )
        payload = InternalError(
            log_entry_id=log_entry_id,
            exception=root_cause(failure) if development else None,
        )
        self._write(payload, response, development)
        return ClassificationResult(
            status_code=response.status_code,
            body_kind=BodyKind.SERVER_FAULT,
            payload=payload,
        )

    def _write(self, payload: object, response: ResponseSink, development: bool) -> None:
        body = self._serializer.serialize(payload, indent=development)
        response.write_body(self._serializer.content_type, body)
