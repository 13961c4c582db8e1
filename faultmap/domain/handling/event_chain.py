"""
Event chain.

Runs every eligible interception event in registration order. Each
eligible event overwrites the running status code and exception; later
events see the output of earlier ones. There is no short-circuit.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from faultmap.domain.handling.entities import Interception, PipelineState
from faultmap.domain.handling.ports import InterceptionEvent


@dataclass(frozen=True)
class FunctionEvent(InterceptionEvent):
    """Interception event built from two callables."""

    eligible: Callable[[int, BaseException], bool]
    transform: Callable[[int, BaseException], Interception]

    def is_eligible(self, status_code: int, failure: BaseException) -> bool:
        return self.eligible(status_code, failure)

    def intercept(self, status_code: int, failure: BaseException) -> Interception:
        return self.transform(status_code, failure)


class EventChain:
    """Cascading chain of interception events."""

    def __init__(self, events: Iterable[InterceptionEvent] = ()) -> None:
        self._events = tuple(events)

    @property
    def events(self) -> tuple[InterceptionEvent, ...]:
        return self._events

    def run(self, status_code: int, failure: BaseException) -> PipelineState:
        """Thread the (status code, exception, behavior) state through all events.

        Args:
            status_code: Status code currently set on the response.
            failure: The exception being classified.

        Returns:
            The final pipeline state. ``behavior`` is only replaced by
            events that return a non-None behavior.
        """
        state = PipelineState(status_code=status_code, failure=failure)
        for event in self._events:
            if event.is_eligible(state.status_code, state.failure):
                state = apply_interception(state, event.intercept(state.status_code, state.failure))
        return replace(state, status_overridden=state.status_code != status_code)

    def __len__(self) -> int:
        return len(self._events)


def apply_interception(state: PipelineState, result: Interception) -> PipelineState:
    """Fold one event result into the running state."""
    behavior = result.behavior if result.behavior is not None else state.behavior
    return replace(
        state,
        status_code=result.status_code,
        failure=result.failure,
        behavior=behavior,
    )
