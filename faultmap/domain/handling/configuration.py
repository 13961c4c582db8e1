"""
Exception handler configuration.

Built exactly once, at startup, from a builder callback supplied by the
embedding application. The resulting configuration is immutable and can
be shared by concurrent requests without locking.

Example:

    def configure(builder: ConfigurationBuilder) -> None:
        builder.add_behavior(LookupError, BehaviorKind.CLIENT_FAULT, 404)
        builder.add_event(FunctionEvent(eligible=..., transform=...))

    configuration = build_configuration(configure)
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from faultmap.domain.handling.behavior_registry import BehaviorRegistry
from faultmap.domain.handling.entities import BehaviorKind, PipelineState
from faultmap.domain.handling.errors import HandlerConfigurationError
from faultmap.domain.handling.event_chain import EventChain
from faultmap.domain.handling.ports import InterceptionEvent

logger = logging.getLogger(__name__)


class ConfigurationBuilder:
    """Collects behaviors and events before the configuration is sealed."""

    def __init__(self) -> None:
        self._registry = BehaviorRegistry()
        self._events: list[InterceptionEvent] = []

    def add_behavior(
        self, match_type: type, kind: BehaviorKind, status_code: int
    ) -> "ConfigurationBuilder":
        """Register a behavior rule. Rules are matched in registration order."""
        self._registry.register(match_type, kind, status_code)
        return self

    def add_event(self, event: InterceptionEvent) -> "ConfigurationBuilder":
        """Append an interception event. Events run in registration order."""
        if not (callable(getattr(event, "is_eligible", None)) and callable(getattr(event, "intercept", None))):
            raise HandlerConfigurationError(
                f"event {event!r} must provide is_eligible() and intercept()"
            )
        self._events.append(event)
        return self

    def build(self) -> "ExceptionHandlerConfiguration":
        return ExceptionHandlerConfiguration(
            chain=EventChain(self._events),
            registry=BehaviorRegistry(tuple(self._registry), sealed=True),
        )


@dataclass(frozen=True)
class ExceptionHandlerConfiguration:
    """Read-only events and behaviors consulted on every classification."""

    chain: EventChain
    registry: BehaviorRegistry

    @property
    def events(self) -> tuple[InterceptionEvent, ...]:
        return self.chain.events

    @property
    def has_behaviors(self) -> bool:
        return self.registry.has_behaviors

    def run(self, status_code: int, failure: BaseException) -> PipelineState:
        """Run the event chain, then apply the first matching behavior rule.

        A matching rule overwrites the status code and behavior produced by
        the events. The exception produced by the events is kept, but the
        rule lookup itself is done against the exception handed in.
        """
        state = self.chain.run(status_code, failure)
        if not self.has_behaviors:
            return state

        rule = self.registry.resolve(failure)
        if rule is None:
            return state
        return replace(
            state,
            status_code=rule.status_code,
            behavior=rule.kind,
            status_overridden=True,
        )


def build_configuration(
    configure: Callable[[ConfigurationBuilder], None],
) -> ExceptionHandlerConfiguration:
    """Build the process-wide configuration from a builder callback.

    Args:
        configure: Callback registering behaviors and events on the builder.

    Returns:
        An immutable configuration.
    """
    builder = ConfigurationBuilder()
    configure(builder)
    configuration = builder.build()
    logger.info(
        "Exception handling configured: events=%d, behaviors=%d",
        len(configuration.chain),
        len(configuration.registry),
    )
    return configuration
