"""
Exception-handling bounded context.

Exports the configuration surface used by embedding applications.
"""

from faultmap.domain.handling.behavior_registry import BehaviorRegistry
from faultmap.domain.handling.configuration import (
    ConfigurationBuilder,
    ExceptionHandlerConfiguration,
    build_configuration,
)
from faultmap.domain.handling.entities import (
    BehaviorKind,
    BehaviorRule,
    BodyKind,
    ClassificationResult,
    Interception,
    InternalError,
    PipelineState,
)
from faultmap.domain.handling.errors import (
    CoreError,
    ExceptionHandlingError,
    HandlerConfigurationError,
)
from faultmap.domain.handling.event_chain import EventChain, FunctionEvent
from faultmap.domain.handling.ports import InterceptionEvent, ResponseSink

__all__ = [
    "BehaviorKind",
    "BehaviorRegistry",
    "BehaviorRule",
    "BodyKind",
    "ClassificationResult",
    "ConfigurationBuilder",
    "CoreError",
    "EventChain",
    "ExceptionHandlerConfiguration",
    "ExceptionHandlingError",
    "FunctionEvent",
    "HandlerConfigurationError",
    "Interception",
    "InterceptionEvent",
    "InternalError",
    "PipelineState",
    "ResponseSink",
    "build_configuration",
]
