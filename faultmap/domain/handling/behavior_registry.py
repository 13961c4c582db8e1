"""
Behavior registry.

Ordered list of explicit (exception type -> behavior, status code)
overrides. Lookup is first-match in registration order, not
most-specific: a rule for ``Exception`` registered before a rule for
``KeyError`` shadows it.
"""

from collections.abc import Iterator
from typing import Optional

from faultmap.domain.handling.entities import BehaviorKind, BehaviorRule
from faultmap.domain.handling.errors import HandlerConfigurationError

MIN_STATUS_CODE = 100
MAX_STATUS_CODE = 599


class BehaviorRegistry:
    """First-match registry of behavior rules."""

    def __init__(self, rules: tuple[BehaviorRule, ...] = (), *, sealed: bool = False) -> None:
        self._rules: list[BehaviorRule] = list(rules)
        self._sealed = sealed

    def register(
        self, match_type: type, kind: BehaviorKind, status_code: int
    ) -> BehaviorRule:
        """Append a rule. Duplicates are kept.

        Raises:
            HandlerConfigurationError: If any argument is invalid or the
                registry belongs to a built configuration.
        """
        if self._sealed:
            raise HandlerConfigurationError("behaviors cannot be added after the configuration is built")
        if not (isinstance(match_type, type) and issubclass(match_type, BaseException)):
            raise HandlerConfigurationError(
                f"match type must be an exception class, got {match_type!r}"
            )
        if not isinstance(kind, BehaviorKind):
            raise HandlerConfigurationError(f"unknown behavior kind {kind!r}")
        if isinstance(status_code, bool) or not isinstance(status_code, int):
            raise HandlerConfigurationError(f"status code must be an int, got {status_code!r}")
        if not (MIN_STATUS_CODE <= status_code <= MAX_STATUS_CODE):
            raise HandlerConfigurationError(f"status code out of range: {status_code}")

        rule = BehaviorRule(match_type=match_type, kind=kind, status_code=status_code)
        self._rules.append(rule)
        return rule

    def resolve(self, failure: BaseException) -> Optional[BehaviorRule]:
        """Return the first registered rule matching ``failure``, or None."""
        for rule in self._rules:
            if rule.matches(failure):
                return rule
        return None

    @property
    def has_behaviors(self) -> bool:
        return bool(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[BehaviorRule]:
        return iter(self._rules)
