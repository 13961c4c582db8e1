"""
Contract filter and JSON payload serializer.

Exceptions are serialized as plain objects. Every attribute that comes
from ``BaseException`` itself (args, traceback, cause, context, notes)
is dropped; only ``message`` and attributes declared by subclasses are
written. Serialization policy:

- property names are camelCased
- non-finite floats are written as null (omitted from objects)
- leaf values that cannot be encoded fall back to their string form
- reference cycles are dropped instead of raising
- None values are omitted from objects
- containers nested deeper than ``max_depth`` are not expanded
- indentation only when requested (development deployments)
"""

import dataclasses
import json
import math
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from faultmap.domain.handling.ports import PayloadSerializer

DEFAULT_MAX_DEPTH = 10
JSON_CONTENT_TYPE = "application/json"

BASE_EXCEPTION_FIELDS = frozenset(
    name for name in (*dir(BaseException), "__notes__") if name != "message"
)

_OMIT = object()


def camel_case(name: str) -> str:
    """Lower-case the leading capitals of a name, or camelCase a snake_case one.

    "HTTPStatus" -> "httpStatus", "LogEntryId" -> "logEntryId",
    "log_entry_id" -> "logEntryId".
    """
    if "_" in name:
        return to_camel(name)
    chars = list(name)
    for i, char in enumerate(chars):
        if i == 1 and not char.isupper():
            break
        if i > 0 and i + 1 < len(chars) and not chars[i + 1].isupper():
            break
        chars[i] = char.lower()
    return "".join(chars)


def exception_message(failure: BaseException) -> str:
    """Return the human-readable message of an exception."""
    message = getattr(failure, "message", None)
    if isinstance(message, str):
        return message
    return str(failure)


class ContractFilter:
    """Decides which fields of a serialized object are written."""

    def include(self, owner: Any, name: str) -> bool:
        """Return False for fields inherited from BaseException, except message."""
        if isinstance(owner, BaseException):
            return name == "message" or name not in BASE_EXCEPTION_FIELDS
        return True

    def fields(self, obj: Any) -> Iterator[tuple[str, Any]]:
        """Yield the (name, value) pairs to serialize for a structured object."""
        if isinstance(obj, Mapping):
            for key, value in obj.items():
                yield str(key), value
            return

        if isinstance(obj, BaseException):
            yield "message", exception_message(obj)
            items = ((k, v) for k, v in vars(obj).items() if k != "message")
        elif isinstance(obj, BaseModel):
            items = ((name, getattr(obj, name)) for name in type(obj).model_fields)
        else:
            items = ((f.name, getattr(obj, f.name)) for f in dataclasses.fields(obj))

        for name, value in items:
            if name.startswith("_") or not self.include(obj, name):
                continue
            yield name, value


def is_structured(value: Any) -> bool:
    """True for values serialized as JSON objects."""
    return (
        isinstance(value, (BaseException, BaseModel, Mapping))
        or (dataclasses.is_dataclass(value) and not isinstance(value, type))
    )


class JsonPayloadSerializer(PayloadSerializer):
    """Serializes response payloads to UTF-8 JSON through a ContractFilter."""

    content_type = JSON_CONTENT_TYPE

    def __init__(
        self,
        contract_filter: ContractFilter | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {max_depth}")
        self._filter = contract_filter or ContractFilter()
        self._max_depth = max_depth

    def serialize(self, payload: Any, *, indent: bool = False) -> bytes:
        """Encode a payload as JSON.

        Args:
            payload: Exception, dataclass, pydantic model, mapping or value.
            indent: Pretty-print with two-space indentation.

        Returns:
            The UTF-8 encoded document.
        """
        document = self.to_document(payload)
        if indent:
            text = json.dumps(document, ensure_ascii=False, allow_nan=False, indent=2)
        else:
            text = json.dumps(
                document, ensure_ascii=False, allow_nan=False, separators=(",", ":")
            )
        return text.encode("utf-8")

    def to_document(self, payload: Any) -> Any:
        """Convert a payload into JSON-compatible Python values."""
        value = self._convert(payload, depth=0, path=set())
        return None if value is _OMIT else value

    def _convert(self, value: Any, depth: int, path: set[int]) -> Any:
        if isinstance(value, float):
            return value if math.isfinite(value) else None
        if value is None or isinstance(value, (str, int, bool)):
            return value

        is_object = is_structured(value)
        if not (is_object or isinstance(value, (list, tuple, set, frozenset))):
            return self._convert_leaf(value)

        if depth >= self._max_depth or id(value) in path:
            return _OMIT

        path.add(id(value))
        try:
            if is_object:
                return self._convert_object(value, depth, path)
            items = (self._convert(item, depth + 1, path) for item in value)
            return [item for item in items if item is not _OMIT]
        finally:
            path.discard(id(value))

    def _convert_leaf(self, value: Any) -> Any:
        try:
            leaf = to_jsonable_python(value, fallback=str)
        except (PydanticSerializationError, ValueError):
            # undecodable bytes and the like
            leaf = str(value)
        if isinstance(leaf, float) and not math.isfinite(leaf):
            return None
        return leaf

    def _convert_object(self, obj: Any, depth: int, path: set[int]) -> dict[str, Any]:
        document: dict[str, Any] = {}
        for name, raw in self._filter.fields(obj):
            value = self._convert(raw, depth + 1, path)
            if value is None or value is _OMIT:
                continue
            document[camel_case(name)] = value
        return document
