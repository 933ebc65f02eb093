"""Conversion of notification payloads into JSON text."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from typing import Any, Protocol

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic_core import to_jsonable_python

from casetools.domain.errors import SerializationError


class PayloadSerializer(Protocol):
    """Capability required by the dispatcher to encode payloads."""

    def serialize(self, value: Any) -> str:
        """Return ``value`` as a string or raise :class:`SerializationError`."""


class JsonPayloadSerializer:
    """Serialize dataclasses, pydantic models and plain containers as JSON.

    With ``camel_case`` enabled, dataclass and pydantic field names are written
    in lowerCamelCase. Mapping keys supplied by callers are kept verbatim.
    """

    def __init__(self, *, camel_case: bool = True) -> None:
        self._camel_case = camel_case

    def serialize(self, value: Any) -> str:
        if self._camel_case:
            value = _camelize_fields(value, set())

        try:
            data = to_jsonable_python(value)
        except (TypeError, ValueError) as exc:
            # Circular references and unknown types both surface as ValueError.
            raise SerializationError(
                f"Cannot serialize payload of type {type(value).__name__}: {exc}"
            ) from exc

        try:
            return json.dumps(data, ensure_ascii=False, allow_nan=False)
        except ValueError as exc:
            raise SerializationError(f"Payload is not valid JSON: {exc}") from exc


def _camelize_fields(value: Any, active: set[int]) -> Any:
    """Replace dataclasses and models inside ``value`` by camelCase dicts."""

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        names = [field.name for field in dataclasses.fields(value)]
    elif isinstance(value, BaseModel):
        names = list(type(value).model_fields)
    elif isinstance(value, (Mapping, list, tuple, set, frozenset)):
        names = None
    else:
        return value

    marker = id(value)
    if marker in active:
        raise SerializationError(
            f"Circular reference detected in payload of type {type(value).__name__}"
        )
    active.add(marker)
    try:
        if names is not None:
            result: dict[str, Any] = {}
            for name in names:
                key = to_camel(name) if "_" in name.strip("_") else name
                if key in result:
                    raise SerializationError(
                        f"Field {name!r} of {type(value).__name__} collides with {key!r}"
                    )
                result[key] = _camelize_fields(getattr(value, name), active)
            return result
        if isinstance(value, Mapping):
            return {key: _camelize_fields(item, active) for key, item in value.items()}
        return [_camelize_fields(item, active) for item in value]
    finally:
        active.discard(marker)


__all__ = ["JsonPayloadSerializer", "PayloadSerializer"]
