"""
Bidirectional mapping between configuration state and Akeneo payloads.

Every resource describes its attributes once, as a tuple of `Field`
descriptors. The same table drives both directions:

- `to_wire_payload` builds the JSON payload for a request. Only known values
  are sent; null and unknown values never appear as keys.
- `to_state` overlays a payload received from Akeneo onto a state. Only values
  present on the wire (not `None`, not an empty collection) are copied, so
  attributes the server omits keep whatever the prior state held.
"""

import json
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..helpers import Diagnostics
from ..models import State, Value


@dataclass(frozen=True)
class Field:
    """Maps one state attribute to one key of the wire payload."""

    name: str
    # Payload key; defaults to the attribute name.
    wire: Optional[str] = None
    # Applied to a known value before it is sent; may raise ValueError.
    to_wire: Optional[Callable[[Any], Any]] = None
    # Applied to a wire value before it is stored; may raise ValueError.
    from_wire: Optional[Callable[[Any], Any]] = None
    # Descriptors of the elements of a nested list of objects.
    nested: Optional[Tuple["Field", ...]] = None
    error_summary: str = "Error converting value"

    @property
    def wire_key(self) -> str:
        return self.wire or self.name


def format_decimal(value: float) -> str:
    """
    Formats a number as the shortest decimal string that represents it exactly,
    e.g. 12.5 -> "12.5" and 10.0 -> "10".
    """
    try:
        number = Decimal(repr(value)).normalize()
    except InvalidOperation as e:
        raise ValueError(f"{value!r} is not a decimal number") from e
    if not number.is_finite():
        raise ValueError(f"{value!r} is not a finite decimal number")
    return format(number, "f")


def parse_decimal(value: Any) -> float:
    return float(value)


def format_int(value: int) -> str:
    return str(value)


def parse_int(value: Any) -> int:
    """Parses an integral decimal string such as "10" or "10.00"."""
    try:
        number = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"{value!r} is not a number") from e
    if not number.is_finite() or number != number.to_integral_value():
        raise ValueError(f"{value!r} is not a whole number")
    return int(number)


def decode_json_list(values: List[str]) -> List[Any]:
    """Decodes a list of JSON documents into the objects Akeneo expects."""
    result = []
    for index, item in enumerate(values):
        try:
            result.append(json.loads(item))
        except json.JSONDecodeError as e:
            raise ValueError(f"element {index} is not valid JSON: {e}") from e
    return result


def encode_json_list(values: List[Any]) -> List[str]:
    return [json.dumps(item, sort_keys=True) for item in values]


def sorted_by(key: str) -> Callable[[List[Dict[str, Any]]], List[Dict[str, Any]]]:
    """Returns a transform ordering a list of objects by one of their keys."""

    def transform(items):
        return sorted(items, key=lambda item: item.get(key) or 0)

    return transform


def _is_empty(raw: Any) -> bool:
    return raw is None or (isinstance(raw, (list, dict)) and not raw)


def _copy(raw: Any) -> Any:
    if isinstance(raw, list):
        return list(raw)
    if isinstance(raw, dict):
        return {k: list(v) if isinstance(v, list) else v for k, v in raw.items()}
    return raw


def to_wire_payload(
    fields: Tuple[Field, ...],
    state: State,
    diagnostics: Diagnostics,
    prefix: str = "",
) -> Dict[str, Any]:
    """Builds a wire payload from the known values of a state."""
    payload = {}
    for f in fields:
        path = f"{prefix}{f.name}"
        value = state.get(f.name, Value.null())
        if not value.is_known:
            continue

        raw = value.value
        if f.nested is not None:
            raw = [
                to_wire_payload(f.nested, item, diagnostics, f"{path}[{i}].")
                for i, item in enumerate(raw)
            ]
        else:
            raw = _copy(raw)

        if f.to_wire is not None:
            try:
                raw = f.to_wire(raw)
            except (KeyError, TypeError, ValueError) as e:
                diagnostics.add_error(
                    f.error_summary,
                    f"Could not convert attribute {path}: {e}",
                    path=path,
                )
                continue

        payload[f.wire_key] = raw
    return payload


def to_state(
    fields: Tuple[Field, ...],
    payload: Dict[str, Any],
    diagnostics: Diagnostics,
    state: Optional[State] = None,
    prefix: str = "",
) -> State:
    """
    Overlays a wire payload onto a copy of `state` and returns it.

    Attributes of `fields` missing from `state` start out null.
    """
    result = dict(state or {})
    for f in fields:
        result.setdefault(f.name, Value.null())

    for f in fields:
        path = f"{prefix}{f.name}"
        raw = payload.get(f.wire_key)
        if _is_empty(raw):
            continue

        if f.from_wire is not None:
            try:
                raw = f.from_wire(raw)
            except (KeyError, TypeError, ValueError) as e:
                diagnostics.add_error(
                    f.error_summary,
                    f"Could not convert attribute {path} from the API value {raw!r}: {e}",
                    path=path,
                )
                continue
        else:
            raw = _copy(raw)

        if f.nested is not None:
            raw = [
                to_state(f.nested, item, diagnostics, prefix=f"{path}[{i}].")
                for i, item in enumerate(raw)
            ]

        result[f.name] = Value.of(raw)
    return result
