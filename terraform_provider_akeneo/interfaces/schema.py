"""
Declarative schemas for the provider and its resources.

A schema describes every attribute a configuration block accepts: its type,
whether it is required, whether it is sensitive, and which validators run on
it. The same object is used to decode raw configuration (plain Python data
loaded from YAML or JSON) into tri-state values, to validate a decoded
configuration, and to render documentation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..helpers import Diagnostics
from ..models import State, Value
from ..validators import BaseValidator

STRING = "string"
BOOL = "bool"
INT64 = "int64"
NUMBER = "number"
LIST = "list"
MAP = "map"
MAP_OF_LISTS = "map_of_lists"
LIST_NESTED = "list_nested"


@dataclass
class Attribute:
    """A single attribute of a schema."""

    type: str
    description: str = ""
    required: bool = False
    sensitive: bool = False
    validators: List[BaseValidator] = field(default_factory=list)
    # Attributes of each element of a LIST_NESTED attribute.
    nested: Optional[Dict[str, "Attribute"]] = None

    @property
    def optional(self) -> bool:
        return not self.required


@dataclass
class Schema:
    attributes: Dict[str, Attribute]
    description: str = ""

    def empty_state(self) -> State:
        return {name: Value.null() for name in self.attributes}

    def decode(self, raw: Optional[Dict[str, Any]], diagnostics: Diagnostics) -> State:
        """
        Converts raw configuration into a state of tri-state values.

        Missing keys and `None` become null values; `Value` instances are taken
        as-is, which lets a host pass unknown values through. Type mismatches and
        unsupported keys are reported as error diagnostics.
        """
        return _decode_object(self.attributes, raw or {}, diagnostics, "")

    def validate(self, state: State, diagnostics: Diagnostics):
        """Checks required attributes and runs every attribute validator."""
        _validate_object(self.attributes, state, diagnostics, "")


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def _decode_object(
    attributes: Dict[str, Attribute],
    raw: Dict[str, Any],
    diagnostics: Diagnostics,
    prefix: str,
) -> State:
    if not isinstance(raw, dict):
        diagnostics.add_error(
            "Incorrect attribute value type",
            f"Expected an object, got: {type(raw).__name__}",
            path=prefix or None,
        )
        return {name: Value.null() for name in attributes}

    for key in raw:
        if key not in attributes:
            diagnostics.add_error(
                "Unsupported argument",
                f'An argument named "{key}" is not expected here.',
                path=_join(prefix, key),
            )

    state = {}
    for name, attribute in attributes.items():
        path = _join(prefix, name)
        state[name] = _decode_value(attribute, raw.get(name), diagnostics, path)
    return state


def _decode_value(
    attribute: Attribute, raw: Any, diagnostics: Diagnostics, path: str
) -> Value:
    if isinstance(raw, Value):
        return raw
    if raw is None:
        return Value.null()

    def mismatch(expected: str) -> Value:
        diagnostics.add_error(
            "Incorrect attribute value type",
            f"Attribute {path} must be {expected}, got: {raw!r}",
            path=path,
        )
        return Value.null()

    kind = attribute.type
    if kind == STRING:
        return Value.of(raw) if isinstance(raw, str) else mismatch("a string")
    if kind == BOOL:
        return Value.of(raw) if isinstance(raw, bool) else mismatch("a bool")
    if kind == INT64:
        if isinstance(raw, int) and not isinstance(raw, bool):
            return Value.of(raw)
        return mismatch("a whole number")
    if kind == NUMBER:
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return Value.of(float(raw))
        return mismatch("a number")
    if kind == LIST:
        if isinstance(raw, list) and all(isinstance(v, str) for v in raw):
            return Value.of(list(raw))
        return mismatch("a list of strings")
    if kind == MAP:
        if isinstance(raw, dict) and all(
            isinstance(k, str) and isinstance(v, str) for k, v in raw.items()
        ):
            return Value.of(dict(raw))
        return mismatch("a map of strings")
    if kind == MAP_OF_LISTS:
        if isinstance(raw, dict) and all(
            isinstance(v, list) and all(isinstance(i, str) for i in v)
            for v in raw.values()
        ):
            return Value.of({k: list(v) for k, v in raw.items()})
        return mismatch("a map of lists of strings")
    if kind == LIST_NESTED:
        if not isinstance(raw, list):
            return mismatch("a list of objects")
        return Value.of(
            [
                _decode_object(attribute.nested, item, diagnostics, f"{path}[{i}]")
                for i, item in enumerate(raw)
            ]
        )
    raise ValueError(f"Unsupported schema attribute type: {kind}")


def _validate_object(
    attributes: Dict[str, Attribute],
    state: State,
    diagnostics: Diagnostics,
    prefix: str,
):
    for name, attribute in attributes.items():
        path = _join(prefix, name)
        value = state.get(name, Value.null())

        if attribute.required and value.is_null:
            diagnostics.add_error(
                "Missing required argument",
                f'The argument "{path}" is required, but no definition was found.',
                path=path,
            )
            continue

        for validator in attribute.validators:
            validator.validate(path, value, diagnostics)

        if attribute.type == LIST_NESTED and value.is_known:
            for i, item in enumerate(value.value):
                _validate_object(attribute.nested, item, diagnostics, f"{path}[{i}]")
