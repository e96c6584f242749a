"""
This module defines the core data structures shared by the provider, its
resources and the host that drives them.

Configuration and state are modelled as dictionaries of tri-state `Value`
objects, mirroring the planning semantics of Terraform: a value is either
null (intentionally absent), unknown (not yet computed) or known.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .helpers import Diagnostics


@dataclass(frozen=True)
class Value:
    """
    A tri-state configuration value.

    Use the `null()`, `unknown()` and `of()` constructors rather than the
    dataclass initializer so that the state flags stay consistent.
    """

    value: Any = None
    unknown_flag: bool = False
    null_flag: bool = True

    @classmethod
    def null(cls) -> "Value":
        return cls()

    @classmethod
    def unknown(cls) -> "Value":
        return cls(unknown_flag=True, null_flag=False)

    @classmethod
    def of(cls, value: Any) -> "Value":
        if value is None:
            return cls.null()
        return cls(value=value, null_flag=False)

    @property
    def is_null(self) -> bool:
        return self.null_flag

    @property
    def is_unknown(self) -> bool:
        return self.unknown_flag

    @property
    def is_known(self) -> bool:
        return not (self.null_flag or self.unknown_flag)

    def __repr__(self) -> str:
        if self.is_unknown:
            return "Value(<unknown>)"
        if self.is_null:
            return "Value(<null>)"
        return f"Value({self.value!r})"


# A configuration, plan or state object: attribute name -> tri-state value.
State = Dict[str, Value]


def state_to_raw(state: Optional[State]) -> Optional[Dict[str, Any]]:
    """
    Flattens a state into plain Python data for output. Null values become
    `None`, unknown values are omitted, and nested object lists are flattened
    recursively.
    """
    if state is None:
        return None
    raw = {}
    for name, value in state.items():
        if value.is_unknown:
            continue
        raw[name] = _value_to_raw(value.value) if value.is_known else None
    return raw


def _value_to_raw(value: Any) -> Any:
    if isinstance(value, list):
        return [
            state_to_raw(item) if isinstance(item, dict) and _is_state(item) else item
            for item in value
        ]
    if isinstance(value, dict):
        return dict(value)
    return value


def _is_state(item: dict) -> bool:
    return all(isinstance(v, Value) for v in item.values())


@dataclass
class ResourceData:
    """
    The object handed by the provider to every resource during `configure`.
    It is built once and never mutated afterwards.
    """

    client: Any
    extra_attribute_types: List[str] = field(default_factory=list)


@dataclass
class Response:
    """The outcome of one resource lifecycle operation."""

    # The new state; `None` means the resource is (or must be) absent from state.
    state: Optional[State] = None
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": state_to_raw(self.state),
            "diagnostics": self.diagnostics.to_list(),
        }


@dataclass(frozen=True)
class ImportKey:
    """
    Structured identity of a resource for import. Simple entities are keyed by
    `code` alone; nested ones need their parent as well, e.g. an attribute
    option is identified by `("attribute", "code")` and written as
    `"color/red"`.
    """

    fields: Tuple[str, ...] = ("code",)
    separator: str = "/"

    def parse(self, import_id: str) -> Dict[str, str]:
        """
        Splits an import id into its components.

        Raises:
            ValueError: If the id does not have exactly one non-empty part per field.
        """
        parts = import_id.split(self.separator) if len(self.fields) > 1 else [import_id]
        if len(parts) != len(self.fields) or not all(parts):
            raise ValueError(
                f"Expected import identifier with format: {self.format_hint()}. "
                f"Got: {import_id!r}"
            )
        return dict(zip(self.fields, parts))

    def format_hint(self) -> str:
        return self.separator.join(self.fields)
