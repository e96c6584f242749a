"""Shared helper functions and constants."""

import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

# Mapping from provider schema types to the names used in rendered docs.
SCHEMA_TYPE_DOC_NAMES = {
    "string": "String",
    "bool": "Boolean",
    "int64": "Number",
    "number": "Number",
    "list": "List of String",
    "map": "Map of String",
    "map_of_lists": "Map of List of String",
    "list_nested": "Attributes List",
}

DEFAULT_REGISTRY_ADDRESS = "registry.terraform.io/0xfrej/akeneo"

PROVIDER_TYPE_NAME = "akeneo"

# Upper bound shared by every int64 attribute that Akeneo stores as a signed 32-bit int.
MAX_INT32 = 2147483647

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"


def humanize(type_name: str) -> str:
    """Turns a resource type name such as 'akeneo_attribute_group' into 'attribute group'."""
    prefix = f"{PROVIDER_TYPE_NAME}_"
    if type_name.startswith(prefix):
        type_name = type_name[len(prefix):]
    return type_name.replace("_", " ")


@dataclass(frozen=True)
class Diagnostic:
    """A single user-facing error or warning produced by a provider operation."""

    severity: str
    summary: str
    detail: str = ""
    # Attribute path the diagnostic refers to, e.g. "labels" or "units[0].symbol".
    path: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "severity": self.severity,
            "summary": self.summary,
            "detail": self.detail,
        }
        if self.path is not None:
            data["path"] = self.path
        return data


class Diagnostics:
    """Collects diagnostics for one operation and reports whether it must abort."""

    def __init__(self, diagnostics: Optional[Iterable[Diagnostic]] = None):
        self.items: List[Diagnostic] = list(diagnostics or [])

    def add_error(self, summary: str, detail: str = "", path: Optional[str] = None):
        self.items.append(Diagnostic(SEVERITY_ERROR, summary, detail, path))

    def add_warning(self, summary: str, detail: str = "", path: Optional[str] = None):
        self.items.append(Diagnostic(SEVERITY_WARNING, summary, detail, path))

    def extend(self, other: Iterable[Diagnostic]):
        self.items.extend(other)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.items if d.severity == SEVERITY_ERROR]

    @property
    def has_error(self) -> bool:
        return len(self.errors) > 0

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_list(self) -> List[dict]:
        return [d.to_dict() for d in self.items]

    def report(self):
        """Prints all collected errors to stderr and exits if any exist."""
        if self.has_error:
            print(
                "\nThe provider failed with the following errors:",
                file=sys.stderr,
            )
            for i, error in enumerate(self.errors, 1):
                location = f" ({error.path})" if error.path else ""
                print(f"  {i}. {error.summary}{location}", file=sys.stderr)
                if error.detail:
                    print(f"     {error.detail}", file=sys.stderr)
            sys.exit(1)
