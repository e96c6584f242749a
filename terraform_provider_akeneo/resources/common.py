"""Schema attributes shared by several resource types."""

from ..helpers import MAX_INT32
from ..interfaces.schema import INT64, MAP, STRING, Attribute
from ..validators import Int64Between, LocaleCode, MapKeysAre


def code_attribute(description: str) -> Attribute:
    return Attribute(STRING, description, required=True)


def labels_attribute(description: str = "Label definition per locale") -> Attribute:
    return Attribute(MAP, description, validators=[MapKeysAre(LocaleCode())])


def sort_order_attribute(description: str) -> Attribute:
    return Attribute(INT64, description, validators=[Int64Between(0, MAX_INT32)])
