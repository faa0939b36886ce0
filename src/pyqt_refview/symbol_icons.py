"""Symbol-kind classification and its theme icon identifiers."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class SymbolKind(Enum):
    """Classification of a symbol in a call hierarchy."""

    FILE = "file"
    MODULE = "module"
    NAMESPACE = "namespace"
    PACKAGE = "package"
    CLASS = "class"
    METHOD = "method"
    PROPERTY = "property"
    FIELD = "field"
    CONSTRUCTOR = "constructor"
    ENUM = "enum"
    INTERFACE = "interface"
    FUNCTION = "function"
    VARIABLE = "variable"
    CONSTANT = "constant"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    KEY = "key"
    NULL = "null"
    ENUM_MEMBER = "enum-member"
    STRUCT = "struct"
    EVENT = "event"
    OPERATOR = "operator"
    TYPE_PARAMETER = "type-parameter"
    # No icon is registered for these.
    TEXT = "text"
    UNKNOWN = "unknown"


_UNMAPPED = (SymbolKind.TEXT, SymbolKind.UNKNOWN)

SYMBOL_ICON_IDS: Dict[SymbolKind, str] = {
    kind: f"symbol-{kind.value}" for kind in SymbolKind if kind not in _UNMAPPED
}


def icon_id_for_kind(kind: SymbolKind) -> Optional[str]:
    """Return the theme icon id for ``kind``, or None when none is mapped."""
    return SYMBOL_ICON_IDS.get(kind)
