"""Domain models used throughout the framework."""

from dataclasses import dataclass
from enum import Enum
from typing import NewType

__all__ = ["Char", "DefaultValue", "ScalarKind", "SessionState"]


Char = NewType("Char", str)
"""A single character. Use as a field annotation to get character default resolution."""


class ScalarKind(Enum):
    """Normalised scalar kinds for which a default value can be declared."""

    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    CHARACTER = "character"
    STRING = "string"
    BYTES = "bytes"


class SessionState(Enum):
    ACCUMULATING = "accumulating"
    BUILT = "built"


@dataclass(frozen=True)
class DefaultValue:
    """Declarative default for a builder field.

    Only the attribute matching the field's scalar kind is read; the others keep
    their placeholder values and are ignored. An ``int`` field declared with
    ``DefaultValue(int_value=1)`` defaults to ``1``, a ``str`` field declared with
    ``DefaultValue(str_value="x")`` defaults to ``"x"``.

    Attributes:
        int_value: Used for ``int`` fields.
        float_value: Used for ``float`` fields.
        bool_value: Used for ``bool`` fields.
        char_value: Used for :data:`Char` fields.
        str_value: Used for ``str`` fields.
        bytes_value: Used for ``bytes`` fields.
    """

    int_value: int = -1
    float_value: float = -1.0
    bool_value: bool = False
    char_value: str = " "
    str_value: str = ""
    bytes_value: bytes = b""
