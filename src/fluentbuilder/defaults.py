"""Resolution of declared default values.

A :class:`~fluentbuilder.domain.DefaultValue` carries one placeholder per scalar
kind. Which of them applies depends on the declared type of the field, so the
resolution is a lookup from the field's normalised :class:`ScalarKind` to an
accessor reading the matching attribute.
"""

from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from fluentbuilder.domain import DefaultValue, ScalarKind
from fluentbuilder.type_utils import scalar_kind

__all__ = ["DEFAULT_VALUE_ACCESSORS", "resolve_default"]


DEFAULT_VALUE_ACCESSORS: Mapping[ScalarKind, Callable[[DefaultValue], Any]] = MappingProxyType(
    {
        ScalarKind.INTEGER: lambda metadata: metadata.int_value,
        ScalarKind.FLOAT: lambda metadata: metadata.float_value,
        ScalarKind.BOOLEAN: lambda metadata: metadata.bool_value,
        ScalarKind.CHARACTER: lambda metadata: metadata.char_value,
        ScalarKind.STRING: lambda metadata: metadata.str_value,
        ScalarKind.BYTES: lambda metadata: metadata.bytes_value,
    }
)
"""Read-only accessor table, keyed by scalar kind."""


def resolve_default(declared_type: Any, metadata: DefaultValue) -> Optional[Any]:
    """Resolve the default a field of ``declared_type`` receives from ``metadata``.

    Args:
        declared_type: The field's declared type annotation.
        metadata: The default-value metadata attached to the field or its setter.

    Returns:
        The resolved default, or None if ``declared_type`` is not a supported scalar.

    Example:
        >>> resolve_default(int, DefaultValue(int_value=1))             # 1
        >>> resolve_default(Optional[str], DefaultValue(str_value="x"))  # "x"
        >>> resolve_default(list[str], DefaultValue())                   # None
    """
    kind = scalar_kind(declared_type)
    if kind is None:
        return None
    return DEFAULT_VALUE_ACCESSORS[kind](metadata)
