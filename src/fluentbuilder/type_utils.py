"""Type normalisation helpers used when describing target types."""

import types
from typing import Annotated, Any, Optional, Union, get_args, get_origin

from fluentbuilder.domain import Char, ScalarKind

__all__ = ["strip_annotated", "normalize_type", "scalar_kind", "types_match", "annotated_metadata"]


_SCALAR_KINDS: dict[type, ScalarKind] = {
    int: ScalarKind.INTEGER,
    float: ScalarKind.FLOAT,
    bool: ScalarKind.BOOLEAN,
    str: ScalarKind.STRING,
    bytes: ScalarKind.BYTES,
}


def strip_annotated(annotation: Any) -> Any:
    """Remove any ``Annotated`` wrapper, returning the underlying type."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def annotated_metadata(annotation: Any) -> tuple:
    """Return the metadata attached to an ``Annotated`` type, or an empty tuple."""
    if get_origin(annotation) is Annotated:
        return tuple(annotation.__metadata__)
    return ()


def _strip_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def normalize_type(annotation: Any) -> Any:
    """Reduce an annotation to the type a default value would be resolved against.

    ``Annotated`` wrappers and ``Optional`` are removed and ``NewType`` aliases are
    followed to their supertype, except for :data:`Char` which is its own kind.

    Example:
        >>> normalize_type(Annotated[Optional[int], "meta"])  # int
        >>> normalize_type(Char)                              # Char
    """
    annotation = _strip_optional(strip_annotated(annotation))
    while annotation is not Char and hasattr(annotation, "__supertype__"):
        annotation = annotation.__supertype__
    return annotation


def scalar_kind(annotation: Any) -> Optional[ScalarKind]:
    """Map an annotation to its :class:`ScalarKind`, or None if it is not a scalar."""
    normalized = normalize_type(annotation)
    if normalized is Char:
        return ScalarKind.CHARACTER
    if not isinstance(normalized, type):
        return None
    return _SCALAR_KINDS.get(normalized)


def types_match(expected: Any, actual: Any) -> bool:
    """Check whether two annotations denote the same type, ignoring ``Annotated`` metadata."""
    return strip_annotated(expected) == strip_annotated(actual)
