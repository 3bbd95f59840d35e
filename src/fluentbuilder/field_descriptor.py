"""Per-field state tracked by a builder session."""

from typing import Any, Generic, Optional, TypeVar

__all__ = ["FieldDescriptor"]

T = TypeVar("T")


class FieldDescriptor(Generic[T]):
    """Holds a field's declared type and the value a builder will pass for it.

    A descriptor starts with no value. It may be seeded with a default, which does
    not count as the caller setting it: ``explicitly_set`` only becomes True once
    :meth:`set_value` is called. This lets a session override a default exactly once
    while still rejecting a second explicit set.

    Attributes:
        name: The field name, which is also the name of its builder operation.
        declared_type: The type the constructor expects at this field's position.
        value: The value that will be passed to the constructor.
        explicitly_set: Whether the caller has set this field in the current session.
    """

    __slots__ = ("name", "declared_type", "value", "explicitly_set", "_default", "_has_default")

    def __init__(self, name: str, declared_type: Any, default: Optional[T] = None):
        self.name = name
        self.declared_type = declared_type
        self.value: Optional[T] = None
        self.explicitly_set = False
        self._default: Optional[T] = None
        self._has_default = False
        if default is not None:
            self.set_default_value(default)

    @property
    def has_default(self) -> bool:
        return self._has_default

    @property
    def default(self) -> Optional[T]:
        return self._default

    def set_default_value(self, value: T):
        """Seed the field with a default, leaving ``explicitly_set`` untouched."""
        self._default = value
        self._has_default = True
        self.value = value

    def set_value(self, value: T):
        """Record a caller-supplied value."""
        self.value = value
        self.explicitly_set = True

    def copy(self) -> "FieldDescriptor[T]":
        """Return a fresh descriptor with the same name, type and default, but no explicit value."""
        clone: FieldDescriptor[T] = FieldDescriptor(self.name, self.declared_type)
        if self._has_default:
            clone.set_default_value(self._default)
        return clone

    def __repr__(self) -> str:
        return (
            f"FieldDescriptor(name={self.name!r}, declared_type={self.declared_type!r}, "
            f"value={self.value!r}, explicitly_set={self.explicitly_set})"
        )
