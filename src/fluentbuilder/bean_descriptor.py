"""Description of a target type and the state of one builder session.

A :class:`BeanDescriptor` is produced once per target type by
:func:`~fluentbuilder.descriptor_factory.describe` and is used as a template: it is
never mutated. Each builder session works on its own :meth:`~BeanDescriptor.clone`,
so sessions created from the same template never share field state.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional, Union

from fluentbuilder.capability import CapabilityInterface
from fluentbuilder.field_descriptor import FieldDescriptor

__all__ = ["SetField", "Build", "Operation", "BeanDescriptor"]


@dataclass(frozen=True)
class SetField:
    """Dispatch entry routing an operation to the field at ``index``."""

    index: int


@dataclass(frozen=True)
class Build:
    """Dispatch entry routing an operation to construction of the target."""

    pass


Operation = Union[SetField, Build]


@dataclass(frozen=True)
class BeanDescriptor:
    """Fields, constructor and capability interface of a target type.

    Attributes:
        target: The type being built.
        constructor: Callable taking one positional argument per field, in field order.
        capability: The operations exposed by builders for this target.
        ordered_fields: Field descriptors in constructor parameter order.
        fields_by_name: Read-only lookup of field descriptors by name. Duplicate names
            are not supported; the last field with a given name wins.
        dispatch_table: Read-only mapping from operation name to the action it performs.
    """

    target: type
    constructor: Callable[..., Any]
    capability: CapabilityInterface
    ordered_fields: tuple[FieldDescriptor, ...]
    fields_by_name: Mapping[str, FieldDescriptor]
    dispatch_table: Mapping[str, Operation]

    @staticmethod
    def from_fields(
        target: type,
        constructor: Callable[..., Any],
        capability: CapabilityInterface,
        fields: list[FieldDescriptor],
    ) -> "BeanDescriptor":
        """Assemble a descriptor, deriving the name lookup and dispatch table from ``fields``."""
        ordered_fields = tuple(fields)
        index_by_name = {field.name: index for index, field in enumerate(ordered_fields)}

        dispatch_table: dict[str, Operation] = {
            setter.name: SetField(index_by_name[setter.name])
            for setter in capability.setters
            if setter.name in index_by_name
        }
        dispatch_table[capability.terminal] = Build()

        return BeanDescriptor(
            target,
            constructor,
            capability,
            ordered_fields,
            MappingProxyType({name: ordered_fields[index] for name, index in index_by_name.items()}),
            MappingProxyType(dispatch_table),
        )

    def clone(self) -> "BeanDescriptor":
        """Return a descriptor with independent copies of every field descriptor.

        Seeded defaults are carried over; explicitly set values are not.
        """
        fields = tuple(field.copy() for field in self.ordered_fields)
        return BeanDescriptor(
            self.target,
            self.constructor,
            self.capability,
            fields,
            MappingProxyType({field.name: field for field in fields}),
            self.dispatch_table,
        )

    def field_for(self, name: str) -> Optional[FieldDescriptor]:
        return self.fields_by_name.get(name)

    def constructor_arguments(self) -> list[Any]:
        """Current field values in constructor order."""
        return [field.value for field in self.ordered_fields]

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.ordered_fields)

    def __len__(self) -> int:
        return len(self.ordered_fields)
