"""Fluent builder handles driven by a :class:`BeanDescriptor`.

A :class:`FluentBuilder` stands in for an implementation of a capability interface.
Attribute access is resolved through the descriptor's dispatch table: setter names
return a one-argument callable that records a field value and returns the handle,
and the terminal operation returns a callable that invokes the constructor.

Each handle owns a private clone of the template descriptor. Handles are not
thread-safe; a single handle must only be driven by one thread at a time.
"""

import logging
from typing import Any, Callable, Union

from fluentbuilder.bean_descriptor import BeanDescriptor, Build
from fluentbuilder.domain import SessionState
from fluentbuilder.errors import (
    ArityError,
    DescriptorError,
    DoubleSetError,
    StateError,
    UnknownFieldError,
)

__all__ = ["FluentBuilder", "create_builder", "session_state"]

LOG = logging.getLogger(__name__)


class FluentBuilder:
    """A builder session implementing a capability interface by dispatch.

    Example:
        >>> builder = create_builder(describe(Person))
        >>> person = builder.age(10).name("Bob").build()
    """

    __slots__ = ("_template", "_session", "_state")

    def __init__(self, template: BeanDescriptor):
        self._template = template
        self._session = template.clone()
        self._state = SessionState.ACCUMULATING

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Private names are never operations; this also keeps lookups of unset slots
        # from recursing back into __getattr__.
        if name.startswith("_"):
            raise AttributeError(name)

        operation = self._session.dispatch_table.get(name)
        if operation is None:
            raise UnknownFieldError(
                f"{self._target_name} builder has no field '{name}'; "
                f"available operations are {list(self._session.dispatch_table)}"
            )

        if isinstance(operation, Build):
            return self._build

        index = operation.index

        def set_field(*args, **kwargs) -> "FluentBuilder":
            return self._set(name, index, args, kwargs)

        set_field.__name__ = name
        return set_field

    def _set(self, name: str, index: int, args: tuple, kwargs: dict) -> "FluentBuilder":
        self._require_accumulating(name)

        parameter_name = self._session.capability.setter(name).parameter_name
        unexpected = [keyword for keyword in kwargs if keyword != parameter_name]
        if unexpected:
            raise ArityError(
                f"Setter '{name}' of {self._target_name} builder got an unexpected "
                f"keyword argument '{unexpected[0]}'"
            )

        values = args + tuple(kwargs.values())
        if len(values) != 1:
            raise ArityError(
                f"Setter '{name}' of {self._target_name} builder takes exactly one argument, "
                f"but {len(values)} were given"
            )

        field = self._session.ordered_fields[index]
        if field.explicitly_set:
            raise DoubleSetError(
                f"Cannot set field '{name}' of {self._target_name} twice "
                f"(already set to {field.value!r})"
            )

        field.set_value(values[0])
        return self

    def _build(self, *args, **kwargs) -> Any:
        terminal = self._session.capability.terminal
        self._require_accumulating(terminal)

        if args or kwargs:
            raise ArityError(
                f"Terminal operation '{terminal}' of {self._target_name} builder takes no arguments, "
                f"but {len(args) + len(kwargs)} were given"
            )

        instance = self._session.constructor(*self._session.constructor_arguments())
        self._state = SessionState.BUILT
        LOG.debug(
            "Built %s with explicitly set fields %s",
            self._target_name,
            [field.name for field in self._session if field.explicitly_set],
        )
        return instance

    def _require_accumulating(self, operation: str):
        if self._state is not SessionState.ACCUMULATING:
            raise StateError(
                f"Cannot call '{operation}' on {self._target_name} builder: it has already been built"
            )

    @property
    def _target_name(self) -> str:
        return self._session.target.__qualname__

    def __dir__(self) -> list[str]:
        return sorted(set(object.__dir__(self)) | set(self._session.dispatch_table))

    def __repr__(self) -> str:
        explicitly_set = {field.name: field.value for field in self._session if field.explicitly_set}
        return f"FluentBuilder({self._target_name}, state={self._state.value}, set={explicitly_set!r})"


def create_builder(source: Union[BeanDescriptor, FluentBuilder]) -> FluentBuilder:
    """Start a new builder session.

    Args:
        source: A descriptor template, or an existing handle whose template should be
            reused. Values set on an existing handle are not carried over.

    Returns:
        A new, independent :class:`FluentBuilder`.

    Raises:
        DescriptorError: If ``source`` is neither a descriptor nor a builder handle.
    """
    if isinstance(source, FluentBuilder):
        return FluentBuilder(source._template)
    if isinstance(source, BeanDescriptor):
        return FluentBuilder(source)
    raise DescriptorError(f"{source!r} is not a BeanDescriptor or FluentBuilder")


def session_state(builder: FluentBuilder) -> SessionState:
    """Return the state of a builder session.

    This is a function rather than an attribute so that it cannot collide with a
    builder operation of the same name.
    """
    return builder._state
