"""Introspection of capability interfaces.

A capability interface is a class (usually a ``typing.Protocol``) whose public
methods declare the operations a builder exposes: one single-argument setter per
field, named after the field, plus a terminal operation that returns the target.

    >>> class Builder(Protocol):
    ...     def age(self, age: int) -> "Builder": ...
    ...     def name(self, name: str) -> "Builder": ...
    ...     def build(self) -> Person: ...
"""

import inspect
from dataclasses import dataclass
from typing import Any, Optional, Protocol, Generic, get_type_hints

from fluentbuilder.domain import DefaultValue
from fluentbuilder.errors import DescriptorError
from fluentbuilder.settings import Settings

__all__ = [
    "SetterOperation",
    "CapabilityInterface",
    "capability_from_class",
    "BUILDER_METADATA_ATTR",
    "CAPABILITY_LINK_ATTR",
]


BUILDER_METADATA_ATTR = "__builder_metadata__"
"""Attribute on capability methods that holds metadata attached by decorators."""

CAPABILITY_LINK_ATTR = "__builder_capability__"
"""Attribute on a target type naming its explicitly linked capability interface."""

_IGNORED_BASES = (object, Protocol, Generic)


@dataclass(frozen=True)
class SetterOperation:
    """A setter declared on a capability interface.

    Attributes:
        name: The operation name, matching the field it sets.
        parameter_name: The name the argument may be passed by as a keyword, or None if
            it is positional-only.
        parameter_type: The annotated type of the setter's argument, if any.
        default_value: Default-value metadata attached to the setter, if any.
    """

    name: str
    parameter_name: Optional[str]
    parameter_type: Optional[Any]
    default_value: Optional[DefaultValue]


@dataclass(frozen=True)
class CapabilityInterface:
    """Description of the operations a builder must expose."""

    source: type
    """The class the description was read from."""

    setters: tuple[SetterOperation, ...]
    """Setter operations in declaration order."""

    terminal: str
    """Name of the terminal construction operation."""

    @property
    def operation_names(self) -> tuple[str, ...]:
        return tuple(setter.name for setter in self.setters) + (self.terminal,)

    def setter(self, name: str) -> Optional[SetterOperation]:
        return next((setter for setter in self.setters if setter.name == name), None)


def capability_from_class(cls: type, settings: Settings) -> CapabilityInterface:
    """Read a :class:`CapabilityInterface` from a class's public methods.

    Methods are collected from the class and its bases, excluding ``object`` and the
    typing machinery, in definition order. Private names are ignored.

    Args:
        cls: The capability interface class.
        settings: Supplies the name of the terminal operation.

    Returns:
        The capability description.

    Raises:
        DescriptorError: If ``cls`` is not a class, declares no terminal operation,
            declares a terminal operation taking arguments, or declares a setter that
            does not take exactly one argument.
    """
    if not inspect.isclass(cls):
        raise DescriptorError(f"Capability interface {cls!r} is not a class")

    terminal = settings.terminal_operation
    setters: list[SetterOperation] = []
    found_terminal = False

    for name, func in _public_methods(cls).items():
        parameters = _call_parameters(func)
        if name == terminal:
            if parameters:
                raise DescriptorError(
                    f"Terminal operation {cls.__name__}.{name} must take no arguments, "
                    f"but declares {[p.name for p in parameters]}"
                )
            found_terminal = True
            continue

        if len(parameters) != 1 or parameters[0].kind not in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            raise DescriptorError(
                f"Setter {cls.__name__}.{name} must take exactly one positional argument, "
                f"but declares {[str(p) for p in parameters]}"
            )

        setters.append(
            SetterOperation(
                name,
                None if parameters[0].kind is inspect.Parameter.POSITIONAL_ONLY else parameters[0].name,
                _parameter_type(func, parameters[0]),
                getattr(func, BUILDER_METADATA_ATTR, {}).get("default_value"),
            )
        )

    if not found_terminal:
        raise DescriptorError(
            f"Capability interface {cls.__name__} does not declare a terminal operation '{terminal}'"
        )

    return CapabilityInterface(cls, tuple(setters), terminal)


def _public_methods(cls: type) -> dict[str, Any]:
    methods: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass in _IGNORED_BASES:
            continue
        for name, member in vars(klass).items():
            if name.startswith("_") or not inspect.isfunction(member):
                continue
            methods[name] = member
    return methods


def _call_parameters(func) -> list[inspect.Parameter]:
    """Parameters of an unbound method, without ``self``."""
    parameters = list(inspect.signature(func).parameters.values())
    return parameters[1:]


def _parameter_type(func, parameter: inspect.Parameter) -> Optional[Any]:
    # Return annotations commonly forward-reference the enclosing class, which may
    # not resolve from the function's globals; fall back to the raw annotation.
    try:
        hints = get_type_hints(func, include_extras=True)
    except (NameError, TypeError):
        hints = {}
    annotation = hints.get(parameter.name, parameter.annotation)
    return None if annotation is inspect.Parameter.empty else annotation
