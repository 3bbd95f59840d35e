"""Introspection of target types into :class:`BeanDescriptor` templates.

Describing a type inspects its annotations, resolves declared defaults, finds a
constructor whose parameters line up with the fields and reads the capability
interface. This is the expensive step; the resulting descriptor is immutable and
meant to be cached and cloned for each builder session.
"""

import dataclasses
import inspect
import logging
import sys
from typing import Any, Callable, ClassVar, Iterable, Optional, get_origin, get_type_hints

from fluentbuilder.bean_descriptor import BeanDescriptor
from fluentbuilder.capability import (
    CAPABILITY_LINK_ATTR,
    CapabilityInterface,
    capability_from_class,
)
from fluentbuilder.defaults import resolve_default
from fluentbuilder.domain import DefaultValue
from fluentbuilder.errors import DescriptorError
from fluentbuilder.field_descriptor import FieldDescriptor
from fluentbuilder.settings import Settings, get_settings
from fluentbuilder.type_utils import annotated_metadata, strip_annotated, types_match

__all__ = ["describe", "DEFAULT_VALUE_METADATA_KEY"]

LOG = logging.getLogger(__name__)

DEFAULT_VALUE_METADATA_KEY = "default_value"
"""Key under which a dataclass field's ``metadata`` may carry a :class:`DefaultValue`."""

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclasses.dataclass(frozen=True)
class _DeclaredField:
    name: str
    annotation: Any
    default_value: Optional[DefaultValue]


def describe(
    target: type,
    capability: Optional[type] = None,
    field_order: Optional[Iterable[str]] = None,
    settings: Optional[Settings] = None,
) -> BeanDescriptor:
    """Build a :class:`BeanDescriptor` template for ``target``.

    Args:
        target: The class to describe.
        capability: The capability interface class. If None, it is taken from an
            explicit ``@capability_for(target)`` linkage, then from the target's nested
            class attribute named by ``settings.nested_capability_name``.
        field_order: Optional explicit ordering of the target's field names, used
            instead of declaration order. Must name every field exactly once.
        settings: Overrides the process-wide :func:`get_settings`.

    Returns:
        An immutable descriptor template.

    Raises:
        DescriptorError: If the target is not a class, its annotations cannot be
            resolved, ``field_order`` is invalid, no capability interface is found or
            it is malformed, or no constructor matches the fields.

    Example:
        >>> @dataclass
        ... class Person:
        ...     age: Annotated[int, DefaultValue(int_value=1)]
        ...     name: str
        ...
        ...     class Builder(Protocol):
        ...         def age(self, age: int) -> "Person.Builder": ...
        ...         def name(self, name: str) -> "Person.Builder": ...
        ...         def build(self) -> "Person": ...
        >>> descriptor = describe(Person)
        >>> [field.name for field in descriptor]  # ["age", "name"]
    """
    settings = settings or get_settings()
    if not inspect.isclass(target):
        raise DescriptorError(f"Target {target!r} is not a class")

    declared_fields = _declared_fields(target)
    if field_order is not None:
        declared_fields = _reorder(target, declared_fields, list(field_order))

    capability_description = capability_from_class(
        _find_capability(target, capability, settings), settings
    )

    fields = [
        _make_field_descriptor(target, declared, capability_description, settings)
        for declared in declared_fields
    ]
    constructor = _find_constructor(target, fields)

    LOG.debug(
        "Described %s: operations %s, constructor %s%s",
        target.__qualname__,
        list(capability_description.operation_names),
        getattr(constructor, "__qualname__", repr(constructor)),
        [(field.name, field.declared_type) for field in fields],
    )

    return BeanDescriptor.from_fields(target, constructor, capability_description, fields)


def _declared_fields(target: type) -> list[_DeclaredField]:
    """Collect the target's fields in declaration order.

    Dataclasses contribute their ``init`` fields. Other classes contribute their
    public, non-``ClassVar`` annotations, base classes first.
    """
    try:
        hints = get_type_hints(target, include_extras=True)
    except (NameError, TypeError) as e:
        raise DescriptorError(f"Cannot resolve field annotations of {target.__qualname__}: {e}") from e

    if dataclasses.is_dataclass(target):
        return [
            _declared_field(
                field.name,
                hints.get(field.name, field.type),
                field.metadata.get(DEFAULT_VALUE_METADATA_KEY),
            )
            for field in dataclasses.fields(target)
            if field.init
        ]

    return [
        _declared_field(name, annotation, None)
        for name, annotation in hints.items()
        if not name.startswith("_") and not _is_class_var(annotation)
    ]


def _declared_field(name: str, annotation: Any, metadata_default: Optional[DefaultValue]) -> _DeclaredField:
    annotated_default = next(
        (m for m in annotated_metadata(annotation) if isinstance(m, DefaultValue)), None
    )
    return _DeclaredField(name, annotation, annotated_default or metadata_default)


def _is_class_var(annotation: Any) -> bool:
    annotation = strip_annotated(annotation)
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _reorder(target: type, declared_fields: list[_DeclaredField], field_order: list[str]) -> list[_DeclaredField]:
    by_name = {declared.name: declared for declared in declared_fields}

    unknown = [name for name in field_order if name not in by_name]
    if unknown:
        raise DescriptorError(f"Field order for {target.__qualname__} names unknown fields {unknown}")

    duplicated = sorted({name for name in field_order if field_order.count(name) > 1})
    if duplicated:
        raise DescriptorError(f"Field order for {target.__qualname__} repeats fields {duplicated}")

    missing = [name for name in by_name if name not in field_order]
    if missing:
        raise DescriptorError(f"Field order for {target.__qualname__} omits fields {missing}")

    return [by_name[name] for name in field_order]


def _find_capability(target: type, capability: Optional[type], settings: Settings) -> type:
    if capability is not None:
        return capability

    linked = vars(target).get(CAPABILITY_LINK_ATTR)
    if linked is not None:
        return linked

    nested = vars(target).get(settings.nested_capability_name)
    if inspect.isclass(nested):
        return nested

    raise DescriptorError(
        f"{target.__qualname__} has no capability interface: pass one explicitly, "
        f"link one with @capability_for({target.__name__}), "
        f"or declare a nested class named '{settings.nested_capability_name}'"
    )


def _make_field_descriptor(
    target: type, declared: _DeclaredField, capability: CapabilityInterface, settings: Settings
) -> FieldDescriptor:
    setter = capability.setter(declared.name)

    if (
        settings.warn_on_type_mismatch
        and setter is not None
        and setter.parameter_type is not None
        and not isinstance(setter.parameter_type, str)
        and not types_match(declared.annotation, setter.parameter_type)
    ):
        LOG.warning(
            "Setter %s.%s accepts %r but field %s.%s is declared as %r",
            capability.source.__qualname__,
            setter.name,
            setter.parameter_type,
            target.__qualname__,
            declared.name,
            declared.annotation,
        )

    metadata = declared.default_value or (setter.default_value if setter else None)
    if metadata is None:
        return FieldDescriptor(declared.name, declared.annotation)

    default = resolve_default(declared.annotation, metadata)
    if default is None:
        LOG.warning(
            "Ignoring default value for %s.%s: no default can be declared for type %r",
            target.__qualname__,
            declared.name,
            declared.annotation,
        )
    return FieldDescriptor(declared.name, declared.annotation, default)


def _find_constructor(target: type, fields: list[FieldDescriptor]) -> Callable[..., Any]:
    """Find a constructor taking exactly the fields, positionally, in order.

    The class itself is tried first, then classmethods declared on the class whose
    return annotation is the class.
    """
    candidates: list[Callable[..., Any]] = [target] + [
        getattr(target, name)
        for name, member in vars(target).items()
        if isinstance(member, classmethod) and _returns(member.__func__, target)
    ]

    for candidate in candidates:
        if _signature_matches(candidate, target, fields):
            return candidate

    raise DescriptorError(
        f"No constructor of {target.__qualname__} accepts the fields "
        f"{[(field.name, field.declared_type) for field in fields]} positionally, in that order"
    )


def _returns(func: Callable[..., Any], target: type) -> bool:
    annotation = _resolved_hints(func, target).get("return", inspect.Parameter.empty)
    return annotation is target or annotation in (target.__name__, target.__qualname__)


def _signature_matches(candidate: Callable[..., Any], target: type, fields: list[FieldDescriptor]) -> bool:
    try:
        parameters = list(inspect.signature(candidate).parameters.values())
    except (TypeError, ValueError):
        return False

    if len(parameters) != len(fields) or any(p.kind not in _POSITIONAL for p in parameters):
        return False

    hints = _resolved_hints(
        _class_constructor(target) if candidate is target else getattr(candidate, "__func__", candidate), target
    )
    return all(
        parameter.name in hints and types_match(field.declared_type, hints[parameter.name])
        for parameter, field in zip(parameters, fields)
    )


def _class_constructor(target: type) -> Callable[..., Any]:
    # The method inspect.signature reports for a class: the nearest Python-level
    # __new__ or __init__ along the MRO. NamedTuples and immutable value types only
    # define __new__.
    for base in target.__mro__:
        if base is object:
            break
        for method_name in ("__new__", "__init__"):
            if method_name in vars(base) and inspect.isfunction(getattr(target, method_name)):
                return getattr(target, method_name)
    return target.__init__


def _resolved_hints(func: Callable[..., Any], target: type) -> dict[str, Any]:
    # Annotations inside the class body may name the class itself, which is not
    # yet bound in the module namespace when the class is defined locally.
    module = sys.modules.get(target.__module__)
    globalns = dict(vars(module)) if module else {}
    localns = {**vars(target), target.__name__: target}
    try:
        return get_type_hints(func, globalns=globalns, localns=localns, include_extras=True)
    except (NameError, TypeError):
        return dict(getattr(func, "__annotations__", {}))
