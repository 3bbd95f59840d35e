"""High level entry points for creating builders."""

from typing import Iterable, Optional, TypeVar, Union, cast, overload

from fluentbuilder.bean_descriptor import BeanDescriptor
from fluentbuilder.descriptor_factory import describe
from fluentbuilder.dispatch import FluentBuilder, create_builder
from fluentbuilder.settings import Settings

__all__ = ["template", "of", "from_template"]

B = TypeVar("B")


def template(
    target: type,
    capability: Optional[type] = None,
    field_order: Optional[Iterable[str]] = None,
    settings: Optional[Settings] = None,
) -> BeanDescriptor:
    """Describe ``target`` once, for reuse with :func:`from_template`.

    Use this when many instances of the same type will be built, to avoid repeating
    the introspection for every builder.

    Raises:
        DescriptorError: If the target cannot be described.

    Example:
        >>> person_template = template(Person)
        >>> alice = from_template(person_template).name("Alice").build()
        >>> bob = from_template(person_template).name("Bob").build()
    """
    return describe(target, capability, field_order, settings)


@overload
def of(
    target: type,
    capability: type[B],
    field_order: Optional[Iterable[str]] = None,
    settings: Optional[Settings] = None,
) -> B: ...


@overload
def of(
    target: type,
    capability: None = None,
    field_order: Optional[Iterable[str]] = None,
    settings: Optional[Settings] = None,
) -> FluentBuilder: ...


def of(target, capability=None, field_order=None, settings=None):
    """Describe ``target`` and start a builder session for it.

    When ``capability`` is given, the result is typed as that interface, so static
    checkers see its chaining signatures.

    Raises:
        DescriptorError: If the target cannot be described.

    Example:
        >>> person = of(Person).age(10).name("Bob").build()
    """
    return create_builder(describe(target, capability, field_order, settings))


def from_template(source: Union[BeanDescriptor, FluentBuilder], capability: Optional[type[B]] = None) -> B:
    """Start a new builder session from a template or an existing builder.

    Args:
        source: A template from :func:`template`, or a builder whose template is reused.
        capability: Optional capability interface, used only to type the result.
    """
    return cast(B, create_builder(source))
