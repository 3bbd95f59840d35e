"""Declaration decorators and a cache of described target types."""

import threading
from typing import Any, Callable, Iterable, Optional

from fluentbuilder.bean_descriptor import BeanDescriptor
from fluentbuilder.capability import BUILDER_METADATA_ATTR, CAPABILITY_LINK_ATTR
from fluentbuilder.descriptor_factory import describe
from fluentbuilder.dispatch import create_builder
from fluentbuilder.domain import DefaultValue
from fluentbuilder.errors import DescriptorError
from fluentbuilder.settings import Settings

__all__ = ["BuilderRegistry", "capability_for", "default_value", "set_metadata"]


def set_metadata(func: Callable, **kwargs) -> Callable:
    metadata = getattr(func, BUILDER_METADATA_ATTR, {})
    metadata.update(kwargs)
    setattr(func, BUILDER_METADATA_ATTR, metadata)
    return func


def default_value(**kwargs) -> Callable:
    """Decorator attaching a default value to a capability setter.

    Takes the same keyword arguments as :class:`DefaultValue`. A default declared on
    the field itself takes precedence.

    Example:
        class Builder(Protocol):
            @default_value(int_value=1)
            def age(self, age: int) -> "Builder": ...
    """
    metadata = DefaultValue(**kwargs)

    def decorator(func: Callable) -> Callable:
        return set_metadata(func, default_value=metadata)

    return decorator


def capability_for(target: type) -> Callable:
    """Class decorator linking a capability interface to the target type it builds.

    Example:
        @capability_for(Person)
        class PersonBuilder(Protocol):
            def name(self, name: str) -> "PersonBuilder": ...
            def build(self) -> Person: ...
    """
    def decorator(capability: type) -> type:
        setattr(target, CAPABILITY_LINK_ATTR, capability)
        return capability

    return decorator


class BuilderRegistry:
    """Cache of descriptor templates, keyed by target type.

    Describing a type is comparatively expensive, so a registry describes each
    target once, when it is registered, and hands out fresh builder sessions from
    the cached template. Registration raises immediately if the target cannot be
    described.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings
        self._templates: dict[type, BeanDescriptor] = {}
        self._lock = threading.Lock()

    def register(
        self,
        target: type,
        capability: Optional[type] = None,
        field_order: Optional[Iterable[str]] = None,
    ) -> BeanDescriptor:
        """Describe ``target`` and cache the resulting template.

        Args:
            target: The type to build.
            capability: Optional explicit capability interface.
            field_order: Optional explicit field ordering.

        Returns:
            The cached template.

        Raises:
            DescriptorError: If the target cannot be described or is already registered.
        """
        template = describe(target, capability, field_order, self._settings)
        with self._lock:
            if target in self._templates:
                raise DescriptorError(f"Duplicate registration for target {target.__qualname__}")
            self._templates[target] = template
        return template

    def builds(self, target: type, field_order: Optional[Iterable[str]] = None) -> Callable:
        """Class decorator registering a capability interface for ``target``.

        Example:
            @registry.builds(Person)
            class PersonBuilder(Protocol):
                def name(self, name: str) -> "PersonBuilder": ...
                def build(self) -> Person: ...
        """
        def decorator(capability: type) -> type:
            self.register(target, capability, field_order)
            return capability

        return decorator

    def template(self, target: type) -> BeanDescriptor:
        with self._lock:
            template = self._templates.get(target)
        if template is None:
            raise DescriptorError(f"No builder registered for {target.__qualname__}")
        return template

    def builder(self, target: type) -> Any:
        """Start a new builder session for a registered target."""
        return create_builder(self.template(target))

    def registered_targets(self) -> list[type]:
        with self._lock:
            return list(self._templates)

    def __contains__(self, target: type) -> bool:
        with self._lock:
            return target in self._templates
