"""Fluent builders synthesised from type annotations.

fluentbuilder removes the boilerplate of the builder pattern. A target type
declares its fields and a constructor taking them in order, plus a capability
interface naming one setter per field and a terminal ``build`` operation. At
runtime fluentbuilder introspects the type once into an immutable template and
hands out builder sessions that record values and finally call the constructor.

Key Features:
    - Builders driven by an explicit dispatch table, resolved once per type
    - Typed defaults declared with ``Annotated[int, DefaultValue(int_value=1)]``
    - Each field may be set at most once per session; defaults may be overridden
    - Immutable, shareable templates; independent sessions cloned from them
    - Configuration errors reported when a type is described, not on first use

Basic Usage:
    >>> from dataclasses import dataclass
    >>> from typing import Annotated, Protocol
    >>> from fluentbuilder.builders import of
    >>> from fluentbuilder.domain import DefaultValue
    >>>
    >>> @dataclass(frozen=True)
    ... class Person:
    ...     age: Annotated[int, DefaultValue(int_value=1)]
    ...     name: str
    ...
    ...     class Builder(Protocol):
    ...         def age(self, age: int) -> "Person.Builder": ...
    ...         def name(self, name: str) -> "Person.Builder": ...
    ...         def build(self) -> "Person": ...
    >>>
    >>> of(Person).name("Bob").build()
    Person(age=1, name='Bob')

The framework consists of several core modules:
    - descriptor_factory: Introspection of target types into templates
    - dispatch: Builder sessions and the dispatch of their operations
    - builders: High-level builder construction functions
    - registry: Declaration decorators and a template cache
    - bean_descriptor, field_descriptor: Template and session state
    - capability: Capability interface introspection
    - defaults, type_utils: Default value resolution and type normalisation
    - domain: Core domain models (DefaultValue, Char, ScalarKind, SessionState)
    - errors: Framework-specific exceptions
    - settings: Process-wide configuration
"""
