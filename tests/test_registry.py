from dataclasses import dataclass
from typing import Protocol

import pytest

from beans import MyBean
from fluentbuilder.capability import BUILDER_METADATA_ATTR
from fluentbuilder.domain import DefaultValue
from fluentbuilder.errors import DescriptorError
from fluentbuilder.registry import BuilderRegistry, default_value


@pytest.fixture
def registry():
    return BuilderRegistry()


@dataclass(frozen=True)
class Greeting:
    salutation: str
    name: str


def test_builds_decorator_registers_capability(registry):
    @registry.builds(Greeting)
    class GreetingBuilder(Protocol):
        @default_value(str_value="Hello")
        def salutation(self, salutation: str) -> "GreetingBuilder": ...

        def name(self, name: str) -> "GreetingBuilder": ...

        def build(self) -> Greeting: ...

    assert Greeting in registry
    assert registry.template(Greeting).capability.source is GreetingBuilder
    assert registry.builder(Greeting).name("Dominic").build() == Greeting("Hello", "Dominic")


def test_each_builder_is_a_fresh_session(registry):
    registry.register(MyBean)

    first = registry.builder(MyBean).age(1)
    second = registry.builder(MyBean).age(2)

    assert first.build().age == 1
    assert second.build().age == 2


def test_template_is_described_once(registry):
    template = registry.register(MyBean)

    assert registry.template(MyBean) is template
    assert registry.registered_targets() == [MyBean]


def test_configuration_errors_surface_at_declaration(registry):
    with pytest.raises(DescriptorError, match="does not declare a terminal operation"):

        @registry.builds(Greeting)
        class GreetingBuilder(Protocol):
            def name(self, name: str) -> "GreetingBuilder": ...

    assert Greeting not in registry


def test_duplicate_registration_raises(registry):
    registry.register(MyBean)

    with pytest.raises(DescriptorError, match="Duplicate registration for target MyBean"):
        registry.register(MyBean)


def test_unregistered_target_raises(registry):
    with pytest.raises(DescriptorError, match="No builder registered for Greeting"):
        registry.builder(Greeting)


def test_default_value_decorator_tags_setter():
    @default_value(int_value=3)
    def age(self, age: int):
        pass

    assert getattr(age, BUILDER_METADATA_ATTR) == {"default_value": DefaultValue(int_value=3)}
