from dataclasses import dataclass
from typing import NamedTuple, Protocol

import pytest

from beans import MyBean
from fluentbuilder.bean_descriptor import BeanDescriptor
from fluentbuilder.builders import from_template, of, template
from fluentbuilder.errors import DescriptorError


def test_of_describes_and_starts_a_session():
    bean = of(MyBean).age(10).name("Bob").items(["world"]).tags({"hello": 1}).build()

    assert bean == MyBean(10, "Bob", ["world"], {"hello": 1})


def test_cached_template_builds_many_instances():
    cached = template(MyBean)

    first = from_template(cached, MyBean.Builder).age(25).name("Scipio").build()
    second = from_template(cached).items(["x"]).build()

    assert isinstance(cached, BeanDescriptor)
    assert first == MyBean(25, "Scipio", None, None)
    assert second == MyBean(1, "default name", ["x"], None)


def test_from_template_accepts_a_builder():
    original = of(MyBean).age(99)

    assert from_template(original).build().age == 1


def test_of_with_explicit_capability_and_field_order():
    @dataclass
    class Span:
        end: int
        start: int

    class SpanBuilder(Protocol):
        def start(self, start: int) -> "SpanBuilder": ...

        def end(self, end: int) -> "SpanBuilder": ...

        def build(self) -> Span: ...

    span = of(Span, SpanBuilder, field_order=["end", "start"]).start(1).end(5).build()

    assert span == Span(5, 1)


def test_of_builds_named_tuples():
    class Point(NamedTuple):
        x: int
        y: int

    class PointBuilder(Protocol):
        def x(self, x: int) -> "PointBuilder": ...

        def y(self, y: int) -> "PointBuilder": ...

        def build(self) -> Point: ...

    assert of(Point, PointBuilder).x(1).y(2).build() == Point(1, 2)


def test_of_reports_configuration_errors_immediately():
    @dataclass
    class Bare:
        value: int

    with pytest.raises(DescriptorError, match="has no capability interface"):
        of(Bare)
