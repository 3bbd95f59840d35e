from typing import Annotated, NewType, Optional

import pytest

from fluentbuilder.defaults import DEFAULT_VALUE_ACCESSORS, resolve_default
from fluentbuilder.domain import Char, DefaultValue, ScalarKind
from fluentbuilder.type_utils import normalize_type, scalar_kind, strip_annotated, types_match

UserId = NewType("UserId", int)


@pytest.mark.parametrize(
    "declared_type, expected",
    [
        (int, 7),
        (float, 2.5),
        (bool, True),
        (Char, "x"),
        (str, "hello"),
        (bytes, b"raw"),
        (Optional[int], 7),
        (int | None, 7),
        (UserId, 7),
        (Annotated[str, "label"], "hello"),
    ],
)
def test_resolves_the_attribute_matching_the_type(declared_type, expected):
    metadata = DefaultValue(
        int_value=7,
        float_value=2.5,
        bool_value=True,
        char_value="x",
        str_value="hello",
        bytes_value=b"raw",
    )

    assert resolve_default(declared_type, metadata) == expected


def test_placeholders_apply_when_attribute_not_given():
    metadata = DefaultValue()

    assert resolve_default(int, metadata) == -1
    assert resolve_default(str, metadata) == ""
    assert resolve_default(bool, metadata) is False


@pytest.mark.parametrize("declared_type", [list[str], dict[str, int], object, Optional[list[int]], int | str])
def test_unsupported_types_have_no_default(declared_type):
    assert resolve_default(declared_type, DefaultValue(int_value=1)) is None


def test_accessor_table_is_read_only():
    assert set(DEFAULT_VALUE_ACCESSORS) == set(ScalarKind)
    with pytest.raises(TypeError):
        DEFAULT_VALUE_ACCESSORS[ScalarKind.INTEGER] = lambda metadata: 0


def test_bool_is_not_an_integer_kind():
    assert scalar_kind(bool) is ScalarKind.BOOLEAN
    assert scalar_kind(int) is ScalarKind.INTEGER


def test_char_is_its_own_kind():
    assert scalar_kind(Char) is ScalarKind.CHARACTER
    assert normalize_type(Optional[Char]) is Char


def test_normalize_type_unwraps_annotations_optional_and_newtype():
    assert normalize_type(Annotated[Optional[UserId], "meta"]) is int
    assert normalize_type(list[str]) == list[str]


def test_strip_annotated_keeps_inner_type():
    assert strip_annotated(Annotated[Annotated[int, "a"], "b"]) is int


def test_types_match_ignores_annotated_metadata():
    assert types_match(Annotated[int, DefaultValue()], int)
    assert types_match(list[str], list[str])
    assert not types_match(list[str], list[int])
    assert not types_match(UserId, int)
