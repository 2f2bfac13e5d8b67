from datetime import timedelta

import pytest

from clikit.altsrc.source import (
    IncorrectTypeError,
    MapInputSource,
    default_input_source,
    nested_value,
    parse_duration,
)


class _Pair:
    def __init__(self) -> None:
        self.parts = ["", ""]

    def set(self, value: str) -> None:
        self.parts = value.split(",")

    def __str__(self) -> str:
        return ",".join(self.parts)


def test_map_duration():
    source = MapInputSource(
        "test",
        {
            "duration_of_duration_type": timedelta(minutes=1),
            "duration_of_string_type": "1m",
            "duration_of_int_type": 1000,
        },
    )
    assert source.get_duration("duration_of_duration_type") == timedelta(minutes=1)
    assert source.get_duration("duration_of_string_type") == timedelta(minutes=1)
    with pytest.raises(IncorrectTypeError):
        source.get_duration("duration_of_int_type")


def test_duration_bad_string_is_type_error():
    source = MapInputSource("f", {"d": "soon"})
    with pytest.raises(IncorrectTypeError, match="Expected 'duration'"):
        source.get_duration("d")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", timedelta(0)),
        ("1m", timedelta(minutes=1)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("-30s", timedelta(seconds=-30)),
        ("15s", timedelta(seconds=15)),
        ("1.5s", timedelta(seconds=1.5)),
        ("300ms", timedelta(milliseconds=300)),
        ("45s", timedelta(seconds=45)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "bad", "1", "1x", "-", "s"])
def test_parse_duration_rejects(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_int_value_and_missing_default():
    source = MapInputSource("f", {"test": 15, "neg": -1})
    assert source.get_int("test") == 15
    assert source.get_int("neg") == -1
    assert source.get_int("missing") == 0


def test_int_rejects_bool_and_string():
    source = MapInputSource("f", {"b": True, "s": "15"})
    with pytest.raises(IncorrectTypeError):
        source.get_int("b")
    with pytest.raises(IncorrectTypeError, match="Mismatched type for flag 's'"):
        source.get_int("s")


def test_error_message_format():
    source = MapInputSource("f", {"s": "x"})
    with pytest.raises(IncorrectTypeError) as info:
        source.get_int("s")
    assert str(info.value) == "Mismatched type for flag 's'. Expected 'int' but actual is 'str'"


def test_nested_lookup():
    source = MapInputSource("f", {"top": {"test": 15, "inner": {"name": "x"}}})
    assert source.get_int("top.test") == 15
    assert source.get_string("top.inner.name") == "x"
    assert source.is_set("top.test")
    assert not source.is_set("top.other")


def test_nested_value_errors():
    tree = {"top": {"test": 1}, "leaf": 3}
    assert nested_value("top.test", tree) == 1
    with pytest.raises(KeyError):
        nested_value("top", tree)
    with pytest.raises(KeyError):
        nested_value("leaf.x", tree)
    with pytest.raises(KeyError):
        nested_value("nope.x", tree)


def test_direct_key_with_dot_wins():
    source = MapInputSource("f", {"top.test": 7, "top": {"test": 15}})
    assert source.get_int("top.test") == 7


def test_float_string_bool():
    source = MapInputSource("f", {"fl": 1.3, "s": "hello", "b": True})
    assert source.get_float64("fl") == 1.3
    assert source.get_string("s") == "hello"
    assert source.get_bool("b") is True
    assert source.get_float64("none") == 0.0
    assert source.get_string("none") == ""
    assert source.get_bool("none") is False
    with pytest.raises(IncorrectTypeError):
        source.get_float64("s")
    with pytest.raises(IncorrectTypeError):
        source.get_bool("s")


def test_string_slice():
    source = MapInputSource("f", {"ok": ["hello", "world"], "bad": ["a", 1], "scalar": "a"})
    assert source.get_string_slice("ok") == ["hello", "world"]
    assert source.get_string_slice("missing") is None
    with pytest.raises(IncorrectTypeError, match=r"bad\[1\]"):
        source.get_string_slice("bad")
    with pytest.raises(IncorrectTypeError, match=r"\[\]interface\{\}"):
        source.get_string_slice("scalar")


def test_int_slice():
    source = MapInputSource("f", {"ok": [1, 2], "bad": [1, "2"]})
    assert source.get_int_slice("ok") == [1, 2]
    assert source.get_int_slice("missing") is None
    with pytest.raises(IncorrectTypeError, match=r"bad\[1\]"):
        source.get_int_slice("bad")


def test_generic():
    pair = _Pair()
    source = MapInputSource("f", {"g": pair, "bad": 3})
    assert source.get_generic("g") is pair
    assert source.get_generic("missing") is None
    with pytest.raises(IncorrectTypeError, match="cli.Generic"):
        source.get_generic("bad")


def test_source_and_default():
    assert MapInputSource("/path/to/source/file", {}).source() == "/path/to/source/file"
    default = default_input_source()
    assert default.source() == ""
    assert not default.is_set("anything")
    assert default.get_int("anything") == 0