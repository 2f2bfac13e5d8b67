import datetime

import pytest

from clikit.altsrc.fetch import LoadError
from clikit.altsrc.file_sources import (
    normalize_toml_map,
    toml_source_from_file,
    toml_source_from_flag_func,
    yaml_source_from_file,
    yaml_source_from_flag_func,
)


class FakeContext:
    def __init__(self, values=None):
        self.values = dict(values or {})

    def is_set(self, name):
        return name in self.values

    def string(self, name):
        return str(self.values.get(name, ""))


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def test_toml_simple(tmp_path):
    path = write(tmp_path, "current.toml", "test = 15")
    src = toml_source_from_file(path)
    assert src.get_int("test") == 15
    assert src.source() == path


def test_toml_nested(tmp_path):
    path = write(tmp_path, "current.toml", "[top]\ntest = 15")
    assert toml_source_from_file(path).get_int("top.test") == 15


def test_toml_invalid(tmp_path):
    path = write(tmp_path, "bad.toml", "test = = 15")
    with pytest.raises(LoadError, match="Unable to load TOML file"):
        toml_source_from_file(path)


def test_toml_missing(tmp_path):
    with pytest.raises(LoadError):
        toml_source_from_file(str(tmp_path / "absent.toml"))


def test_normalize_keeps_supported_values():
    data = {"a": {"b": 1, "c": 2.5}, "d": [1, "x"], "e": True, "f": "s"}
    assert normalize_toml_map(data) == data


def test_normalize_rejects_dates():
    with pytest.raises(ValueError, match="Unsupported"):
        normalize_toml_map({"when": datetime.date(2020, 1, 1)})


def test_toml_with_date_fails(tmp_path):
    path = write(tmp_path, "date.toml", "when = 2020-01-01")
    with pytest.raises(LoadError):
        toml_source_from_file(path)


def test_toml_flag_func(tmp_path):
    path = write(tmp_path, "current.toml", "test = 15")
    create = toml_source_from_flag_func("load")
    assert create(FakeContext({"load": path})).get_int("test") == 15
    assert not create(FakeContext()).is_set("test")


def test_yaml_simple(tmp_path):
    path = write(tmp_path, "current.yaml", "test: 15")
    src = yaml_source_from_file(path)
    assert src.get_int("test") == 15
    assert src.source() == path


def test_yaml_nested(tmp_path):
    path = write(tmp_path, "current.yaml", "top:\n  test: 15")
    assert yaml_source_from_file(path).get_int("top.test") == 15


def test_yaml_empty_document(tmp_path):
    path = write(tmp_path, "empty.yml", "")
    assert not yaml_source_from_file(path).is_set("anything")


def test_yaml_not_mapping(tmp_path):
    path = write(tmp_path, "list.yaml", "- 1\n- 2\n")
    with pytest.raises(LoadError, match="Unable to load Yaml file"):
        yaml_source_from_file(path)


def test_yaml_missing(tmp_path):
    with pytest.raises(LoadError):
        yaml_source_from_file(str(tmp_path / "absent.yaml"))


def test_yaml_flag_func(tmp_path):
    path = write(tmp_path, "current.yaml", "test: 15")
    create = yaml_source_from_flag_func("load")
    assert create(FakeContext({"load": path})).get_int("test") == 15
    assert create(FakeContext()).source() == ""