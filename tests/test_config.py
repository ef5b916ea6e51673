from pathlib import Path

import pytest

from ratingindex.utils import (
    DATA_DEFAULTS,
    apply_overrides,
    data_settings,
    load_config,
    parse_override,
)


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yaml"
    config_file.write_text("data:\n  dataset: ml-100k\n  header: false\n", encoding="utf-8")

    config = load_config(config_file)

    assert config["data"]["dataset"] == "ml-100k"
    assert config["data"]["header"] is False


def test_load_config_empty_file(tmp_path: Path) -> None:
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("", encoding="utf-8")

    assert load_config(config_file) == {}


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- ml-100k\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(config_file)


def test_load_config_missing_file() -> None:
    with pytest.raises(FileNotFoundError):
        load_config(Path("does_not_exist.yaml"))


def test_default_config_matches_data_defaults() -> None:
    config = load_config(Path(__file__).resolve().parent.parent / "configs" / "default.yaml")

    assert data_settings(config) == dict(DATA_DEFAULTS)


def test_apply_overrides_parses_yaml_values() -> None:
    config = {"data": {"header": False}}

    updated = apply_overrides(config, ["data.header=true", "data.file=ratings.csv", "seed=7"])

    assert updated == {"data": {"header": True, "file": "ratings.csv"}, "seed": 7}
    assert config == {"data": {"header": False}}  # original untouched


def test_apply_overrides_refuses_to_replace_scalar_with_section() -> None:
    with pytest.raises(ValueError):
        apply_overrides({"data": "ml-100k"}, ["data.dataset=ml-1m"])


def test_parse_override_requires_key_and_value() -> None:
    assert parse_override("data.sep=;") == ("data.sep", ";")
    with pytest.raises(ValueError):
        parse_override("data.header")
    with pytest.raises(ValueError):
        parse_override("=1")
    with pytest.raises(ValueError):
        parse_override("data..sep=;")


def test_data_settings_merges_defaults() -> None:
    settings = data_settings({"data": {"source": "csv", "file": "r.csv", "header": True}})

    assert settings["file"] == "r.csv"
    assert settings["header"] is True
    assert settings["sep"] == ","
    assert data_settings({})["dataset"] == "ml-100k"


def test_data_settings_validates_source() -> None:
    with pytest.raises(ValueError):
        data_settings({"data": {"source": "parquet"}})
    with pytest.raises(ValueError):
        data_settings({"data": {"source": "netflix"}})
