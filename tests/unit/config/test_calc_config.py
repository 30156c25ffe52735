"""
Unit tests for the runtime configuration and its YAML loader.
"""
import logging
from dataclasses import FrozenInstanceError

import pytest

from data_calc.config import (
    CalcConfig,
    DEFAULT_CONFIG,
    configure_logging,
    load_config,
    load_default_config,
    resolve_config,
)
from data_calc.config.yaml_io import read_yaml


def test_default_config_values():
    assert DEFAULT_CONFIG.n_jobs == 1
    assert DEFAULT_CONFIG.max_recursion_depth == 800
    assert DEFAULT_CONFIG.hamming_bit_width == 64
    assert DEFAULT_CONFIG.verbose is False


def test_config_is_immutable():
    with pytest.raises(FrozenInstanceError):
        DEFAULT_CONFIG.n_jobs = 4


@pytest.mark.parametrize(
    "kwargs",
    [
        {"n_jobs": 0},
        {"n_jobs": -2},
        {"max_recursion_depth": 0},
        {"hamming_bit_width": 16},
        {"log_level": "LOUD"},
    ],
)
def test_config_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        CalcConfig(**kwargs)


def test_resolve_config():
    custom = CalcConfig(n_jobs=2)
    assert resolve_config(None) is DEFAULT_CONFIG
    assert resolve_config(custom) is custom


def test_load_config_overrides_defaults(tmp_path):
    path = tmp_path / "calc.yaml"
    path.write_text("n_jobs: -1\nverbose: true\n", encoding="utf-8")

    config = load_config(path)
    assert config.n_jobs == -1
    assert config.verbose is True
    assert config.max_recursion_depth == DEFAULT_CONFIG.max_recursion_depth


def test_load_config_uses_base(tmp_path):
    path = tmp_path / "calc.yml"
    path.write_text("hamming_bit_width: 32\n", encoding="utf-8")

    config = load_config(path, base=CalcConfig(max_recursion_depth=50))
    assert config.hamming_bit_width == 32
    assert config.max_recursion_depth == 50


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_load_config_rejects_unknown_keys(tmp_path):
    path = tmp_path / "calc.yaml"
    path.write_text("threads: 4\n", encoding="utf-8")
    with pytest.raises(ValueError, match="threads"):
        load_config(path)


def test_read_yaml_rejects_other_suffixes(tmp_path):
    path = tmp_path / "calc.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        read_yaml(path)


def test_read_yaml_requires_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        read_yaml(path)


def test_load_default_config_matches_dataclass_defaults():
    """The bundled YAML file mirrors the dataclass defaults."""
    assert load_default_config() == DEFAULT_CONFIG


def test_configure_logging_sets_package_level():
    logger = configure_logging(CalcConfig(log_level="DEBUG"))
    try:
        assert logger.name == "data_calc"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
    finally:
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
