"""Typed config tests: conversion helpers, ServiceConfig, TypedConfigReader, load_config."""

import copy
import dataclasses
import logging

import pytest

from state_service import ConfigError, ConfigParseError, ServiceConfig, StateService, load_config
from state_service.common.typed_config import safe_bool, safe_str
from state_service.common.typed_config.reader import TypedConfigReader


class TestSafeBool:
    """safe_bool conversion."""

    @pytest.mark.parametrize("value", [True, 1, "true", "TRUE", "1", "yes"])
    def test_truthy(self, value):
        assert safe_bool(value) is True

    @pytest.mark.parametrize("value", [False, 0, "false", "0", "no", "No"])
    def test_falsy(self, value):
        assert safe_bool(value, default=True) is False

    @pytest.mark.parametrize("value", [None, "", "fasle", "abc", 1.5, []])
    def test_unrecognized_returns_default(self, value):
        assert safe_bool(value, default=True) is True
        assert safe_bool(value, default=False) is False


class TestSafeStr:
    """safe_str conversion."""

    def test_valid_string(self):
        assert safe_str("shallow", "deep") == "shallow"

    @pytest.mark.parametrize("value", [None, "", 3, ["deep"]])
    def test_invalid_returns_default(self, value):
        assert safe_str(value, "deep") == "deep"


class TestServiceConfig:
    """ServiceConfig dataclass."""

    def test_defaults(self):
        config = ServiceConfig()
        assert config.copy_mode == "deep"
        assert config.isolate_callback_errors is False
        assert config.log_subscribers is True

    def test_frozen(self):
        config = ServiceConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.copy_mode = "none"  # type: ignore[misc]

    def test_invalid_copy_mode_rejected(self):
        with pytest.raises(ValueError, match="copy_mode"):
            ServiceConfig(copy_mode="clone")

    def test_from_dict_empty(self):
        assert ServiceConfig.from_dict({}) == ServiceConfig()

    def test_from_dict_values(self):
        config = ServiceConfig.from_dict(
            {"copy_mode": "Shallow", "isolate_callback_errors": "yes", "log_subscribers": 0}
        )
        assert config == ServiceConfig(copy_mode="shallow", isolate_callback_errors=True, log_subscribers=False)

    def test_from_dict_unknown_copy_mode_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            config = ServiceConfig.from_dict({"copy_mode": "clone"})
        assert config.copy_mode == "deep"
        assert "Unknown copy_mode" in caplog.text

    def test_from_dict_typo_keeps_default(self):
        config = ServiceConfig.from_dict({"isolate_callback_errors": "ture"})
        assert config.isolate_callback_errors is False

    @pytest.mark.parametrize(
        "mode,expected",
        [("deep", copy.deepcopy), ("shallow", copy.copy)],
    )
    def test_copier(self, mode, expected):
        assert ServiceConfig(copy_mode=mode).copier() is expected

    def test_copier_none_is_identity(self):
        value = object()
        assert ServiceConfig(copy_mode="none").copier()(value) is value

    def test_shallow_copy_mode_in_service(self):
        """Shallow mode copies the container but shares nested objects."""
        nested = {"inner": 1}
        service = StateService({"nested": nested}, config=ServiceConfig(copy_mode="shallow"))

        latest = service.get_latest_state()
        assert latest == {"nested": nested}
        assert latest["nested"] is nested


class TestTypedConfigReader:
    """TypedConfigReader.get_service()."""

    def test_missing_section(self):
        assert TypedConfigReader({}).get_service() == ServiceConfig()

    def test_non_dict_section(self):
        assert TypedConfigReader({"state_service": "oops"}).get_service() == ServiceConfig()

    def test_reads_latest_values(self):
        config_dict = {"state_service": {"copy_mode": "none"}}
        reader = TypedConfigReader(config_dict)
        assert reader.get_service().copy_mode == "none"

        config_dict["state_service"]["copy_mode"] = "shallow"
        assert reader.get_service().copy_mode == "shallow"


class TestLoadConfig:
    """load_config() from YAML files."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.yaml") == ServiceConfig()

    def test_loads_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "state_service:\n"
            "  copy_mode: none\n"
            "  isolate_callback_errors: true\n"
            "  log_subscribers: false\n",
            encoding="utf-8",
        )
        assert load_config(path) == ServiceConfig(
            copy_mode="none", isolate_callback_errors=True, log_subscribers=False
        )

    def test_accepts_str_path(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("other: 1\n", encoding="utf-8")
        assert load_config(str(path)) == ServiceConfig()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigParseError, match="empty"):
            load_config(path)

    def test_non_mapping_top_level(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigParseError, match="mapping") as exc_info:
            load_config(path)
        assert exc_info.value.line is None

    def test_syntax_error_has_line_number(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("state_service:\n  copy_mode: [deep\n", encoding="utf-8")
        with pytest.raises(ConfigParseError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert isinstance(error, ConfigError)
        assert error.line is not None
        assert "line" in str(error)
        assert error.context["path"] == str(path)

    def test_user_message_has_no_path(self, tmp_path):
        """user_message is safe to show: location but no file path."""
        path = tmp_path / "broken.yaml"
        path.write_text("state_service:\n  copy_mode: [deep\n", encoding="utf-8")
        with pytest.raises(ConfigParseError) as exc_info:
            load_config(path)

        error = exc_info.value
        assert str(path) in str(error)
        assert str(tmp_path) not in error.user_message
        assert error.user_message.startswith("Config file has a YAML syntax error (line ")

    def test_empty_file_user_message(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigParseError) as exc_info:
            load_config(path)
        assert exc_info.value.user_message == "Config file is empty"
