"""Tests for the configuration system."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from splice.core.config import Config, config_properties
from splice.patcher.properties import PatcherProperties


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"app": {"name": "test-service", "port": 8080}})
        assert config.get("app.name") == "test-service"
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_false_values_are_returned(self):
        config = Config({"splice": {"patcher": {"enabled": False}}})
        assert config.get("splice.patcher.enabled", True) is False

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SPLICE_PATCHER_LOGGER_NAME", "from-env")
        config = Config({"splice": {"patcher": {"logger_name": "from-file"}}})
        assert config.get("splice.patcher.logger_name") == "from-env"

    def test_get_section(self):
        config = Config({"splice": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("splice.logging.level") == {"root": "DEBUG"}
        assert config.get_section("splice.missing") == {}


class TestPlaceholders:
    def test_config_reference(self):
        config = Config({"base": "splice", "patcher": {"logger": "${base}.patcher"}})
        assert config.get("patcher.logger") == "splice.patcher"

    def test_env_reference(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SERVICE_NAME", "billing")
        config = Config({"logger": "${SERVICE_NAME}.patcher"})
        assert config.get("logger") == "billing.patcher"

    def test_default_value(self):
        config = Config({"logger": "${UNSET_SPLICE_VAR:fallback}"})
        assert config.get("logger") == "fallback"

    def test_unresolvable(self):
        config = Config({"logger": "${UNSET_SPLICE_VAR}"})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("logger")

    def test_circular_reference(self):
        config = Config({"a": "${b}", "b": "${a}"})
        with pytest.raises(ValueError, match="Max recursion depth"):
            config.get("a")


class TestFiles:
    def test_load_yaml_with_defaults(self, tmp_path: Path):
        config_file = tmp_path / "splice.yaml"
        config_file.write_text("splice:\n  patcher:\n    log-tracebacks: false\n")

        config = Config.from_file(config_file)

        assert config.get("splice.patcher.log-tracebacks") is False
        assert config.get("splice.patcher.logger-name") == "splice.patcher"
        assert config.loaded_sources == ["splice-defaults.yaml (defaults)", str(config_file)]

    def test_load_toml_without_defaults(self, tmp_path: Path):
        config_file = tmp_path / "splice.toml"
        config_file.write_text('[splice.logging]\nformat = "json"\n')

        config = Config.from_file(config_file, load_defaults=False)

        assert config.get("splice.logging.format") == "json"
        assert config.get("splice.patcher.logger-name") is None

    def test_profile_overlay(self, tmp_path: Path):
        base = "splice:\n  logging:\n    format: console\n    level:\n      root: INFO\n"
        (tmp_path / "splice.yaml").write_text(base)
        (tmp_path / "splice-dev.yaml").write_text("splice:\n  logging:\n    level:\n      root: DEBUG\n")

        config = Config.from_file(tmp_path / "splice.yaml", active_profiles=["dev"], load_defaults=False)

        assert config.get("splice.logging.level.root") == "DEBUG"
        assert config.get("splice.logging.format") == "console"

    def test_missing_file_keeps_defaults(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("splice.logging.format") == "console"


class TestBind:
    def test_bind_dataclass(self):
        @config_properties(prefix="splice.extra")
        @dataclass
        class Extra:
            retries: int = 1
            verbose: bool = False

        config = Config({"splice": {"extra": {"retries": "3", "verbose": "yes"}}})
        extra = config.bind(Extra)
        assert extra.retries == 3
        assert extra.verbose is True

    def test_bind_pydantic_kebab_keys(self):
        config = Config({"splice": {"patcher": {"logger-name": "audit", "warn-on-foreign-restore": False}}})
        props = config.bind(PatcherProperties)
        assert props.logger_name == "audit"
        assert props.warn_on_foreign_restore is False
        assert props.log_tracebacks is True

    def test_bind_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SPLICE_PATCHER_LOG_TRACEBACKS", "false")
        props = Config({}).bind(PatcherProperties)
        assert props.log_tracebacks is False

    def test_bind_validation_error(self):
        config = Config({"splice": {"patcher": {"log-tracebacks": "not-a-bool"}}})
        with pytest.raises(ValueError, match="Configuration validation failed"):
            config.bind(PatcherProperties)

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            value: int = 0

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)
