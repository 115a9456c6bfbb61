"""Tests for StructlogAdapter — default LoggingPort implementation."""

import logging

import pytest
import structlog

from splice.core.config import Config
from splice.logging.port import LoggingPort
from splice.logging.structlog_adapter import StructlogAdapter, summarize_patch_events


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"splice": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"splice": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"splice": {"logging": {"level": {"root": "INFO", "splice.patcher": "warning"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"splice.patcher": "WARNING"}
        assert logging.getLogger("splice.patcher").level == logging.WARNING

    def test_json_output_includes_failure_fields(self, capsys: pytest.CaptureFixture[str]):
        adapter = StructlogAdapter()
        adapter.configure(Config({"splice": {"logging": {"format": "json"}}}))

        adapter.get_logger("splice.test.json").error("interceptor_failed", caller="plugin", phase="before")

        out = capsys.readouterr().out
        assert '"event": "interceptor_failed"' in out
        assert '"caller": "plugin"' in out


class TestStructlogAdapterSetLevel:
    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        adapter.set_level("splice.test.levels", "DEBUG")
        assert logging.getLogger("splice.test.levels").level == logging.DEBUG


class TestPatcherSettings:
    def test_reads_patcher_logger_name(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"splice": {"patcher": {"logger-name": "audit.patcher", "log-tracebacks": "false"}}}))
        assert adapter.patcher_logger_name == "audit.patcher"
        assert adapter._log_tracebacks is False

    def test_defaults_patcher_logger_name(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.patcher_logger_name == "splice.patcher"
        assert adapter.get_patcher_logger() is not None

    def test_json_failure_includes_summary(self, capsys: pytest.CaptureFixture[str]):
        adapter = StructlogAdapter()
        adapter.configure(
            Config({"splice": {"logging": {"format": "json"}, "patcher": {"logger-name": "splice.test.summary"}}})
        )

        adapter.get_patcher_logger().error(
            "interceptor_failed", target="Api.send", caller="plugin", phase="before", record_id=1
        )

        out = capsys.readouterr().out
        assert "before interceptor from 'plugin' failed on Api.send" in out


class TestSummarizePatchEvents:
    def test_adds_summary_for_known_events(self):
        event = {"event": "target_wrapped", "target": "Api.send", "caller": "me"}
        assert summarize_patch_events(None, "debug", event)["summary"] == "Api.send wrapped for 'me'"

    def test_leaves_other_events_alone(self):
        event = {"event": "something_else", "target": "Api.send"}
        assert "summary" not in summarize_patch_events(None, "info", event)

    def test_missing_fields_do_not_raise(self):
        event = {"event": "interceptor_failed", "caller": "me"}
        assert "summary" not in summarize_patch_events(None, "error", event)

    def test_existing_summary_kept(self):
        event = {"event": "target_restored", "target": "Api.send", "summary": "custom"}
        assert summarize_patch_events(None, "debug", event)["summary"] == "custom"
