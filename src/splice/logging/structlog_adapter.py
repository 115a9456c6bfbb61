# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""StructlogAdapter — default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from splice.core.config import Config

DEFAULT_PATCHER_LOGGER = "splice.patcher"

_SUMMARIES = {
    "interceptor_failed": "{phase} interceptor from {caller!r} failed on {target}",
    "target_replaced_externally": "{target} was replaced by someone else before it was restored",
    "target_wrapped": "{target} wrapped for {caller!r}",
    "target_restored": "{target} restored to its original function",
}


def summarize_patch_events(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor adding a readable ``summary`` to patcher events."""
    template = _SUMMARIES.get(event_dict.get("event", ""))
    if template is not None and "summary" not in event_dict:
        try:
            event_dict["summary"] = template.format(**event_dict)
        except (KeyError, IndexError):
            pass
    return event_dict


class StructlogAdapter:
    """Default logging adapter backed by structlog.

    Reads ``splice.logging.level.root``, per-module levels under
    ``splice.logging.level`` and ``splice.logging.format`` (``console`` or
    ``json``). The patcher logger named by ``splice.patcher.logger-name``
    follows the root level unless a per-module level names it, and its
    events get a human-readable ``summary`` field.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}
        self._patcher_logger: str = DEFAULT_PATCHER_LOGGER
        self._log_tracebacks: bool = True

    def configure(self, config: Config) -> None:
        """Configure structlog from the ``splice.logging`` and ``splice.patcher`` sections."""
        level_section = dict(config.get_section("splice.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("splice.logging.format", "console")).lower()

        self._patcher_logger = str(_patcher_setting(config, "logger-name", DEFAULT_PATCHER_LOGGER))
        self._log_tracebacks = _as_bool(_patcher_setting(config, "log-tracebacks", True))

        self._setup_structlog()
        self._apply_levels()

    @property
    def patcher_logger_name(self) -> str:
        return self._patcher_logger

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def get_patcher_logger(self) -> Any:
        """The logger a registry built from the same config writes to."""
        return self.get_logger(self._patcher_logger)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)

    def _setup_structlog(self) -> None:
        log_level = getattr(logging, self._root_level.upper(), logging.INFO)

        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            summarize_patch_events,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]

        if self._format == "json":
            if self._log_tracebacks:
                processors.append(structlog.processors.format_exc_info)
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=log_level,
            force=True,
        )

    def _apply_levels(self) -> None:
        for module, level in self._module_levels.items():
            self.set_level(module, level)


def _patcher_setting(config: Config, key: str, default: Any) -> Any:
    """Read ``splice.patcher.<key>`` in kebab-case or snake_case form."""
    value = config.get(f"splice.patcher.{key}")
    if value is None:
        value = config.get(f"splice.patcher.{key.replace('-', '_')}")
    return default if value is None else value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)
