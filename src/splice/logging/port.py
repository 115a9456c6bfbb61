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
"""Logging contracts for Splice.

``LoggingPort`` configures a logging backend from :class:`Config` and hands
out loggers. ``InterceptorLogger`` is the narrow logger surface a
:class:`~splice.patcher.registry.PatchRegistry` writes to; any structlog
logger satisfies it.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from splice.core.config import Config


@runtime_checkable
class InterceptorLogger(Protocol):
    """Structured logger used for wrap/restore events and interceptor failures.

    Events are keyword-style: ``logger.error("interceptor_failed", caller=..., phase=...)``.
    """

    def debug(self, event: str, **kw: Any) -> Any: ...
    def warning(self, event: str, **kw: Any) -> Any: ...
    def error(self, event: str, **kw: Any) -> Any: ...


@runtime_checkable
class LoggingPort(Protocol):
    """Configures a logging backend and provides registry loggers."""

    def configure(self, config: Config) -> None: ...
    def get_logger(self, name: str) -> InterceptorLogger: ...
    def set_level(self, name: str, level: str) -> None: ...
