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
"""PatcherProperties — registry settings bound from ``splice.patcher``."""

from __future__ import annotations

from pydantic import BaseModel

from splice.core.config import config_properties


@config_properties(prefix="splice.patcher")
class PatcherProperties(BaseModel):
    """Settings for a :class:`~splice.patcher.registry.PatchRegistry`.

    Attributes:
        logger_name: structlog logger used for wrap/restore events and
            interceptor failures.
        log_tracebacks: Attach ``exc_info`` when logging interceptor failures.
        warn_on_foreign_restore: Warn when, at teardown, the attribute no
            longer holds the dispatch wrapper because something else
            replaced it.
    """

    logger_name: str = "splice.patcher"
    log_tracebacks: bool = True
    warn_on_foreign_restore: bool = True
