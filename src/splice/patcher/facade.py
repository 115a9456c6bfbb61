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
"""Patcher — per-caller facade over a PatchRegistry."""

from __future__ import annotations

from typing import Any

from splice.patcher.registry import PatchRegistry, Unpatch, default_registry
from splice.patcher.types import Callback, Phase, RecordDescriptor


class Patcher:
    """Binds a caller identity once so call sites need not repeat it.

    Holds nothing but the identity and the registry; every operation goes
    straight to the registry.

    Usage::

        patcher = create("my-plugin")
        patcher.before(api, "send", lambda self, args, original: [args[0].strip()])
        ...
        patcher.unpatch_all()
    """

    __slots__ = ("_caller", "_registry")

    def __init__(self, caller: str, registry: PatchRegistry | None = None) -> None:
        self._caller = caller
        self._registry = registry if registry is not None else default_registry

    @property
    def caller(self) -> str:
        return self._caller

    @property
    def registry(self) -> PatchRegistry:
        return self._registry

    def before(self, owner: Any, name: str, callback: Callback) -> Unpatch:
        return self._registry.attach(self._caller, owner, name, callback, Phase.BEFORE)

    def instead(self, owner: Any, name: str, callback: Callback) -> Unpatch:
        return self._registry.attach(self._caller, owner, name, callback, Phase.INSTEAD)

    def after(self, owner: Any, name: str, callback: Callback) -> Unpatch:
        return self._registry.attach(self._caller, owner, name, callback, Phase.AFTER)

    def unpatch_all(self) -> int:
        """Detach every interceptor this caller attached, on any target."""
        return self._registry.detach_all(self._caller)

    def get_patches(self) -> list[RecordDescriptor]:
        return self._registry.list_records_for_caller(self._caller)

    def __repr__(self) -> str:
        return f"<Patcher caller={self._caller!r}>"


def create(caller: str, registry: PatchRegistry | None = None) -> Patcher:
    """Create a :class:`Patcher` for *caller*."""
    return Patcher(caller, registry)
