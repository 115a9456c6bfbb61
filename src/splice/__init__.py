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
"""Splice — attach before/instead/after interceptors to functions on shared objects.

The module-level functions operate on :data:`default_registry`; build a
:class:`PatchRegistry` of your own for isolated use.
"""

from __future__ import annotations

from typing import Any

from splice.kernel.exceptions import SpliceException, TargetNotCallableException, UnknownTargetException
from splice.patcher import (
    NOTHING,
    Override,
    Patcher,
    PatchRegistry,
    Phase,
    RecordDescriptor,
    Unpatch,
    create,
    default_registry,
)
from splice.patcher.types import Callback

__version__ = "0.1.0"


def before(caller: str, owner: Any, name: str, callback: Callback) -> Unpatch:
    """Run *callback* before ``owner.name``; it may return replacement arguments."""
    return default_registry.attach(caller, owner, name, callback, Phase.BEFORE)


def instead(caller: str, owner: Any, name: str, callback: Callback) -> Unpatch:
    """Run *callback* in place of ``owner.name``."""
    return default_registry.attach(caller, owner, name, callback, Phase.INSTEAD)


def after(caller: str, owner: Any, name: str, callback: Callback) -> Unpatch:
    """Run *callback* after ``owner.name``; it may return a replacement result."""
    return default_registry.attach(caller, owner, name, callback, Phase.AFTER)


def unpatch_all(caller: str) -> int:
    return default_registry.detach_all(caller)


def get_patches_by_caller(caller: str) -> list[RecordDescriptor]:
    return default_registry.list_records_for_caller(caller)


__all__ = [
    "NOTHING",
    "Override",
    "PatchRegistry",
    "Patcher",
    "Phase",
    "RecordDescriptor",
    "SpliceException",
    "TargetNotCallableException",
    "UnknownTargetException",
    "Unpatch",
    "__version__",
    "after",
    "before",
    "create",
    "default_registry",
    "get_patches_by_caller",
    "instead",
    "unpatch_all",
]
