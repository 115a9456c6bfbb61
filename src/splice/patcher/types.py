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
"""Patcher core types — phases, the no-value sentinel, and interceptor records."""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from splice.kernel.exceptions import InvalidPhaseException


class Phase(str, enum.Enum):
    """Where in the call an interceptor runs."""

    BEFORE = "before"
    INSTEAD = "instead"
    AFTER = "after"

    @classmethod
    def parse(cls, value: Phase | str) -> Phase:
        """Coerce *value* to a Phase, raising InvalidPhaseException otherwise."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidPhaseException(
                f"Unknown interceptor phase {value!r}; expected one of: before, instead, after",
                code="INVALID_PHASE",
                context={"phase": value},
            ) from None


class _Sentinel(enum.Enum):
    NOTHING = "NOTHING"

    def __repr__(self) -> str:
        return "NOTHING"


NOTHING = _Sentinel.NOTHING
"""Returned by a callback to signal that it made no change."""


@dataclass(frozen=True)
class Override:
    """Explicit result override.

    A callback that returns ``None`` is treated as having made no change.
    Return ``Override(None)`` to make the intercepted call return ``None``.
    """

    value: Any


def is_nothing(value: Any) -> bool:
    """True when a callback return value means "no change"."""
    return value is None or value is NOTHING


def unwrap(value: Any) -> Any:
    """Strip an :class:`Override` wrapper, if present."""
    if isinstance(value, Override):
        return value.value
    return value


Callback = Callable[[Any, list, Any], Any]
"""``(receiver, args, extra) -> value | None | NOTHING | Override``."""


def describe_owner(owner: Any) -> str:
    """Human-readable name for an owner object, used in logs and errors."""
    name = getattr(owner, "__qualname__", None) or getattr(owner, "__name__", None)
    if isinstance(name, str):
        return name
    return type(owner).__qualname__


@dataclass(frozen=True, eq=False)
class InterceptorRecord:
    """One attached interceptor.

    Attributes:
        record_id: Unique, never reused identifier within its registry.
        caller: Identifier of the caller that attached the interceptor.
        phase: The phase the callback runs in.
        callback: The caller-supplied function.
        owner: The object whose attribute is intercepted.
        name: The intercepted attribute name.
    """

    record_id: int
    caller: str
    phase: Phase
    callback: Callback
    owner: Any
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{describe_owner(self.owner)}.{self.name}"

    def describe(self) -> RecordDescriptor:
        return RecordDescriptor(
            record_id=self.record_id,
            caller=self.caller,
            phase=self.phase,
            callback=self.callback,
            owner=self.owner,
            name=self.name,
        )


@dataclass(frozen=True, eq=False)
class RecordDescriptor:
    """Read-only view of an interceptor record for introspection."""

    record_id: int
    caller: str
    phase: Phase
    callback: Callback
    owner: Any
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{describe_owner(self.owner)}.{self.name}"
