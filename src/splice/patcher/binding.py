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
"""TargetBinding — one intercepted (owner, name) pair and its interceptor chain."""

from __future__ import annotations

import inspect
from typing import Any

from splice.kernel.exceptions import TargetException, TargetNotCallableException, UnknownTargetException
from splice.patcher.types import InterceptorRecord, describe_owner

_MISSING = object()


class TargetBinding:
    """Owns the original function of one target and its ordered chain.

    Attributes:
        caller: Caller that created the binding (informational only).
        owner: The object whose attribute is intercepted.
        name: The intercepted attribute name.
        original: ``getattr(owner, name)`` at capture time. Never mutated.
        raw: The statically stored attribute (e.g. the ``staticmethod`` or
            ``classmethod`` object on a class), used for descriptor binding
            and restoration.
        owns_attribute: Whether *name* lived in the owner's own namespace.
            Inherited attributes are restored by deleting the shadowing
            wrapper instead of writing the original back.
        wrapper: The installed dispatch wrapper, once installed.
    """

    def __init__(
        self,
        caller: str,
        owner: Any,
        name: str,
        original: Any,
        raw: Any,
        owns_attribute: bool,
    ) -> None:
        self.caller = caller
        self.owner = owner
        self.name = name
        self.original = original
        self.raw = raw
        self.owns_attribute = owns_attribute
        self.wrapper: Any = None
        self._records: list[InterceptorRecord] = []

    @classmethod
    def capture(cls, caller: str, owner: Any, name: str) -> TargetBinding:
        """Capture the current value of ``owner.name`` as the original.

        Raises:
            UnknownTargetException: *owner* has no attribute *name*.
            TargetNotCallableException: the attribute is not callable.
        """
        context = {"owner": describe_owner(owner), "name": name}
        original = getattr(owner, name, _MISSING)
        if original is _MISSING:
            raise UnknownTargetException(
                f"{describe_owner(owner)} has no attribute {name!r} to intercept",
                code="TARGET_NOT_FOUND",
                context=context,
            )
        if not callable(original):
            raise TargetNotCallableException(
                f"{describe_owner(owner)}.{name} is a {type(original).__name__}, not a function",
                code="TARGET_NOT_CALLABLE",
                context=context,
            )

        namespace = getattr(owner, "__dict__", None)
        if namespace is not None and name in namespace:
            return cls(caller, owner, name, original, namespace[name], owns_attribute=True)
        raw = inspect.getattr_static(owner, name, original)
        return cls(caller, owner, name, original, raw, owns_attribute=False)

    @property
    def qualified_name(self) -> str:
        return f"{describe_owner(self.owner)}.{self.name}"

    @property
    def is_empty(self) -> bool:
        return not self._records

    @property
    def records(self) -> list[InterceptorRecord]:
        """A copy of the chain, in attachment order."""
        return list(self._records)

    def snapshot(self) -> tuple[InterceptorRecord, ...]:
        """Immutable view of the chain for a single dispatch pass."""
        return tuple(self._records)

    def add(self, record: InterceptorRecord) -> None:
        self._records.append(record)

    def remove(self, record_id: int) -> bool:
        """Remove the record with *record_id*. Returns False if it is absent."""
        for index, record in enumerate(self._records):
            if record.record_id == record_id:
                del self._records[index]
                return True
        return False

    def install(self, wrapper: Any) -> None:
        """Expose *wrapper* as ``owner.name``."""
        try:
            setattr(self.owner, self.name, wrapper)
        except (AttributeError, TypeError) as exc:
            raise TargetException(
                f"Cannot replace {self.qualified_name}: {exc}",
                code="TARGET_READ_ONLY",
                context={"owner": describe_owner(self.owner), "name": self.name},
            ) from exc
        self.wrapper = wrapper

    def is_installed(self) -> bool:
        """True if ``owner.name`` still holds this binding's wrapper."""
        namespace = getattr(self.owner, "__dict__", None)
        if namespace is not None:
            return namespace.get(self.name) is self.wrapper
        return inspect.getattr_static(self.owner, self.name, None) is self.wrapper

    def restore(self) -> None:
        """Put the original back on the owner."""
        if self.owns_attribute:
            setattr(self.owner, self.name, self.raw)
        elif self.name in getattr(self.owner, "__dict__", {}):
            delattr(self.owner, self.name)

    def __repr__(self) -> str:
        return f"<TargetBinding {self.qualified_name} records={len(self._records)}>"
