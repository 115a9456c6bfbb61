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
"""PatchRegistry — owns every TargetBinding and the attach/detach lifecycle."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Callable
from typing import Any

import structlog

from splice.core.config import Config
from splice.kernel.exceptions import InvalidCallbackException, InvalidCallerException
from splice.logging.port import InterceptorLogger, LoggingPort
from splice.logging.structlog_adapter import StructlogAdapter
from splice.patcher.binding import TargetBinding
from splice.patcher.dispatch import DispatchWrapper
from splice.patcher.properties import PatcherProperties
from splice.patcher.types import InterceptorRecord, Phase, RecordDescriptor


class Unpatch:
    """Detach handle for one interceptor record.

    Calling the handle removes its record; later calls do nothing. The handle
    can also be used as a context manager that detaches on exit::

        with registry.attach("me", obj, "save", callback, Phase.AFTER):
            obj.save()
    """

    __slots__ = ("_registry", "_record")

    def __init__(self, registry: PatchRegistry, record: InterceptorRecord) -> None:
        self._registry = registry
        self._record = record

    @property
    def record(self) -> InterceptorRecord:
        return self._record

    @property
    def active(self) -> bool:
        """True while the record is still attached."""
        return self._registry.is_attached(self._record)

    def __call__(self) -> None:
        self._registry.detach(self._record)

    def unpatch(self) -> None:
        self()

    def __enter__(self) -> Unpatch:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self()

    def __repr__(self) -> str:
        state = "active" if self.active else "detached"
        record = self._record
        return f"<Unpatch {record.phase.value} {record.qualified_name} caller={record.caller!r} {state}>"


class PatchRegistry:
    """Collection of all target bindings for one engine instance.

    At most one binding exists per ``(owner, name)`` pair; owners are
    compared by identity. Registries are independent of each other, so
    tests can build their own instead of sharing :data:`default_registry`.

    Usage::

        registry = PatchRegistry()
        unpatch = registry.attach("audit", service, "save", log_call, Phase.BEFORE)
        ...
        unpatch()  # service.save is the original function again
    """

    def __init__(
        self,
        properties: PatcherProperties | None = None,
        logger: InterceptorLogger | None = None,
    ) -> None:
        self._properties = properties or PatcherProperties()
        self._logger = logger if logger is not None else structlog.get_logger(self._properties.logger_name)
        self._bindings: dict[tuple[int, str], TargetBinding] = {}
        self._ids = itertools.count(1)
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        config: Config,
        logger: InterceptorLogger | None = None,
        logging_port: LoggingPort | None = None,
    ) -> PatchRegistry:
        """Build a registry from the ``splice.patcher`` section of *config*.

        Unless a *logger* is given, logging is configured from the same
        config through *logging_port* (a :class:`StructlogAdapter` by
        default) and the registry writes to its ``logger_name`` logger.
        """
        properties = config.bind(PatcherProperties)
        if logger is None:
            port = logging_port if logging_port is not None else StructlogAdapter()
            port.configure(config)
            logger = port.get_logger(properties.logger_name)
        return cls(properties, logger=logger)

    @property
    def properties(self) -> PatcherProperties:
        return self._properties

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    def find_or_create(self, caller: str, owner: Any, name: str) -> TargetBinding:
        """Return the binding for ``owner.name``, wrapping the target on first use."""
        key = (id(owner), name)
        with self._lock:
            binding = self._bindings.get(key)
            if binding is not None:
                return binding

            binding = TargetBinding.capture(caller, owner, name)
            wrapper = DispatchWrapper(binding, self._logger, log_tracebacks=self._properties.log_tracebacks)
            binding.install(wrapper)
            self._bindings[key] = binding

        self._logger.debug("target_wrapped", target=binding.qualified_name, caller=caller)
        return binding

    def get_binding(self, owner: Any, name: str) -> TargetBinding | None:
        return self._bindings.get((id(owner), name))

    def is_patched(self, owner: Any, name: str) -> bool:
        return (id(owner), name) in self._bindings

    def bindings(self) -> list[TargetBinding]:
        """All live bindings, in creation order."""
        with self._lock:
            return list(self._bindings.values())

    def remove_binding(self, owner: Any, name: str) -> None:
        """Restore the original ``owner.name`` and forget the binding."""
        with self._lock:
            binding = self._bindings.pop((id(owner), name), None)
            if binding is None:
                return
            foreign = not binding.is_installed()
            binding.restore()

        if foreign and self._properties.warn_on_foreign_restore:
            self._logger.warning(
                "target_replaced_externally",
                target=binding.qualified_name,
                detail="the wrapper was overwritten before teardown; restoring the original anyway",
            )
        self._logger.debug("target_restored", target=binding.qualified_name)

    def restore_all(self) -> None:
        """Detach every record and restore every target."""
        for binding in self.bindings():
            for record in binding.records:
                self.detach(record)

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def attach(
        self,
        caller: str,
        owner: Any,
        name: str,
        callback: Callable[..., Any],
        phase: Phase | str = Phase.AFTER,
    ) -> Unpatch:
        """Attach *callback* to ``owner.name`` and return its detach handle.

        Raises:
            InvalidCallerException: *caller* is not a non-empty string.
            InvalidCallbackException: *callback* is not callable.
            InvalidPhaseException: *phase* is not a known phase.
            UnknownTargetException: ``owner.name`` does not exist.
            TargetNotCallableException: ``owner.name`` is not callable.
        """
        if not isinstance(caller, str) or not caller:
            raise InvalidCallerException(
                f"Caller must be a non-empty string, got {caller!r}",
                code="INVALID_CALLER",
                context={"caller": caller},
            )
        if not callable(callback):
            raise InvalidCallbackException(
                f"Interceptor callback must be callable, got {type(callback).__name__}",
                code="INVALID_CALLBACK",
                context={"caller": caller, "name": name},
            )
        phase = Phase.parse(phase)

        with self._lock:
            binding = self.find_or_create(caller, owner, name)
            record = InterceptorRecord(
                record_id=next(self._ids),
                caller=caller,
                phase=phase,
                callback=callback,
                owner=owner,
                name=name,
            )
            binding.add(record)

        return Unpatch(self, record)

    def detach(self, record: InterceptorRecord) -> bool:
        """Remove *record*; tear the binding down if its chain is now empty.

        Returns False when the record was already detached or its binding
        is gone.
        """
        with self._lock:
            binding = self._bindings.get((id(record.owner), record.name))
            if binding is None or not binding.remove(record.record_id):
                return False
            if binding.is_empty:
                self.remove_binding(record.owner, record.name)
        return True

    def is_attached(self, record: InterceptorRecord) -> bool:
        binding = self._bindings.get((id(record.owner), record.name))
        return binding is not None and any(r.record_id == record.record_id for r in binding.snapshot())

    def find_by_caller(self, caller: str) -> list[InterceptorRecord]:
        """Every record owned by *caller*, binding by binding, in chain order."""
        with self._lock:
            return [
                record
                for binding in self._bindings.values()
                for record in binding.snapshot()
                if record.caller == caller
            ]

    def detach_all(self, caller: str) -> int:
        """Detach every record owned by *caller*. Returns how many were removed."""
        return sum(1 for record in self.find_by_caller(caller) if self.detach(record))

    def list_records_for_caller(self, caller: str) -> list[RecordDescriptor]:
        return [record.describe() for record in self.find_by_caller(caller)]

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        owner, name = item
        return self.is_patched(owner, name)

    def __repr__(self) -> str:
        return f"<PatchRegistry bindings={len(self._bindings)}>"


default_registry = PatchRegistry()
"""Registry used by the module-level API and by facades created without one."""
