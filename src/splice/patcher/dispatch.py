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
"""Dispatch wrapper — runs the before/instead/after chain around a target."""

from __future__ import annotations

import functools
import types
from typing import TYPE_CHECKING, Any

from splice.patcher.types import InterceptorRecord, Phase, is_nothing, unwrap

if TYPE_CHECKING:
    from splice.patcher.binding import TargetBinding


class DispatchWrapper:
    """Callable installed in place of the original function.

    The wrapper mirrors the original's metadata (``__name__``, ``__doc__``,
    ``__wrapped__`` ...) and its ``repr``, and keeps a reference to it in
    ``__original__``. It is also a descriptor: when installed on a class it
    binds the way the replaced function, ``staticmethod`` or ``classmethod``
    would have, and the bound ``self``/``cls`` becomes the receiver handed to
    interceptors.
    """

    def __init__(self, binding: TargetBinding, logger: Any, log_tracebacks: bool = True) -> None:
        functools.update_wrapper(self, binding.original)
        self.__original__ = binding.original
        self._binding = binding
        self._receiver = receiver_of(binding.original)
        self._logger = logger
        self._log_tracebacks = log_tracebacks

    @property
    def binding(self) -> TargetBinding:
        return self._binding

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        raw = self._binding.raw
        bound = raw.__get__(instance, owner) if hasattr(raw, "__get__") else raw
        if bound is raw:
            return self
        # Bound method, staticmethod's function, or another registry's bound wrapper.
        return _BoundDispatch(self, bound, receiver_of(bound))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.dispatch(self._binding.original, self._receiver, args, kwargs)

    def __repr__(self) -> str:
        return repr(self._binding.original)

    def __str__(self) -> str:
        return str(self._binding.original)

    def dispatch(self, target: Any, receiver: Any, args: tuple, kwargs: dict[str, Any]) -> Any:
        """Run the interceptor chain for one call of *target*.

        *target* is the original function already bound to *receiver*.
        """
        records = self._binding.snapshot()
        if not records:
            return target(*args, **kwargs)

        original = _with_kwargs(target, kwargs)
        current_args: list = list(args)

        # 1. before: may replace the argument list for everything downstream
        for record in records:
            if record.phase is not Phase.BEFORE:
                continue
            try:
                new_args = record.callback(receiver, current_args, original)
            except Exception as exc:
                self._report(record, exc)
                continue
            new_args = unwrap(new_args)
            if isinstance(new_args, (list, tuple)):
                current_args = list(new_args)

        # 2. instead: replaces the call; the last value returned wins
        insteads = [r for r in records if r.phase is Phase.INSTEAD]
        result: Any = None
        if not insteads:
            result = target(*current_args, **kwargs)
        else:
            for record in insteads:
                try:
                    value = record.callback(receiver, current_args, original)
                except Exception as exc:
                    self._report(record, exc)
                    continue
                if not is_nothing(value):
                    result = unwrap(value)

        # 3. after: observe or override the result
        for record in records:
            if record.phase is not Phase.AFTER:
                continue
            try:
                value = record.callback(receiver, current_args, result)
            except Exception as exc:
                self._report(record, exc)
                continue
            if not is_nothing(value):
                result = unwrap(value)

        return result

    def _report(self, record: InterceptorRecord, exc: Exception) -> None:
        fields = {
            "target": self._binding.qualified_name,
            "caller": record.caller,
            "phase": record.phase.value,
            "record_id": record.record_id,
            "error": repr(exc),
        }
        if self._log_tracebacks:
            self._logger.error("interceptor_failed", exc_info=exc, **fields)
        else:
            self._logger.error("interceptor_failed", **fields)


# A DispatchWrapper bound to a receiver through attribute access. Mirrors the
# bound original the way the unbound wrapper mirrors the function.
class _BoundDispatch:
    __slots__ = ("_wrapper", "_target", "_receiver")

    def __init__(self, wrapper: DispatchWrapper, target: Any, receiver: Any) -> None:
        self._wrapper = wrapper
        self._target = target
        self._receiver = receiver

    @property
    def receiver(self) -> Any:
        return self._receiver

    @property
    def __original__(self) -> Any:
        return self._target

    @property
    def __wrapped__(self) -> Any:
        return self._target

    @property
    def __doc__(self) -> str | None:  # type: ignore[override]
        return self._target.__doc__

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self._wrapper.dispatch(self._target, self._receiver, args, kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._target, name)

    def __repr__(self) -> str:
        return repr(self._target)


def receiver_of(bound: Any) -> Any:
    """The ``self``/``cls`` a callable is bound to, or None for plain functions.

    Looks through wrappers installed by other registries so that stacked
    patches still see the real receiver.
    """
    if isinstance(bound, _BoundDispatch):
        return bound.receiver
    if isinstance(bound, DispatchWrapper):
        return bound._receiver
    if isinstance(bound, types.MethodType):
        return bound.__self__
    return None


def _with_kwargs(target: Any, kwargs: dict[str, Any]) -> Any:
    """Bind the call's keyword arguments so callbacks can pass positionals only."""
    if not kwargs:
        return target
    return functools.partial(target, **kwargs)
