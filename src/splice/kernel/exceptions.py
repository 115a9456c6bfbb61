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
"""Unified exception hierarchy for Splice.

All errors raised by the engine inherit from SpliceException. Interceptor
failures are never raised: the dispatch wrapper logs them and moves on, so
the only errors a caller sees come from attaching to a bad target or from
passing malformed arguments at the attach boundary.

Categories:
- TargetException: the (owner, name) pair cannot be intercepted
- InvalidPhaseException, InvalidCallerException, InvalidCallbackException:
  malformed attach requests
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class SpliceException(Exception):
    """Base exception for all Splice errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "TARGET_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Target Exceptions
# =============================================================================


class TargetException(SpliceException):
    """The requested target cannot be intercepted."""


class UnknownTargetException(TargetException):
    """The owner object has no attribute with the requested name."""


class TargetNotCallableException(TargetException):
    """The requested attribute exists but is not a callable function."""


# =============================================================================
# Request Exceptions
# =============================================================================


class InvalidPhaseException(SpliceException):
    """The phase is not one of ``before``, ``instead`` or ``after``."""


class InvalidCallerException(SpliceException):
    """The caller identifier is empty or not a string."""


class InvalidCallbackException(SpliceException):
    """The interceptor callback is not callable."""
