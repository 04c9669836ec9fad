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
"""Unified exception hierarchy for PyAspect.

All engine exceptions inherit from PyAspectException. Errors raised by an
intercepted callable or by a handler are never wrapped in these types; they
propagate to the caller untouched.

Categories:
- Target errors: the object handed to a wrap entry point has the wrong shape
- Query errors: a member selection query cannot be parsed
"""

from __future__ import annotations

from typing import Any

# =============================================================================
# Base Exception
# =============================================================================


class PyAspectException(Exception):
    """Base exception for all PyAspect errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "ASPECT_INVALID_QUERY").
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


class UnsupportedTargetError(PyAspectException):
    """A bare callable was passed where an instance or a class is required."""

    MESSAGE = "Target must be an object instance or a class, not a bare callable"

    def __init__(self, target: Any) -> None:
        super().__init__(
            self.MESSAGE,
            code="ASPECT_UNSUPPORTED_TARGET",
            context={"target": repr(target)},
        )


class ConstructionHookError(PyAspectException):
    """A construction hook was requested for something that is not a class."""

    def __init__(self, target: Any) -> None:
        super().__init__(
            f"Construction hooks require a class, got {type(target).__name__}",
            code="ASPECT_NOT_A_CLASS",
            context={"target": repr(target)},
        )


# =============================================================================
# Query Exceptions
# =============================================================================


class InvalidQueryError(PyAspectException):
    """A member selection query is empty or malformed."""

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(
            f"Invalid query '{query}': {reason}",
            code="ASPECT_INVALID_QUERY",
            context={"query": query, "reason": reason},
        )
