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
"""Exception hierarchy for secureheaders.

All package errors inherit from SecureHeadersException so callers can catch
one type at the request boundary.
"""

from __future__ import annotations


class SecureHeadersException(Exception):
    """Base exception for all secureheaders errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONFIG_INVALID").
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


class ConfigurationError(SecureHeadersException):
    """A recognised configuration key holds a value of the wrong type or range.

    Raised before any header is computed; no partial header set is produced.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        context: dict | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.setdefault("errors", list(errors or []))
        super().__init__(message, code="CONFIG_INVALID", context=ctx)

    @property
    def errors(self) -> list[dict]:
        return self.context["errors"]
