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
"""Stage protocol for :class:`WebFilterChainMiddleware`.

A stage receives the request and the rest of the chain; SecureHeadersFilter
is the stage this package ships.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any, Protocol, runtime_checkable

# Next stage in the chain: Callable[[Request], Coroutine[Any, Any, Response]]
CallNext = Callable[..., Coroutine[Any, Any, Any]]


@runtime_checkable
class WebFilter(Protocol):
    """One stage of the chain; it awaits ``call_next`` and edits the buffered response."""

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        """Return the response, normally the one from ``await call_next(request)``."""
        ...

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` to bypass this stage for the request's path."""
        ...
