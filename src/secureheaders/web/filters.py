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
"""Path matching shared by chain stages."""

from __future__ import annotations

import abc
from fnmatch import fnmatch
from typing import Any

from secureheaders.web.ports.filter import CallNext


class OncePerRequestFilter(abc.ABC):
    """Stage base class; ``url_patterns`` / ``exclude_patterns`` are fnmatch globs on the path.

    SecureHeadersFilter leaves ``url_patterns`` empty (every path) and takes
    ``exclude_patterns`` from its constructor.
    """

    url_patterns: list[str] = []
    exclude_patterns: list[str] = []

    def should_not_filter(self, request: Any) -> bool:
        path: str = request.url.path
        if self.url_patterns and not any(fnmatch(path, p) for p in self.url_patterns):
            return True
        return any(fnmatch(path, p) for p in self.exclude_patterns)

    @abc.abstractmethod
    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        ...
