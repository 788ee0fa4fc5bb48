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
"""HeaderComputer protocol — the pluggable header computation port."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from secureheaders.policy.decision import PolicyResult
from secureheaders.policy.properties import SecureHeadersProperties

# Header values as found on a response: one string or several.
ExistingHeaders = Mapping[str, Sequence[str] | str]


@runtime_checkable
class HeaderComputer(Protocol):
    """Computes the security headers for one response.

    Implementations must be pure: no mutation of the arguments and no state
    carried between calls.
    """

    def compute(
        self,
        config: SecureHeadersProperties | Mapping[str, Any],
        existing_headers: ExistingHeaders,
    ) -> PolicyResult:
        """Return the headers to write given the configuration and the response's current headers."""
        ...
