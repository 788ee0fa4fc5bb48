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
"""Security header policy — configuration, decisions, and the engine."""

from secureheaders.policy.decision import HeaderDecision, MergePolicy, PolicyResult
from secureheaders.policy.engine import (
    BASE_HEADERS,
    HSTS_HEADER,
    SAFE_MODE_HSTS_MAX_AGE,
    HeaderPolicyEngine,
    build_hsts_value,
    warn_safe_mode_suffixes,
)
from secureheaders.policy.port import HeaderComputer
from secureheaders.policy.properties import HstsProperties, SecureHeadersProperties

__all__ = [
    "BASE_HEADERS",
    "HSTS_HEADER",
    "SAFE_MODE_HSTS_MAX_AGE",
    "HeaderComputer",
    "HeaderDecision",
    "HeaderPolicyEngine",
    "HstsProperties",
    "MergePolicy",
    "PolicyResult",
    "SecureHeadersProperties",
    "build_hsts_value",
    "warn_safe_mode_suffixes",
]
