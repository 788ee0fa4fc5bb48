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
"""HeaderPolicyEngine — turns a configuration snapshot into response headers.

The engine decides a fixed set of base headers plus an optional
Strict-Transport-Security header, then resolves those decisions against the
headers already present on the response:

* base headers are written only if the response does not carry them yet;
* HSTS, when enabled, always overwrites.

It is a pure function of its arguments and is safe to share between
concurrent requests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from secureheaders.kernel.exceptions import ConfigurationError
from secureheaders.policy.decision import HeaderDecision, MergePolicy, PolicyResult
from secureheaders.policy.port import ExistingHeaders
from secureheaders.policy.properties import HstsProperties, SecureHeadersProperties

logger = structlog.get_logger("secureheaders.policy")

HSTS_HEADER = "strict-transport-security"

SAFE_MODE_HSTS_MAX_AGE = 86400

BASE_HEADERS: tuple[tuple[str, str], ...] = (
    ("x-permitted-cross-domain-policies", "none"),
    ("x-content-type-options", "nosniff"),
    ("expect-ct", "max-age=31536000"),
    ("referrer-policy", "no-referrer"),
    ("x-xss-protection", "1; mode=block"),
    ("x-frame-options", "sameorigin"),
)


def build_hsts_value(hsts: HstsProperties, safe_mode: bool = False) -> str:
    """Compose the Strict-Transport-Security value.

    Segments are emitted in a fixed order: max-age, includeSubDomains,
    preload. Safe-mode replaces max-age as the final step and leaves the
    suffixes alone.
    """
    segments = [f"max-age={hsts.max_age}"]
    if hsts.include_sub_domains:
        segments.append("includeSubDomains")
    if hsts.preload:
        segments.append("preload")

    if safe_mode:
        segments[0] = f"max-age={SAFE_MODE_HSTS_MAX_AGE}"

    return "; ".join(segments)


def warn_safe_mode_suffixes(properties: SecureHeadersProperties) -> bool:
    """Warn when safe-mode is combined with includeSubDomains or preload.

    Safe-mode only shortens max-age; the suffixes are still sent. Meant to be
    called once per configuration, not per response. Returns whether it warned.
    """
    hsts = properties.hsts
    if not (properties.safe_mode and hsts.enabled and (hsts.include_sub_domains or hsts.preload)):
        return False
    logger.warning(
        "hsts_safe_mode_suffixes_retained",
        include_sub_domains=hsts.include_sub_domains,
        preload=hsts.preload,
    )
    return True


class HeaderPolicyEngine:
    """Default :class:`HeaderComputer` implementation."""

    def decide(self, properties: SecureHeadersProperties) -> tuple[HeaderDecision, ...]:
        """Return the ordered header decisions for *properties*, before merging."""
        decisions = [HeaderDecision(name, value) for name, value in BASE_HEADERS]
        if properties.hsts.enabled:
            decisions.append(
                HeaderDecision(
                    HSTS_HEADER,
                    build_hsts_value(properties.hsts, properties.safe_mode),
                    MergePolicy.ALWAYS_OVERWRITE,
                )
            )
        return tuple(decisions)

    def compute(
        self,
        config: SecureHeadersProperties | Mapping[str, Any],
        existing_headers: ExistingHeaders,
    ) -> PolicyResult:
        properties = _as_properties(config)
        decisions = self.decide(properties)
        present = {name.lower() for name in existing_headers}

        headers: dict[str, tuple[str, ...]] = {}
        skipped: list[str] = []
        for decision in decisions:
            if decision.policy is MergePolicy.SET_IF_ABSENT and decision.name in present:
                logger.debug("security_header_kept_existing", header=decision.name)
                skipped.append(decision.name)
                continue
            headers[decision.name] = headers.get(decision.name, ()) + (decision.value,)

        logger.debug("security_headers_computed", headers=list(headers), skipped=skipped)
        return PolicyResult(headers=headers, decisions=decisions, skipped=tuple(skipped))


def _as_properties(config: SecureHeadersProperties | Mapping[str, Any]) -> SecureHeadersProperties:
    if isinstance(config, SecureHeadersProperties):
        return config
    try:
        return SecureHeadersProperties.from_mapping(config)
    except ConfigurationError as exc:
        logger.error("secure_headers_config_invalid", errors=exc.errors)
        raise
