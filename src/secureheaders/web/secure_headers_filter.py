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
"""Secure headers filter — applies the header policy to every response."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from starlette.requests import Request
from starlette.responses import Response

from secureheaders.core.config import Config
from secureheaders.kernel.exceptions import ConfigurationError
from secureheaders.policy.engine import HeaderPolicyEngine, warn_safe_mode_suffixes
from secureheaders.policy.port import HeaderComputer
from secureheaders.policy.properties import SecureHeadersProperties
from secureheaders.web.filters import OncePerRequestFilter
from secureheaders.web.ordering import HIGHEST_PRECEDENCE, order
from secureheaders.web.ports.filter import CallNext

logger = structlog.get_logger("secureheaders.web")

SecureHeadersSource = SecureHeadersProperties | Config | Mapping[str, Any] | None


def resolve_properties(config: SecureHeadersSource) -> SecureHeadersProperties:
    """Resolve any supported configuration source into a validated snapshot.

    Raises:
        ConfigurationError: a recognised key holds an invalid value.
    """
    try:
        if config is None:
            return SecureHeadersProperties()
        if isinstance(config, SecureHeadersProperties):
            return config
        if isinstance(config, Config):
            return config.bind(SecureHeadersProperties)
        return SecureHeadersProperties.from_mapping(config)
    except ConfigurationError as exc:
        logger.error("secure_headers_config_invalid", errors=exc.errors)
        raise


@order(HIGHEST_PRECEDENCE + 300)
class SecureHeadersFilter(OncePerRequestFilter):
    """Adds the base security headers and, when enabled, HSTS to every response.

    The configuration is validated once, at construction, so a bad value
    stops the application from starting instead of failing per request.
    Headers already set by the application win over base headers; HSTS
    always overwrites.
    """

    def __init__(
        self,
        config: SecureHeadersSource = None,
        computer: HeaderComputer | None = None,
        exclude_patterns: Iterable[str] | None = None,
    ) -> None:
        self._properties = resolve_properties(config)
        warn_safe_mode_suffixes(self._properties)
        self._computer: HeaderComputer = computer or HeaderPolicyEngine()
        if exclude_patterns is not None:
            self.exclude_patterns = list(exclude_patterns)

    @property
    def properties(self) -> SecureHeadersProperties:
        return self._properties

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        response: Response = await call_next(request)
        existing = {name: response.headers.getlist(name) for name in response.headers.keys()}
        result = self._computer.compute(self._properties, existing)
        result.apply_to(response.headers)
        return response
