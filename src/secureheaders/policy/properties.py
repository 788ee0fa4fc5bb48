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
"""Secure headers configuration properties (secure-headers.*).

Values are strictly typed: ``"1337"`` is not an integer and ``1`` is not a
boolean. A wrong type fails with :class:`ConfigurationError` before any
header is computed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from secureheaders.core.config import config_properties
from secureheaders.kernel.exceptions import ConfigurationError

PREFIX = "secure-headers"

DEFAULT_HSTS_MAX_AGE = 31536000


class HstsProperties(BaseModel):
    """Strict-Transport-Security options (secure-headers.hsts.*)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    enabled: bool = Field(default=False, strict=True)
    max_age: int = Field(default=DEFAULT_HSTS_MAX_AGE, alias="maxAge", ge=0, strict=True)
    include_sub_domains: bool = Field(default=False, alias="includeSubDomains", strict=True)
    preload: bool = Field(default=False, strict=True)


@config_properties(prefix=PREFIX)
class SecureHeadersProperties(BaseModel):
    """Immutable configuration snapshot consumed by the header policy engine."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    hsts: HstsProperties = Field(default_factory=HstsProperties)
    safe_mode: bool = Field(default=False, alias="safeMode", strict=True)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> SecureHeadersProperties:
        """Build a snapshot from dotted keys such as ``hsts.maxAge``.

        Keys may carry the ``secure-headers.`` prefix and may be mixed with
        nested mappings (``{"hsts": {...}, "hsts.preload": True}``); both are
        merged. ``None`` means "use the default". Unknown and non-string keys
        are ignored. *values* is never modified.
        """
        tree: dict[str, Any] = {}
        for key, value in values.items():
            if not isinstance(key, str) or value is None:
                continue
            head, _, rest = key.removeprefix(f"{PREFIX}.").partition(".")
            tree = _merge(tree, {head: {rest: value} if rest else value}, key)

        try:
            return cls.model_validate(tree)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid secure headers configuration:\n{exc}",
                errors=exc.errors(include_url=False),
            ) from exc


def _merge(base: dict[str, Any], override: Mapping[str, Any], key: str) -> dict[str, Any]:
    """Recursively merge *override* into a copy of *base*; nested mappings are copied."""
    merged = dict(base)
    for name, value in override.items():
        if value is None:
            continue
        current = merged.get(name)
        if isinstance(value, Mapping):
            if current is None:
                current = {}
            elif not isinstance(current, dict):
                raise _conflict(key, name)
            merged[name] = _merge(current, value, key)
        elif isinstance(current, dict):
            raise _conflict(key, name)
        else:
            merged[name] = value
    return merged


def _conflict(key: str, name: str) -> ConfigurationError:
    return ConfigurationError(
        f"Configuration key '{key}' mixes a scalar and a section for '{name}'",
        context={"key": key},
    )
