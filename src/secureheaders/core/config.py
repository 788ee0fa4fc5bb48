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
"""Configuration repository with dot-notation access, env vars, and model binding."""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from secureheaders.kernel.exceptions import ConfigurationError

T = TypeVar("T", bound=BaseModel)

ENV_PREFIX = "SECURE_HEADERS_"

_CONFIG_PROPERTIES_ATTR = "__secureheaders_config_prefix__"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a Pydantic model as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="secure-headers")
        class SecureHeadersProperties(BaseModel):
            safe_mode: bool = Field(default=False, alias="safeMode")
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def get_config_prefix(cls: type) -> str | None:
    """Return the prefix a class was registered with, or ``None``."""
    return getattr(cls, _CONFIG_PROPERTIES_ATTR, None)


class Config:
    """Hierarchical configuration with dot-notation access and env var overrides.

    Priority (highest wins):
    1. Environment variables (SECURE_HEADERS_SECTION_KEY format)
    2. Configuration dict values
    3. Model defaults

    The repository is read-only once built; loading it from files is left to
    the embedding application.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the raw configuration data."""
        return dict(self._data)

    @staticmethod
    def env_key(key: str) -> str:
        """Map a dotted key to its environment variable name.

        ``secure-headers.logging.format`` -> ``SECURE_HEADERS_LOGGING_FORMAT``
        """
        base = key.removeprefix("secure-headers.")
        return ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first."""
        env_val = os.environ.get(self.env_key(key))
        if env_val is not None:
            return env_val

        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return default
            current = current.get(part)
            if current is None:
                return default
        return current

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a dict."""
        current: Any = self._data
        for part in prefix.split("."):
            if not isinstance(current, dict):
                return {}
            current = current.get(part, {})
        return current if isinstance(current, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind the section under the model's prefix, failing fast on invalid values."""
        prefix = get_config_prefix(config_cls)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        section = self.get_section(prefix)
        try:
            return config_cls.model_validate(section)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}",
                errors=exc.errors(include_url=False),
                context={"prefix": prefix},
            ) from exc
