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
"""Structured logging configuration using structlog.

Reads ``secure-headers.logging.*`` from a :class:`Config`::

    secure-headers:
      logging:
        format: json          # or "console"
        level:
          root: INFO
          secureheaders.policy: DEBUG
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field

import structlog

from secureheaders.core.config import Config


@dataclass(frozen=True)
class LoggingSettings:
    """Logging options resolved from configuration."""

    root_level: str = "INFO"
    format: str = "console"
    module_levels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Config) -> LoggingSettings:
        level_section = dict(config.get_section("secure-headers.logging.level"))
        root_level = str(level_section.pop("root", "INFO")).upper()
        return cls(
            root_level=root_level,
            format=str(config.get("secure-headers.logging.format", "console")).lower(),
            module_levels={k: str(v).upper() for k, v in level_section.items()},
        )


def configure_logging(config: Config | None = None) -> LoggingSettings:
    """Configure structlog and stdlib logging; return the applied settings."""
    settings = LoggingSettings.from_config(config or Config())

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    # Loggers are module-level proxies; leave them uncached so reconfiguring takes effect.
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=_level(settings.root_level),
        force=True,
    )
    for module, level in settings.module_levels.items():
        logging.getLogger(module).setLevel(_level(level))

    return settings


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)
