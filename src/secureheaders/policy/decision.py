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
"""Header decisions and the resolved policy result."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MergePolicy(str, Enum):
    """How a decided header is merged with headers already on the response."""

    SET_IF_ABSENT = "set-if-absent"
    ALWAYS_OVERWRITE = "always-overwrite"


@dataclass(frozen=True)
class HeaderDecision:
    """A single header the engine wants on the response."""

    name: str
    value: str
    policy: MergePolicy = MergePolicy.SET_IF_ABSENT

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.lower())


@dataclass(frozen=True)
class PolicyResult(Mapping[str, tuple[str, ...]]):
    """Headers to write, keyed by lowercase name, in decision order.

    ``skipped`` lists set-if-absent decisions dropped because the response
    already carried the header.
    """

    headers: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    decisions: tuple[HeaderDecision, ...] = ()
    skipped: tuple[str, ...] = ()

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self.headers[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self.headers

    def __iter__(self) -> Iterator[str]:
        return iter(self.headers)

    def __len__(self) -> int:
        return len(self.headers)

    def apply_to(self, target: Any) -> None:
        """Write the resolved headers into a mutable header container.

        ``target`` needs ``__setitem__`` (replace) and ``append``, as on
        Starlette's ``MutableHeaders``.
        """
        for name, values in self.headers.items():
            first, *rest = values
            target[name] = first
            for value in rest:
                target.append(name, value)
