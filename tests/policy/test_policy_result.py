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
"""Tests for HeaderDecision and PolicyResult."""

from __future__ import annotations

import dataclasses

import pytest
from starlette.datastructures import MutableHeaders

from secureheaders.policy.decision import HeaderDecision, MergePolicy, PolicyResult


class TestHeaderDecision:
    def test_name_lowercased(self):
        decision = HeaderDecision("X-Frame-Options", "sameorigin")
        assert decision.name == "x-frame-options"

    def test_defaults_to_set_if_absent(self):
        assert HeaderDecision("a", "b").policy is MergePolicy.SET_IF_ABSENT

    def test_frozen(self):
        decision = HeaderDecision("a", "b")
        with pytest.raises(dataclasses.FrozenInstanceError):
            decision.value = "c"  # type: ignore[misc]


class TestPolicyResult:
    def test_apply_to_replaces_existing_value(self):
        headers = MutableHeaders()
        headers["Strict-Transport-Security"] = "max-age=5"
        result = PolicyResult(headers={"strict-transport-security": ("max-age=86400",)})
        result.apply_to(headers)
        assert headers.getlist("strict-transport-security") == ["max-age=86400"]

    def test_apply_to_writes_every_value(self):
        headers = MutableHeaders()
        result = PolicyResult(headers={"x-multi": ("a", "b")})
        result.apply_to(headers)
        assert headers.getlist("x-multi") == ["a", "b"]

    def test_mapping_protocol(self):
        result = PolicyResult(headers={"x-a": ("1",), "x-b": ("2",)})
        assert len(result) == 2
        assert list(result) == ["x-a", "x-b"]
        assert dict(result) == {"x-a": ("1",), "x-b": ("2",)}
        assert 42 not in result
