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
"""Tests for SecureHeadersFilter inside the filter chain."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from secureheaders.core.config import Config
from secureheaders.kernel.exceptions import ConfigurationError
from secureheaders.policy.decision import PolicyResult
from secureheaders.policy.properties import SecureHeadersProperties
from secureheaders.web.filter_chain import WebFilterChainMiddleware
from secureheaders.web.ordering import HIGHEST_PRECEDENCE, get_order
from secureheaders.web.ports.filter import WebFilter
from secureheaders.web.secure_headers_filter import SecureHeadersFilter

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _ok_handler(request: Request) -> PlainTextResponse:
    return PlainTextResponse("OK")


async def _framed_handler(request: Request) -> PlainTextResponse:
    return PlainTextResponse(
        "OK",
        headers={"X-Frame-Options": "DENY", "Strict-Transport-Security": "max-age=5"},
    )


def _make_client(web_filter: WebFilter) -> TestClient:
    app = Starlette(
        routes=[
            Route("/test", _ok_handler),
            Route("/framed", _framed_handler),
            Route("/health", _ok_handler),
        ],
        middleware=[Middleware(WebFilterChainMiddleware, filters=[web_filter])],
    )
    return TestClient(app)


def _assert_base_headers_present(headers) -> None:
    assert headers["x-permitted-cross-domain-policies"] == "none"
    assert headers["x-content-type-options"] == "nosniff"
    assert "expect-ct" in headers
    assert headers["referrer-policy"] == "no-referrer"
    assert headers["x-xss-protection"] == "1; mode=block"
    assert headers["x-frame-options"] == "sameorigin"


# ---------------------------------------------------------------------------
# SecureHeadersFilter
# ---------------------------------------------------------------------------


class TestSecureHeadersFilter:
    def test_adds_base_headers(self):
        resp = _make_client(SecureHeadersFilter()).get("/test")
        assert resp.status_code == 200
        assert resp.text == "OK"
        _assert_base_headers_present(resp.headers)
        assert "strict-transport-security" not in resp.headers

    def test_hsts(self):
        resp = _make_client(SecureHeadersFilter({"hsts.enabled": True})).get("/test")
        assert resp.headers["strict-transport-security"] == "max-age=31536000"
        _assert_base_headers_present(resp.headers)

    def test_hsts_max_age(self):
        web_filter = SecureHeadersFilter({"hsts.enabled": True, "hsts.maxAge": 1337})
        resp = _make_client(web_filter).get("/test")
        assert resp.headers["strict-transport-security"] == "max-age=1337"

    def test_hsts_sub_domains_and_preload(self):
        web_filter = SecureHeadersFilter(
            {"hsts.enabled": True, "hsts.includeSubDomains": True, "hsts.preload": True}
        )
        resp = _make_client(web_filter).get("/test")
        assert (
            resp.headers["strict-transport-security"]
            == "max-age=31536000; includeSubDomains; preload"
        )

    def test_hsts_and_safe_mode(self):
        web_filter = SecureHeadersFilter({"hsts.enabled": True, "safeMode": True})
        resp = _make_client(web_filter).get("/test")
        assert resp.headers["strict-transport-security"] == "max-age=86400"
        _assert_base_headers_present(resp.headers)

    def test_application_headers_preserved_but_hsts_overwritten(self):
        resp = _make_client(SecureHeadersFilter({"hsts.enabled": True})).get("/framed")
        assert resp.headers.get_list("x-frame-options") == ["DENY"]
        assert resp.headers.get_list("strict-transport-security") == ["max-age=31536000"]
        assert resp.headers["x-content-type-options"] == "nosniff"

    def test_config_repository_bound_once(self):
        config = Config({"secure-headers": {"hsts": {"enabled": True, "preload": True}}})
        web_filter = SecureHeadersFilter(config)
        assert web_filter.properties.hsts.preload is True
        resp = _make_client(web_filter).get("/test")
        assert resp.headers["strict-transport-security"] == "max-age=31536000; preload"

    def test_accepts_properties_instance(self):
        props = SecureHeadersProperties.from_mapping({"hsts.enabled": True})
        assert SecureHeadersFilter(props).properties is props

    def test_invalid_config_fails_at_construction(self):
        with pytest.raises(ConfigurationError):
            SecureHeadersFilter({"hsts.enabled": True, "hsts.maxAge": "1337"})

    def test_exclude_patterns_skip_path(self):
        resp = _make_client(SecureHeadersFilter(exclude_patterns=["/health"])).get("/health")
        assert "x-frame-options" not in resp.headers

    def test_custom_computer(self):
        class FixedComputer:
            def compute(self, config, existing_headers):
                return PolicyResult(headers={"x-custom": ("1",)})

        resp = _make_client(SecureHeadersFilter(computer=FixedComputer())).get("/test")
        assert resp.headers["x-custom"] == "1"
        assert "x-frame-options" not in resp.headers

    def test_safe_mode_suffix_warning_logged_once(self):
        config = {"hsts.enabled": True, "hsts.preload": True, "safeMode": True}
        with capture_logs() as logs:
            client = _make_client(SecureHeadersFilter(config))
            client.get("/test")
            resp = client.get("/test")
        warnings = [e["event"] for e in logs if e["log_level"] == "warning"]
        assert warnings == ["hsts_safe_mode_suffixes_retained"]
        assert resp.headers["strict-transport-security"] == "max-age=86400; preload"

    def test_implements_web_filter(self):
        assert isinstance(SecureHeadersFilter(), WebFilter)

    def test_order_is_highest_precedence_plus_300(self):
        assert get_order(SecureHeadersFilter) == HIGHEST_PRECEDENCE + 300
