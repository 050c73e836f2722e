"""Tests for settings helpers and production CORS origin matching."""

import re

import pytest
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.testclient import TestClient

from api.config import PRODUCTION_ORIGINS, origin_prefix_regex


@pytest.fixture
def production_client():
    app = FastAPI()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[],
        allow_origin_regex=origin_prefix_regex(PRODUCTION_ORIGINS),
        allow_credentials=True,
        allow_methods=["GET"],
    )

    @app.get("/ping")
    def ping():
        return {"ok": True}

    return TestClient(app)


class TestOriginPrefixRegex:
    @pytest.mark.parametrize("origin", [
        "https://your-domain.com",
        "http://localhost:3000",
        "capacitor://localhost",
        "ionic://localhost:8100",
    ])
    def test_prefix_matches(self, origin):
        assert re.fullmatch(origin_prefix_regex(PRODUCTION_ORIGINS), origin)

    @pytest.mark.parametrize("origin", ["https://evil.com", "http://127.0.0.1:3000", "https://your-domain.co"])
    def test_other_origins_rejected(self, origin):
        assert re.fullmatch(origin_prefix_regex(PRODUCTION_ORIGINS), origin) is None

    def test_prefixes_are_literal(self):
        assert re.fullmatch(origin_prefix_regex(["https://a.com"]), "https://aXcom") is None


class TestProductionCors:
    def test_localhost_port_allowed(self, production_client):
        resp = production_client.get("/ping", headers={"Origin": "http://localhost:3000"})
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_unknown_origin_not_echoed(self, production_client):
        resp = production_client.get("/ping", headers={"Origin": "https://evil.com"})
        assert "access-control-allow-origin" not in resp.headers
