from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "github"))

import setup_phpstan_github.client as client


def test_build_ssl_context_prefers_env_bundle(monkeypatch) -> None:
    calls: dict[str, str | None] = {}

    def fake_create_default_context(*, cafile=None):
        calls["cafile"] = cafile
        return object()

    monkeypatch.setattr(client.ssl, "create_default_context", fake_create_default_context)

    ctx = client._build_ssl_context({"SETUP_PHPSTAN_CA_BUNDLE": "/tmp/custom-ca.pem"})
    assert ctx is not None
    assert calls["cafile"] == "/tmp/custom-ca.pem"


def test_build_ssl_context_uses_certifi_bundle(monkeypatch) -> None:
    calls: dict[str, str | None] = {}

    def fake_create_default_context(*, cafile=None):
        calls["cafile"] = cafile
        return object()

    class FakeCertifi:
        @staticmethod
        def where() -> str:
            return "/tmp/certifi.pem"

    monkeypatch.setattr(client.ssl, "create_default_context", fake_create_default_context)
    monkeypatch.setattr(client, "certifi", FakeCertifi)

    ctx = client._build_ssl_context({})
    assert ctx is not None
    assert calls["cafile"] == "/tmp/certifi.pem"
