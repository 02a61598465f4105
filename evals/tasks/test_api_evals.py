"""
API Evals -- the HTTP contract the browser extension depends on.

camelCase bodies, {"error": ...} on every failure, 502 with the attempt log
when no provider succeeds.
"""

import logging
import time

import pytest
from fastapi.testclient import TestClient

from emailbuddy.api import gateway
from emailbuddy.api.routes import health
from emailbuddy.config import save_config
from emailbuddy.history import HistoryLog
from emailbuddy.learning import ProfileStore
from emailbuddy.providers import MockProvider, ProviderRegistry

from ..fakes import FailingProvider, FakeSecretStore, StaticProvider


class ExplodingProfileStore(ProfileStore):
    def load(self):
        raise RuntimeError("profile store offline")


def _client(registry=None, secrets=None, profile_store=None, **kwargs):
    app = gateway.create_app(
        registry=registry or ProviderRegistry({"mock": MockProvider()}),
        secrets_store=secrets or FakeSecretStore(),
        profile_store=profile_store or ProfileStore(),
        history=HistoryLog(),
    )
    return TestClient(app, **kwargs)


class TestHealth:
    def test_health(self):
        response = _client().get("/v1/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert response.headers["X-Request-ID"].startswith("req-")

    def test_system_checks(self, monkeypatch):
        async def fake_checks():
            return {
                "defaultLocalModel": "llama3.1:8b",
                "ollamaInstalled": True,
                "ollamaVersion": "0.5.7",
                "ollamaServeReachable": False,
                "ollamaModelPulled": True,
            }

        monkeypatch.setattr(health, "get_system_checks", fake_checks)
        body = _client().get("/v1/system/checks").json()
        assert body["ollamaServeReachable"] is False
        assert body["ollamaVersion"] == "0.5.7"

    def test_unknown_route_uses_error_shape(self):
        response = _client().get("/v1/nope")
        assert response.status_code == 404
        assert "error" in response.json()


class TestRewriteEndpoint:
    """Eval: POST /v1/rewrite success, validation and exhaustion."""

    def test_fallback_result(self):
        save_config({"providerOrder": ["openai", "mock"]})
        registry = ProviderRegistry({
            "openai": FailingProvider("openai", "simulated outage"),
            "mock": StaticProvider("mock", "rewritten:hello team"),
        })

        response = _client(registry).post("/v1/rewrite", json={"text": "hello team", "mode": "casual"})

        assert response.status_code == 200
        assert response.json() == {
            "rewrittenText": "rewritten:hello team",
            "appliedMode": "casual",
            "providerUsed": "mock",
            "notes": ["openai: simulated outage"],
        }

    @pytest.mark.parametrize("body", [{}, {"text": ""}, {"text": "   "}, {"text": 42}])
    def test_text_required(self, body):
        response = _client().post("/v1/rewrite", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "text is required"}

    def test_text_too_long(self):
        response = _client().post("/v1/rewrite", json={"text": "x" * 50_001})
        assert response.status_code == 400
        assert response.json()["error"] == "text must be at most 50000 characters"

    def test_malformed_json(self):
        response = _client().post(
            "/v1/rewrite", content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert "error" in response.json()

    def test_all_providers_failed(self):
        save_config({"providerOrder": ["ollama", "openai"]})
        registry = ProviderRegistry({
            "ollama": FailingProvider("ollama", "connection refused"),
            "openai": FailingProvider("openai", "Missing OpenAI API key"),
        })

        response = _client(registry).post("/v1/rewrite", json={"text": "hi"})

        assert response.status_code == 502
        assert response.json() == {
            "error": "All providers failed. ollama: connection refused | openai: Missing OpenAI API key",
            "attempts": ["ollama: connection refused", "openai: Missing OpenAI API key"],
        }

    def test_history_written_when_enabled(self, emailbuddy_home):
        save_config({"providerOrder": ["mock"], "history": {"enabled": True}})
        history_file = emailbuddy_home / "history.jsonl"

        with _client() as client:
            assert client.post("/v1/rewrite", json={"text": "hi"}).status_code == 200
            # the append is detached from the response
            for _ in range(200):
                if history_file.exists() and history_file.read_text().endswith("\n"):
                    break
                time.sleep(0.01)

        assert "\"provider\": \"mock\"" in history_file.read_text()

    def test_unexpected_error_is_500(self, caplog):
        client = _client(
            profile_store=ExplodingProfileStore(), raise_server_exceptions=False
        )
        with caplog.at_level(logging.INFO, logger="emailbuddy.api.middleware.request_log"):
            response = client.post("/v1/rewrite", json={"text": "hi"})

        assert response.status_code == 500
        assert response.json() == {"error": "profile store offline"}
        request_id = response.headers["X-Request-ID"]
        assert request_id.startswith("req-")
        assert f"{request_id} -> 500 unhandled RuntimeError" in caplog.text


class TestSettingsEndpoints:
    def test_get_config_defaults(self):
        assert _client().get("/v1/config").json() == {
            "host": "127.0.0.1",
            "port": 48123,
            "providerOrder": ["ollama", "openai", "anthropic"],
            "history": {"enabled": False},
            "timeoutMs": 12000,
        }

    def test_put_config(self):
        client = _client()
        response = client.put("/v1/config", json={"providerOrder": ["mock"], "timeoutMs": 3000})
        assert response.status_code == 200
        assert response.json()["providerOrder"] == ["mock"]
        assert client.get("/v1/config").json()["timeoutMs"] == 3000

    def test_put_invalid_config(self):
        response = _client().put("/v1/config", json={"providerOrder": ["ollama", "ollama"]})
        assert response.status_code == 400
        assert response.json() == {"error": "providerOrder contains duplicate provider: ollama"}

    def test_put_port_too_large_for_float(self):
        client = _client()
        response = client.put(
            "/v1/config",
            content='{"port": ' + "9" * 400 + "}",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "port must be between 1 and 65535"}
        assert client.get("/v1/config").json()["port"] == 48123

    def test_schema(self):
        schema = _client().get("/v1/config/schema").json()
        assert schema["constraints"]["timeoutMs"] == {"min": 1000, "max": 60000}
        assert "mock" in schema["constraints"]["providers"]
        assert schema["constraints"]["modes"] == ["casual", "polished", "concise"]

    def test_style_round_trip(self):
        client = _client()
        assert client.get("/v1/style").json()["markdown"].startswith("# EmailBuddy Style")

        response = client.put("/v1/style", json={"markdown": "## global\ndo: be kind\n"})

        assert response.status_code == 200
        assert client.get("/v1/style").json() == {"markdown": "## global\ndo: be kind\n"}

    def test_blank_style_rejected(self):
        response = _client().put("/v1/style", json={"markdown": "  "})
        assert response.status_code == 400
        assert response.json() == {"error": "style markdown must be a non-empty string"}


class TestProfileEndpoints:
    def test_learn_and_read_profile(self):
        client = _client()
        assert client.get("/v1/profile").json()["profile"]["do"] == []

        response = client.post("/v1/profile/samples", json={"samples": ["I'm in. Thanks!"]})

        assert response.status_code == 200
        profile = response.json()["profile"]
        assert profile["do"] == ["favor short sentences", "use contractions naturally"]
        assert client.get("/v1/profile").json()["profile"] == profile

    @pytest.mark.parametrize("samples", [None, "one email", ["ok", 3]])
    def test_samples_must_be_string_array(self, samples):
        response = _client().post("/v1/profile/samples", json={"samples": samples})
        assert response.status_code == 400
        assert response.json() == {"error": "samples must be an array of strings"}

    def test_too_many_samples(self):
        response = _client().post("/v1/profile/samples", json={"samples": ["hi."] * 51})
        assert response.status_code == 400


class TestSecretsEndpoints:
    """Eval: Keys go in, only booleans come out."""

    def test_store_and_status(self):
        secrets = FakeSecretStore()
        client = _client(secrets=secrets)

        response = client.post("/v1/secrets", json={"account": "openai_api_key", "value": "sk-1"})

        assert response.status_code == 200
        assert response.json() == {"ok": True}
        assert secrets.values["openai_api_key"] == "sk-1"
        assert client.get("/v1/secrets/status").json() == {
            "openaiConfigured": True,
            "anthropicConfigured": False,
        }

    def test_unknown_account(self):
        response = _client().post("/v1/secrets", json={"account": "github", "value": "x"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("account must be one of")

    def test_missing_value(self):
        response = _client().post("/v1/secrets", json={"account": "openai_api_key"})
        assert response.status_code == 400
        assert response.json() == {"error": "value must be a non-empty string"}
