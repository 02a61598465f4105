"""Eval fixtures -- isolated data dir and a sample provider request."""

import pytest

from emailbuddy.providers import ProviderRequest


@pytest.fixture(autouse=True)
def emailbuddy_home(tmp_path, monkeypatch):
    """Point EMAILBUDDY_HOME at a temp dir and hide real API keys."""
    home = tmp_path / "emailbuddy"
    monkeypatch.setenv("EMAILBUDDY_HOME", str(home))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    return home


@pytest.fixture
def provider_request():
    return ProviderRequest(
        text="hello team, can we move the sync to thursday",
        mode="casual",
        rules_prompt="do: be clear",
        timeout_ms=12000,
    )
