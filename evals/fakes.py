"""Fake providers, history sinks and secret store shared by the eval tasks."""

from emailbuddy.config import CompanionConfig, HistoryConfig
from emailbuddy.providers import ProviderRequest


class StaticProvider:
    """Returns a fixed rewrite and records every request it sees."""

    def __init__(self, name: str, output: str):
        self._name = name
        self._output = output
        self.requests: list[ProviderRequest] = []

    @property
    def name(self):
        return self._name

    async def rewrite(self, request):
        self.requests.append(request)
        return self._output


class FailingProvider:
    """Raises on every call."""

    def __init__(self, name: str, message: str):
        self._name = name
        self._message = message
        self.requests: list[ProviderRequest] = []

    @property
    def name(self):
        return self._name

    async def rewrite(self, request):
        self.requests.append(request)
        raise RuntimeError(self._message)


class RecordingHistory:
    def __init__(self):
        self.records = []

    def append(self, record):
        self.records.append(record)


class BrokenHistory:
    def append(self, record):
        raise OSError("disk full")


class FakeSecretStore:
    """In-memory stand-in for SecretStore."""

    def __init__(self, values: dict | None = None):
        self.values = dict(values or {})

    async def get(self, account):
        return self.values.get(account, "")

    async def set(self, account, value):
        self.values[account] = value

    async def status(self):
        return {
            "openaiConfigured": bool(self.values.get("openai_api_key")),
            "anthropicConfigured": bool(self.values.get("anthropic_api_key")),
        }


def make_config(provider_order, history_enabled=False, timeout_ms=12000):
    return CompanionConfig(
        provider_order=list(provider_order),
        timeout_ms=timeout_ms,
        history=HistoryConfig(enabled=history_enabled),
    )
