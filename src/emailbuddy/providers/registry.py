"""
ProviderRegistry -- fixed mapping from provider id to rewrite capability.

The set of providers is closed (ollama, openai, anthropic, mock). A registry
is built once per app (or per test) and passed into the pipeline; nothing
reads a module-level instance.

Usage:
    registry = build_provider_registry(SecretStore())
    provider = registry.get("ollama")   # None for unknown ids

    # Tests substitute fakes:
    registry = ProviderRegistry({"openai": FailingProvider(), "mock": MockProvider()})
"""

import logging
from types import MappingProxyType
from typing import Mapping

from ..security.secrets import SecretStore
from .anthropic_provider import AnthropicProvider
from .base import RewriteProvider
from .mock_provider import MockProvider
from .ollama_provider import OllamaProvider
from .openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Read-only lookup of providers by id."""

    def __init__(self, providers: Mapping[str, RewriteProvider]):
        self._providers = MappingProxyType(dict(providers))

    def get(self, provider_id: str) -> RewriteProvider | None:
        return self._providers.get(provider_id)

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._providers

    @property
    def ids(self) -> list[str]:
        return list(self._providers)

    @property
    def count(self) -> int:
        return len(self._providers)


def build_provider_registry(secrets: SecretStore | None = None) -> ProviderRegistry:
    """The default closed set of providers."""
    secrets = secrets or SecretStore()
    registry = ProviderRegistry({
        "ollama": OllamaProvider(),
        "openai": OpenAIProvider(secrets=secrets),
        "anthropic": AnthropicProvider(secrets=secrets),
        "mock": MockProvider(),
    })
    logger.info(f"[ProviderRegistry] Registered providers: {', '.join(registry.ids)}")
    return registry
