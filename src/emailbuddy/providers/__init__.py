"""
Rewrite providers -- Ollama (local), OpenAI, Anthropic, and an offline mock.

Usage:
    from .providers import ProviderRequest, build_provider_registry

    registry = build_provider_registry()
    text = await registry.get("ollama").rewrite(
        ProviderRequest(text=draft, mode="casual", rules_prompt=rules, timeout_ms=12000)
    )
"""

from .anthropic_provider import AnthropicProvider
from .base import (
    ProviderError,
    ProviderRequest,
    ProviderTimeoutError,
    RewriteProvider,
    rewrite_system_prompt,
)
from .mock_provider import MockProvider
from .ollama_provider import DEFAULT_LOCAL_MODEL, OllamaProvider
from .openai_provider import OpenAIProvider
from .registry import ProviderRegistry, build_provider_registry
