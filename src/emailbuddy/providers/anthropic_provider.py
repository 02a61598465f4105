"""
AnthropicProvider -- rewrite through the Anthropic Messages API.

Credential: account "anthropic_api_key" (ANTHROPIC_API_KEY or macOS keychain).
Same resource discipline as OpenAIProvider: one `async with` client per call,
SDK retries disabled.
"""

import logging
from typing import Any, Callable

import anthropic

from ..security.secrets import SecretStore
from .base import (
    ProviderError,
    ProviderRequest,
    ProviderTimeoutError,
    bounded_call,
    require_output,
    rewrite_system_prompt,
    status_error,
    user_message,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-5-haiku-latest"
MAX_TOKENS = 1200
TEMPERATURE = 0.4


def _default_client_factory(api_key: str, timeout: float) -> Any:
    return anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)


def _first_text_block(content: Any) -> str | None:
    for block in content or []:
        if getattr(block, "type", None) == "text":
            return getattr(block, "text", None)
    return None


class AnthropicProvider:
    """Anthropic-hosted model."""

    def __init__(
        self,
        secrets: SecretStore | None = None,
        model: str = DEFAULT_MODEL,
        client_factory: Callable[[str, float], Any] | None = None,
    ):
        self._secrets = secrets or SecretStore()
        self._model = model
        self._client_factory = client_factory or _default_client_factory

    @property
    def name(self) -> str:
        return "anthropic"

    async def rewrite(self, request: ProviderRequest) -> str:
        api_key = await self._secrets.get("anthropic_api_key")
        if not api_key:
            raise ProviderError(
                "Missing Anthropic API key (set ANTHROPIC_API_KEY or store it in the "
                "keychain as anthropic_api_key)."
            )
        return await bounded_call(self._message(api_key, request), request.timeout_ms, self.name)

    async def _message(self, api_key: str, request: ProviderRequest) -> str:
        client = self._client_factory(api_key, request.timeout_seconds)
        try:
            async with client:
                message = await client.messages.create(
                    model=self._model,
                    max_tokens=MAX_TOKENS,
                    temperature=TEMPERATURE,
                    system=rewrite_system_prompt(request.mode, request.rules_prompt),
                    messages=[{"role": "user", "content": user_message(request.text)}],
                )
        except anthropic.APITimeoutError:
            raise ProviderTimeoutError(f"anthropic timed out after {request.timeout_ms}ms")
        except anthropic.APIStatusError as e:
            raise status_error(e.status_code, str(e.message))
        except anthropic.AnthropicError as e:
            raise ProviderError(f"Anthropic request failed: {e}")

        return require_output(_first_text_block(message.content), "Anthropic", "text content")
