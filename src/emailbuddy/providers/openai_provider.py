"""
OpenAIProvider -- rewrite through the OpenAI Responses API.

Credential: account "openai_api_key" (OPENAI_API_KEY or macOS keychain).
The SDK client is opened per call with `async with` so its connection pool
is closed on success, failure and timeout alike. SDK-level retries are
disabled; fallback to the next provider is the retry policy.
"""

import logging
from typing import Any, Callable

import openai

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

DEFAULT_MODEL = "gpt-4.1-mini"
TEMPERATURE = 0.4


def _default_client_factory(api_key: str, timeout: float) -> Any:
    return openai.AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)


class OpenAIProvider:
    """OpenAI-hosted model."""

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
        return "openai"

    async def rewrite(self, request: ProviderRequest) -> str:
        api_key = await self._secrets.get("openai_api_key")
        if not api_key:
            raise ProviderError(
                "Missing OpenAI API key (set OPENAI_API_KEY or store it in the "
                "keychain as openai_api_key)."
            )
        return await bounded_call(self._respond(api_key, request), request.timeout_ms, self.name)

    async def _respond(self, api_key: str, request: ProviderRequest) -> str:
        client = self._client_factory(api_key, request.timeout_seconds)
        try:
            async with client:
                response = await client.responses.create(
                    model=self._model,
                    input=[
                        {
                            "role": "system",
                            "content": rewrite_system_prompt(request.mode, request.rules_prompt),
                        },
                        {"role": "user", "content": user_message(request.text)},
                    ],
                    temperature=TEMPERATURE,
                )
        except openai.APITimeoutError:
            raise ProviderTimeoutError(f"openai timed out after {request.timeout_ms}ms")
        except openai.APIStatusError as e:
            raise status_error(e.status_code, str(e.message))
        except openai.OpenAIError as e:
            raise ProviderError(f"OpenAI request failed: {e}")

        return require_output(getattr(response, "output_text", None), "OpenAI", "output_text")
