"""
OllamaProvider -- rewrite through the local Ollama daemon.

  POST {base_url}/api/generate  {"model": ..., "stream": false, "prompt": ...}
  -> {"response": "..."}

No credentials; the daemon listens on 127.0.0.1:11434 by default.
"""

import logging
import os

import httpx

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

DEFAULT_BASE_URL = "http://127.0.0.1:11434"
DEFAULT_LOCAL_MODEL = os.environ.get("EMAILBUDDY_DEFAULT_MODEL", "llama3.1:8b")


class OllamaProvider:
    """Local model daemon over HTTP."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_LOCAL_MODEL,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._transport = transport

    @property
    def name(self) -> str:
        return "ollama"

    def _prompt(self, request: ProviderRequest) -> str:
        return (
            f"{rewrite_system_prompt(request.mode, request.rules_prompt)}\n\n"
            f"Email:\n{user_message(request.text)}\n\n"
            f"Rewritten email:"
        )

    async def rewrite(self, request: ProviderRequest) -> str:
        return await bounded_call(self._generate(request), request.timeout_ms, self.name)

    async def _generate(self, request: ProviderRequest) -> str:
        payload = {
            "model": self._model,
            "stream": False,
            "prompt": self._prompt(request),
        }
        try:
            async with httpx.AsyncClient(
                timeout=request.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(f"{self._base_url}/api/generate", json=payload)
        except httpx.TimeoutException:
            raise ProviderTimeoutError(f"ollama timed out after {request.timeout_ms}ms")
        except httpx.HTTPError as e:
            raise ProviderError(f"Could not reach Ollama at {self._base_url}: {e}")

        if response.is_error:
            raise status_error(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            raise ProviderError("Ollama returned invalid JSON")

        output = data.get("response") if isinstance(data, dict) else None
        return require_output(output, "Ollama", "response text")
