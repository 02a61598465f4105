"""
Provider contract shared by every rewrite backend.

Every provider implements one coroutine:

    async def rewrite(self, request: ProviderRequest) -> str

and either returns non-empty, trimmed text or raises ProviderError. The
pipeline treats any exception as a failed attempt, but providers translate
SDK/httpx errors into ProviderError so the attempt log stays readable.

Timeouts: bounded_call() wraps the provider's network coroutine in
asyncio.wait_for, so an expired timeout cancels the call (closing its
`async with` client) and surfaces as ProviderTimeoutError.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Protocol, TypeVar, runtime_checkable

from ..security.prompt_guard import wrap_user_content

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ERROR_BODY_CHARS = 300


class ProviderError(Exception):
    """A single provider attempt failed. The message is shown to the user."""

    pass


class ProviderTimeoutError(ProviderError):
    """The provider did not answer within the configured timeout."""

    pass


@dataclass(frozen=True)
class ProviderRequest:
    """Everything a provider needs for one rewrite. Identical across attempts."""

    text: str
    mode: str
    rules_prompt: str
    timeout_ms: int

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


@runtime_checkable
class RewriteProvider(Protocol):
    """Uniform rewrite capability."""

    @property
    def name(self) -> str: ...

    async def rewrite(self, request: ProviderRequest) -> str: ...


def rewrite_system_prompt(mode: str, rules_prompt: str) -> str:
    """System instructions shared by all LLM-backed providers."""
    return "\n".join([
        "You are an email rewriting assistant.",
        f"Mode: {mode}",
        "Rewrite the email in natural English while preserving intent and facts.",
        "Avoid introducing new commitments or changing meaning.",
        "Respect style directives below:",
        rules_prompt,
    ])


def user_message(text: str) -> str:
    return wrap_user_content(text, label="EMAIL")


def require_output(output: object, provider: str, what: str) -> str:
    """Trim provider output; empty or non-text output is a failure, not a result."""
    cleaned = output.strip() if isinstance(output, str) else ""
    if not cleaned:
        raise ProviderError(f"{provider} response missing {what}")
    return cleaned


def status_error(status_code: int, body: str) -> ProviderError:
    return ProviderError(f"Provider error {status_code}: {body[:MAX_ERROR_BODY_CHARS]}")


async def bounded_call(call: Awaitable[T], timeout_ms: int, provider: str) -> T:
    """Await `call`, cancelling it and raising ProviderTimeoutError after timeout_ms."""
    try:
        return await asyncio.wait_for(call, timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        logger.warning(f"[Provider:{provider}] Timed out after {timeout_ms}ms")
        raise ProviderTimeoutError(f"{provider} timed out after {timeout_ms}ms")
