"""
RewritePipeline -- compose style rules once, then fall back across providers.

Flow per request:
  1. Normalize the mode (trim + lower-case, default "casual")
  2. Parse STYLE.md, merge profile -> global -> mode rules, render the prompt
  3. Try each provider in config.provider_order, strictly one at a time:
       - id not in the registry  -> logged and skipped (not an attempt)
       - provider raises         -> "{id}: {message}" appended to the notes
       - provider returns text   -> done, later providers are never called
  4. All attempts failed -> AllProvidersFailedError with every note

Providers are never called in parallel.

After a success the history append (if enabled) runs as a detached task.
Its failure is logged and dropped; it can never turn a successful rewrite
into an error.

Usage:
    pipeline = RewritePipeline(registry=registry, config=config, history=HistoryLog())
    result = await pipeline.rewrite(
        RewriteRequest(text="hello team", mode="casual"),
        style_markdown=markdown,
        profile=profile,
    )
    result.provider_used, result.notes
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from ..config import CompanionConfig
from ..history import history_record
from ..providers.base import ProviderRequest
from ..providers.registry import ProviderRegistry
from ..style import (
    merge_style_rules,
    normalize_mode,
    parse_style_markdown,
    render_style_prompt,
)

logger = logging.getLogger(__name__)

ATTEMPT_SEPARATOR = " | "


# =============================================================================
# DATA MODELS
# =============================================================================


@dataclass
class RewriteRequest:
    """Caller input. `text` is validated non-empty by the HTTP layer."""

    text: str
    mode: Any = None


@dataclass
class RewriteResult:
    """Successful rewrite plus the failures that preceded it."""

    rewritten_text: str
    applied_mode: str
    provider_used: str
    notes: list[str] = field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "rewrittenText": self.rewritten_text,
            "appliedMode": self.applied_mode,
            "providerUsed": self.provider_used,
            "notes": list(self.notes),
        }


class AllProvidersFailedError(RuntimeError):
    """Every configured provider failed or was unavailable."""

    def __init__(self, attempts: list[str]):
        self.attempts = list(attempts)
        super().__init__(f"All providers failed. {ATTEMPT_SEPARATOR.join(self.attempts)}")


class HistorySink(Protocol):
    def append(self, record: dict[str, Any]) -> None: ...


# =============================================================================
# PIPELINE
# =============================================================================


class RewritePipeline:
    """Sequential provider fallback over a single composed style prompt."""

    def __init__(
        self,
        registry: ProviderRegistry,
        config: CompanionConfig,
        history: HistorySink | None = None,
    ):
        self._registry = registry
        self._config = config
        self._history = history
        self._pending: set[asyncio.Task] = set()

    @staticmethod
    def compose_rules_prompt(
        style_markdown: str,
        mode: str,
        profile: Mapping[str, list[str]] | None,
    ) -> str:
        """Parse, merge and render the style rules for one request."""
        parsed = parse_style_markdown(style_markdown)
        merged = merge_style_rules(parsed, mode, profile)
        return render_style_prompt(merged)

    async def rewrite(
        self,
        request: RewriteRequest,
        *,
        style_markdown: str,
        profile: Mapping[str, list[str]] | None = None,
        request_id: str = "n/a",
    ) -> RewriteResult:
        """Rewrite `request.text`. Raises AllProvidersFailedError if nothing succeeds."""
        mode = normalize_mode(request.mode)
        provider_request = ProviderRequest(
            text=request.text,
            mode=mode,
            rules_prompt=self.compose_rules_prompt(style_markdown, mode, profile),
            timeout_ms=self._config.timeout_ms,
        )
        attempts: list[str] = []

        logger.info(
            f"[RewritePipeline] {request_id} start: mode={mode} "
            f"text_length={len(request.text)} providers={self._config.provider_order}"
        )

        for provider_id in self._config.provider_order:
            provider = self._registry.get(provider_id)
            if provider is None:
                logger.warning(f"[RewritePipeline] {request_id} provider missing: {provider_id}")
                continue

            started = time.monotonic()
            logger.info(f"[RewritePipeline] {request_id} attempting {provider_id}")
            try:
                rewritten_text = await provider.rewrite(provider_request)
            except Exception as e:
                attempts.append(f"{provider_id}: {e}")
                logger.warning(
                    f"[RewritePipeline] {request_id} {provider_id} failed: "
                    f"{type(e).__name__}: {e}"
                )
                continue

            duration_ms = (time.monotonic() - started) * 1000
            logger.info(
                f"[RewritePipeline] {request_id} {provider_id} succeeded "
                f"in {duration_ms:.0f}ms (output_length={len(rewritten_text)})"
            )

            if self._config.history.enabled and self._history is not None:
                self._dispatch_history(
                    history_record(mode, provider_id, request.text, rewritten_text),
                    request_id,
                )

            return RewriteResult(
                rewritten_text=rewritten_text,
                applied_mode=mode,
                provider_used=provider_id,
                notes=attempts,
            )

        logger.error(
            f"[RewritePipeline] {request_id} exhausted {len(self._config.provider_order)} "
            f"provider(s), {len(attempts)} failed attempt(s)"
        )
        raise AllProvidersFailedError(attempts)

    # -------------------------------------------------------------------------
    # History side channel
    # -------------------------------------------------------------------------

    def _dispatch_history(self, record: dict[str, Any], request_id: str) -> None:
        task = asyncio.create_task(self._append_history(record, request_id))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _append_history(self, record: dict[str, Any], request_id: str) -> None:
        try:
            await asyncio.to_thread(self._history.append, record)
        except Exception as e:
            logger.warning(f"[RewritePipeline] {request_id} history append failed: {e}")

    async def drain(self) -> None:
        """Wait for outstanding history appends (shutdown, tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
