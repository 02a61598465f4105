"""
Request-level entry points shared by the HTTP API and the CLI.

Configuration, STYLE.md and the profile are read fresh on every call, so an
edit made through the options page applies to the very next rewrite.
"""

import logging

from ..config import CompanionConfig, load_config, load_style_markdown
from ..history import HistoryLog
from ..learning.profile import ProfileStore, build_profile_from_samples
from ..providers.registry import ProviderRegistry
from ..style import RuleSet
from .pipeline import RewritePipeline, RewriteRequest, RewriteResult

logger = logging.getLogger(__name__)


async def rewrite_email(
    request: RewriteRequest,
    registry: ProviderRegistry,
    *,
    config: CompanionConfig | None = None,
    style_markdown: str | None = None,
    profile_store: ProfileStore | None = None,
    history: HistoryLog | None = None,
    request_id: str = "n/a",
    wait_for_history: bool = False,
) -> RewriteResult:
    """
    Load per-request inputs and run the pipeline. Raises AllProvidersFailedError.

    The history append is detached by default; short-lived callers such as
    the CLI pass wait_for_history=True so the record lands before the event
    loop shuts down.
    """
    config = config or load_config()
    if style_markdown is None:
        style_markdown = load_style_markdown()
    profile = (profile_store or ProfileStore()).load()

    pipeline = RewritePipeline(
        registry=registry,
        config=config,
        history=history if history is not None else HistoryLog(),
    )
    result = await pipeline.rewrite(
        request,
        style_markdown=style_markdown,
        profile=profile,
        request_id=request_id,
    )
    if wait_for_history:
        await pipeline.drain()
    return result


def build_profile(samples: list[str], store: ProfileStore | None = None) -> RuleSet:
    """Infer a profile from sample emails and persist it."""
    profile = build_profile_from_samples(samples)
    return (store or ProfileStore()).save(profile)
