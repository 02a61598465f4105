"""
Writing profile -- style directives inferred from the user's own emails.

The profile has the same shape as a STYLE.md RuleSet and is layered beneath
the global and per-mode rules at merge time. Inference looks at
sentence length and contraction use only.

Usage:
    store = ProfileStore()
    profile = build_profile_from_samples(["Hi team, I'm out Friday.", ...])
    store.save(profile)
    store.load()  # -> RuleSet or None
"""

import logging
import re
from pathlib import Path

from .. import storage
from ..style.models import RuleSet, coerce_rule_set, empty_rule_set

logger = logging.getLogger(__name__)

DEFAULT_SENTENCE_LENGTH = 14
SHORT_SENTENCE_WORDS = 10

_SENTENCE_SPLIT = re.compile(r"[.!?]")
_CONTRACTIONS = re.compile(r"\b(I'm|don't|can't|we're|it's|that's)\b", re.IGNORECASE)


def average_sentence_length(texts: list[str]) -> int:
    """Mean words per sentence across `texts`, rounded half up."""
    sentences = [
        s.strip()
        for text in texts
        for s in _SENTENCE_SPLIT.split(text)
        if s.strip()
    ]
    if not sentences:
        return DEFAULT_SENTENCE_LENGTH

    words = sum(len(s.split()) for s in sentences)
    return int(words / len(sentences) + 0.5)


def build_profile_from_samples(samples: list[str]) -> RuleSet:
    """Infer a RuleSet from sample emails. Blank samples are ignored."""
    cleaned = [s.strip() for s in samples if isinstance(s, str) and s.strip()]
    profile = empty_rule_set()

    if average_sentence_length(cleaned) <= SHORT_SENTENCE_WORDS:
        profile["do"].append("favor short sentences")
    else:
        profile["do"].append("use medium-length clear sentences")

    if _CONTRACTIONS.search(" ".join(cleaned)):
        profile["do"].append("use contractions naturally")

    profile["avoid"].append("sudden tone shifts")

    logger.info(f"[Profile] Built profile from {len(cleaned)} sample(s)")
    return profile


class ProfileStore:
    """profile.json persistence. `path=None` follows EMAILBUDDY_HOME."""

    def __init__(self, path: Path | None = None):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path or storage.profile_path()

    def load(self) -> RuleSet | None:
        """The stored profile, or None if none has been learned yet."""
        raw = storage.read_json(self.path, None)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.warning("[Profile] profile.json is not an object; ignoring it")
            return None
        return coerce_rule_set(raw)

    def save(self, profile: RuleSet) -> RuleSet:
        normalized = coerce_rule_set(profile)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        storage.write_json(self.path, normalized)
        return normalized
