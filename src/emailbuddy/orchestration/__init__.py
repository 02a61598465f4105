"""Rewrite orchestration -- style composition plus sequential provider fallback."""
from .pipeline import (
    AllProvidersFailedError,
    RewritePipeline,
    RewriteRequest,
    RewriteResult,
)
from .service import build_profile, rewrite_email
