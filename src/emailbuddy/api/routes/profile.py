"""
Profile API -- learn a writing profile from the user's own emails.

  POST /v1/profile/samples  {"samples": ["...", "..."]}  -> {"profile": {...}}
  GET  /v1/profile                                       -> {"profile": {...}}
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from ...orchestration import build_profile
from ...security import ValidationError, validate_length, validate_list_size
from ...style import empty_rule_set
from ..models.requests import ProfileSamplesBody
from ..models.responses import ProfileResponse

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_SAMPLES = 50
MAX_SAMPLE_LENGTH = 20_000


@router.post("/profile/samples", response_model=ProfileResponse)
async def learn_profile(body: ProfileSamplesBody, request: Request) -> ProfileResponse:
    """Infer and store a writing profile from sample emails."""
    samples = body.samples
    if not isinstance(samples, list) or not all(isinstance(s, str) for s in samples):
        raise HTTPException(status_code=400, detail="samples must be an array of strings")
    try:
        validate_list_size(samples, "samples", max_items=MAX_SAMPLES)
        for sample in samples:
            validate_length(sample, "sample", max_length=MAX_SAMPLE_LENGTH)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    profile = build_profile(samples, store=request.app.state.profile_store)
    return ProfileResponse(profile=profile)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(request: Request) -> ProfileResponse:
    """The stored profile (all categories empty if none has been learned)."""
    profile = request.app.state.profile_store.load()
    return ProfileResponse(profile=profile if profile is not None else empty_rule_set())
