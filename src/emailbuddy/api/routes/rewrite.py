"""
Rewrite API -- the endpoint the browser extension calls from the compose box.

  POST /v1/rewrite  {"text": "...", "mode": "casual"}
    200 -> {"rewrittenText", "appliedMode", "providerUsed", "notes"}
    400 -> text missing, blank or too long
    502 -> every configured provider failed; "attempts" lists why

Security:
  - Input size validation
  - Prompt-injection patterns in the draft are logged, never blocked
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from ...orchestration import AllProvidersFailedError, RewriteRequest, rewrite_email
from ...security import ValidationError, detect_injection_attempt, validate_length
from ..middleware import get_request_id
from ..models.requests import RewriteBody
from ..models.responses import ErrorResponse, RewriteResponse

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_TEXT_LENGTH = 50_000


@router.post(
    "/rewrite",
    response_model=RewriteResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def rewrite(body: RewriteBody, request: Request):
    """Rewrite a draft with the first provider that succeeds."""
    if not isinstance(body.text, str) or not body.text.strip():
        raise HTTPException(status_code=400, detail="text is required")
    try:
        validate_length(body.text, "text", max_length=MAX_TEXT_LENGTH)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    request_id = get_request_id(request)
    detect_injection_attempt(body.text)

    state = request.app.state
    try:
        result = await rewrite_email(
            RewriteRequest(text=body.text, mode=body.mode),
            state.registry,
            profile_store=state.profile_store,
            history=state.history,
            request_id=request_id,
        )
    except AllProvidersFailedError as e:
        return JSONResponse(
            status_code=502,
            content=ErrorResponse(error=str(e), attempts=e.attempts).model_dump(by_alias=True),
        )

    return RewriteResponse(
        rewritten_text=result.rewritten_text,
        applied_mode=result.applied_mode,
        provider_used=result.provider_used,
        notes=result.notes,
    )
