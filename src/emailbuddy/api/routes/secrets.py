"""
Secrets API -- store provider API keys without ever returning them.

  POST /v1/secrets         {"account": "openai_api_key", "value": "sk-..."}
  GET  /v1/secrets/status  -> {"openaiConfigured": bool, "anthropicConfigured": bool}
"""

import logging

from fastapi import APIRouter, HTTPException, Request

from ...security import (
    SecretStoreError,
    ValidationError,
    validate_in_choices,
    validate_not_empty,
)
from ...security.secrets import KNOWN_ACCOUNTS
from ..models.requests import SecretBody
from ..models.responses import OkResponse, SecretsStatusResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/secrets", response_model=OkResponse)
async def store_secret(body: SecretBody, request: Request) -> OkResponse:
    try:
        account = validate_not_empty(body.account, "account")
        value = validate_not_empty(body.value, "value")
        validate_in_choices(account, list(KNOWN_ACCOUNTS), "account")
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        await request.app.state.secrets.set(account, value)
    except SecretStoreError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return OkResponse(ok=True)


@router.get("/secrets/status", response_model=SecretsStatusResponse)
async def secrets_status(request: Request) -> SecretsStatusResponse:
    return SecretsStatusResponse(**await request.app.state.secrets.status())
