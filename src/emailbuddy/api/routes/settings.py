"""
Settings API -- companion configuration and the STYLE.md document.

  GET /v1/config         -- Effective config
  PUT /v1/config         -- Partial update, validated before it is saved
  GET /v1/config/schema  -- Defaults and constraints for the options page
  GET /v1/style          -- STYLE.md (default document if none saved)
  PUT /v1/style          -- Replace STYLE.md
"""

import logging

from fastapi import APIRouter, Body, HTTPException

from ...config import (
    get_config_schema,
    load_config,
    load_style_markdown,
    save_config,
    save_style_markdown,
)
from ...security import ValidationError
from ..models.requests import StyleBody
from ..models.responses import ConfigResponse, StyleResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/config", response_model=ConfigResponse)
async def read_config() -> ConfigResponse:
    return ConfigResponse(**load_config().to_wire())


@router.put("/config", response_model=ConfigResponse)
async def update_config(patch: dict | None = Body(None)) -> ConfigResponse:
    """Merge `patch` over the current config; 400 with the reason if invalid."""
    try:
        config = save_config(patch)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ConfigResponse(**config.to_wire())


@router.get("/config/schema")
async def config_schema() -> dict:
    return get_config_schema()


@router.get("/style", response_model=StyleResponse)
async def read_style() -> StyleResponse:
    return StyleResponse(markdown=load_style_markdown())


@router.put("/style", response_model=StyleResponse)
async def update_style(body: StyleBody) -> StyleResponse:
    try:
        markdown = save_style_markdown(body.markdown)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info(f"[SettingsAPI] STYLE.md updated ({len(markdown)} chars)")
    return StyleResponse(markdown=markdown)
