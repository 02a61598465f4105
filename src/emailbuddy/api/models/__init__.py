"""Pydantic models for API request/response contracts."""
from .requests import (
    ProfileSamplesBody,
    RewriteBody,
    SecretBody,
    StyleBody,
)
from .responses import (
    ConfigResponse,
    ErrorResponse,
    HealthResponse,
    OkResponse,
    ProfileResponse,
    RewriteResponse,
    SecretsStatusResponse,
    StyleResponse,
    SystemChecksResponse,
)
