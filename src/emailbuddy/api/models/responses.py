"""
Pydantic response models -- what the companion returns.

Python attributes are snake_case; the JSON is camelCase, matching what the
extension reads (rewrittenText, providerUsed, ...).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RewriteResponse(CamelModel):
    """Successful rewrite."""

    rewritten_text: str
    applied_mode: str
    provider_used: str
    notes: list[str] = Field(default_factory=list)


class HistorySettings(CamelModel):
    enabled: bool = False


class ConfigResponse(CamelModel):
    """Effective companion configuration."""

    host: str
    port: int
    provider_order: list[str]
    history: HistorySettings
    timeout_ms: int


class StyleResponse(CamelModel):
    markdown: str


class ProfileResponse(CamelModel):
    profile: dict[str, list[str]]


class SecretsStatusResponse(CamelModel):
    openai_configured: bool = False
    anthropic_configured: bool = False


class SystemChecksResponse(CamelModel):
    default_local_model: str
    ollama_installed: bool = False
    ollama_version: str | None = None
    ollama_serve_reachable: bool = False
    ollama_model_pulled: bool = False


class HealthResponse(CamelModel):
    ok: bool = True


class OkResponse(CamelModel):
    ok: bool = True


class ErrorResponse(CamelModel):
    """Standard error response. `attempts` is set when every provider failed."""

    error: str
    attempts: list[str] | None = None
