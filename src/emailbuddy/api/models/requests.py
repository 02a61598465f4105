"""
Pydantic request models -- what the browser extension and options page send.

Fields are loose (Any / optional); the routes validate them explicitly and
answer 400 {"error": "..."}.
"""

from typing import Any

from pydantic import BaseModel, Field


class RewriteBody(BaseModel):
    """POST /v1/rewrite"""

    text: Any = Field(None, description="The email draft to rewrite")
    mode: Any = Field(None, description="Tone: casual, polished, concise, or any STYLE.md mode")


class ProfileSamplesBody(BaseModel):
    """POST /v1/profile/samples"""

    samples: Any = Field(None, description="Sample emails written by the user")


class StyleBody(BaseModel):
    """PUT /v1/style"""

    markdown: Any = Field(None, description="Full STYLE.md document")


class SecretBody(BaseModel):
    """POST /v1/secrets"""

    account: Any = Field(None, description="openai_api_key or anthropic_api_key")
    value: Any = Field(None, description="The API key")
