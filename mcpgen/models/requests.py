"""
Request and response bodies of the HTTP API.
"""

from typing import List

from pydantic import BaseModel, Field

from .catalog import IntegrationDefinition, ToolPattern


class ResolveRequest(BaseModel):
    """Free-text description of the server to build."""
    description: str = Field(min_length=1, description="What the generated server should do")


class GenerateRequest(ResolveRequest):
    """Resolve and render in one call; the project is written under the output root."""
    pass


class PatternListResponse(BaseModel):
    patterns: List[ToolPattern]
    total: int


class IntegrationListResponse(BaseModel):
    integrations: List[IntegrationDefinition]
    total: int
