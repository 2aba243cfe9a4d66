"""
Models produced by the analysis and tool-synthesis capabilities.
"""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .catalog import ToolCategory


class Complexity(str, Enum):
    """Complexity classification of a generation request."""
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"


class RequirementRecord(BaseModel):
    """One capability the user asked for."""

    model_config = ConfigDict(frozen=True)

    action_type: str = Field(description="Primary action, e.g. 'send', 'query', 'read'")
    description: str = Field(description="Free-text description of the requirement")
    priority: int = Field(default=1, ge=1, le=5, description="1 (highest) to 5 (lowest)")


class IntegrationSuggestion(BaseModel):
    """A third-party service the analysis believes is needed."""

    model_config = ConfigDict(frozen=True)

    service: str = Field(description="Integration identifier, e.g. 'github'")
    reason: str = Field(default="", description="Why the service is needed")
    confidence: float = Field(default=0.5, ge=0.0, le=1.0, description="Confidence in [0, 1]")


class AnalysisResult(BaseModel):
    """Structured interpretation of a free-text server description."""

    model_config = ConfigDict(frozen=True)

    summary: str = Field(description="Brief summary of what the user wants to build")
    requirements: List[RequirementRecord] = Field(
        default_factory=list,
        description="Ordered requirement records"
    )
    integrations: List[IntegrationSuggestion] = Field(
        default_factory=list,
        description="Suggested integrations with confidence scores"
    )
    tool_categories: List[ToolCategory] = Field(
        default_factory=list,
        description="Tool categories the server needs"
    )
    primary_actions: List[str] = Field(
        default_factory=list,
        description="Actions the user wants to perform (get, send, query, ...)"
    )
    services: List[str] = Field(
        default_factory=list,
        description="Services mentioned by name (GitHub, Slack, ...)"
    )
    key_features: List[str] = Field(default_factory=list, description="Notable features")
    complexity: Complexity = Field(default=Complexity.SIMPLE, description="Complexity classification")
    suggested_name: str = Field(default="", description="Suggested server name")
    suggested_description: str = Field(default="", description="Suggested server description")
    fallback: bool = Field(
        default=False,
        description="True when produced by the local keyword analyzer"
    )

    def suggested_integration_ids(self) -> List[str]:
        """Integration identifiers in suggestion order."""
        return [suggestion.service for suggestion in self.integrations]


class GeneratedToolDetail(BaseModel):
    """Pattern-specific detail returned by a tool synthesizer."""

    name: str = Field(description="Tool name")
    description: str = Field(description="What this tool does")
    input_schema: Dict[str, Any] = Field(
        default_factory=dict,
        description="JSON-Schema of the tool input (type 'object')"
    )
    output_schema: Dict[str, Any] = Field(
        default_factory=dict,
        description="JSON-Schema of the tool result"
    )
    implementation: str = Field(
        default="",
        description="Body of the async implementation function"
    )
