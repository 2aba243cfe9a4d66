"""
Catalog models: reusable tool patterns and third-party integration definitions.
Catalog entries are static reference data and frozen once constructed.
"""

from enum import Enum
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ToolCategory(str, Enum):
    """Closed set of tool pattern categories."""
    API = "api"
    FILE = "file"
    DATABASE = "database"
    NOTIFICATION = "notification"
    PROCESSING = "processing"
    AUTH = "auth"


class AuthType(str, Enum):
    """How an integration authenticates against its service."""
    API_KEY = "api-key"
    OAUTH = "oauth"
    BASIC = "basic"
    NONE = "none"


class ToolPattern(BaseModel):
    """A reusable template describing one class of capability."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Pattern identifier")
    name: str = Field(description="Human readable pattern name")
    category: ToolCategory = Field(description="Pattern category")
    description: str = Field(description="What tools built from this pattern do")
    actions: Tuple[str, ...] = Field(description="Trigger actions (verbs) this pattern handles")
    examples: Tuple[str, ...] = Field(default=(), description="Example phrases that call for this pattern")
    dependencies: Tuple[str, ...] = Field(default=(), description="Python distributions the pattern needs")
    template: str = Field(
        description="Implementation body template; placeholders use $name syntax"
    )
    input_schema: Dict[str, Any] = Field(description="JSON-Schema of the tool input")
    output_schema: Dict[str, Any] = Field(description="JSON-Schema of the tool result")


class IntegrationDefinition(BaseModel):
    """A reusable description of a third-party service binding."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Integration identifier")
    name: str = Field(description="Integration slug")
    display_name: str = Field(description="Display name")
    description: str = Field(description="What the integration provides")
    dependencies: Tuple[str, ...] = Field(default=(), description="Python SDK distributions")
    auth_type: AuthType = Field(default=AuthType.NONE, description="Auth classification")
    environment_variables: Tuple[str, ...] = Field(
        default=(),
        description="Environment variables the integration requires at startup"
    )
    config_schema: Dict[str, Any] = Field(
        default_factory=dict,
        description="JSON-Schema of the integration configuration"
    )
    setup_instructions: str = Field(default="", description="Markdown setup steps")

    def config_properties(self) -> List[str]:
        """Names of the configuration-schema properties, in declaration order."""
        return list(self.config_schema.get("properties", {}).keys())
