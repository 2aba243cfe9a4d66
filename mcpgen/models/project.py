"""
Project configuration models: the resolved, validated description of one
generated server, and the file tree rendered from it.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from mcpgen.constants import DEFAULT_LANGUAGE, DEFAULT_SERVER_VERSION
from .catalog import IntegrationDefinition, ToolCategory


class ParameterSpec(BaseModel):
    """Specification of a parameter accepted by a generated tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    description: str = ""
    required: bool = False


class GeneratedTool(BaseModel):
    """A concrete tool placed into a project configuration; one output module each."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Tool name")
    description: str = Field(description="Tool description")
    category: ToolCategory = Field(description="Category of the originating pattern")
    origin_pattern_id: Optional[str] = Field(
        default=None,
        description="Catalog pattern the tool was synthesized from (None for hand-built tools)"
    )
    parameters: List[ParameterSpec] = Field(
        default_factory=list,
        description="Parameters derived from the input schema"
    )
    input_schema: Dict[str, Any] = Field(description="JSON-Schema of the tool input")
    output_schema: Dict[str, Any] = Field(default_factory=dict, description="JSON-Schema of the result")
    implementation: str = Field(
        default="",
        description="Body of the async implementation function; empty renders a stub"
    )
    dependencies: List[str] = Field(default_factory=list, description="Required Python packages")


class ProjectConfiguration(BaseModel):
    """Aggregate root describing one generated server."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Server name (kebab case)")
    description: str = Field(description="Server description")
    version: str = Field(default=DEFAULT_SERVER_VERSION, description="Server version")
    language: Literal["python"] = Field(default=DEFAULT_LANGUAGE, description="Emitted language")
    tools: List[GeneratedTool] = Field(default_factory=list, description="Generated tools")
    integrations: List[IntegrationDefinition] = Field(
        default_factory=list,
        description="Selected integrations"
    )
    dependencies: List[str] = Field(
        default_factory=list,
        description="Dependency closure, insertion ordered without duplicates"
    )
    environment_variables: Dict[str, str] = Field(
        default_factory=dict,
        description="Configuration variables keyed INTEGRATION_PROPERTY with descriptions"
    )
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Free-form generation metadata")

    def tool_names(self) -> List[str]:
        return [tool.name for tool in self.tools]

    def integration_ids(self) -> List[str]:
        return [integration.id for integration in self.integrations]


class RenderedFile(BaseModel):
    """One file of the rendered output tree."""

    model_config = ConfigDict(frozen=True)

    relative_path: str = Field(description="POSIX path relative to the output directory")
    content: str = Field(description="File content")


class GenerationResult(BaseModel):
    """Outcome of one end-to-end generation request."""

    run_id: str = Field(description="Generation run identifier")
    output_dir: str = Field(description="Directory the project was written to")
    config: ProjectConfiguration = Field(description="Resolved configuration")
    files: List[str] = Field(default_factory=list, description="Written relative paths")
    used_fallback: bool = Field(default=False, description="Whether the keyword analyzer was used")
