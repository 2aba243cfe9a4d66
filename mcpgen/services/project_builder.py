"""
Project builder for assembling configurations by hand or from starter templates.

Every ``add_*`` operation returns a new, validated configuration; the input
configuration is never modified.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from mcpgen.catalog import get_integration, get_pattern
from mcpgen.constants import CORE_DEPENDENCIES
from mcpgen.errors import GenerationError
from mcpgen.models.catalog import IntegrationDefinition, ToolCategory
from mcpgen.models.project import GeneratedTool, ProjectConfiguration
from mcpgen.renderer import TemplateRenderer
from mcpgen.utils.naming import kebab_case
from mcpgen.utils.schema import parameters_from_schema
from .resolver import compute_environment_variables
from .validation import ensure_valid, validate_configuration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StarterTemplate:
    """A named starting point built from catalog patterns and integrations."""
    name: str
    description: str
    pattern_ids: Tuple[str, ...]
    integration_ids: Tuple[str, ...] = ()


STARTER_TEMPLATES: Dict[str, StarterTemplate] = {
    template.name: template for template in (
        StarterTemplate("api-tools", "REST API integration tools", ("api-request", "webhook-sender")),
        StarterTemplate("file-manager", "File system operations", ("file-operations", "csv-processing")),
        StarterTemplate("database", "Database query tools", ("database-query", "cache-store"), ("postgresql",)),
        StarterTemplate("notifications", "Email/Slack notification tools", ("notification-sender",), ("slack", "sendgrid")),
    )
}


def _merge(existing: Sequence[str], additions: Sequence[str]) -> List[str]:
    merged = list(existing)
    for item in additions:
        if item not in merged:
            merged.append(item)
    return merged


class ProjectBuilder:
    """Builds ProjectConfigurations step by step and renders them."""

    def __init__(self, renderer: Optional[TemplateRenderer] = None):
        self.renderer = renderer or TemplateRenderer()

    def create_basic_config(self, name: str, description: str) -> ProjectConfiguration:
        """Empty configuration carrying only the core dependencies."""
        return ProjectConfiguration(
            name=kebab_case(name),
            description=description,
            dependencies=list(CORE_DEPENDENCIES)
        )

    def create_tool(
        self,
        name: str,
        description: str,
        properties: Dict[str, Dict[str, Any]],
        implementation: Optional[str] = None,
        category: ToolCategory = ToolCategory.API,
        dependencies: Sequence[str] = ()
    ) -> GeneratedTool:
        """
        Create a tool whose every property is required.

        Args:
            name: Tool name
            description: What the tool does
            properties: JSON-Schema property map
            implementation: Body of the implementation function, or None for a stub
            category: Tool category
            dependencies: Python distributions the body needs

        Returns:
            GeneratedTool: Tool not bound to a catalog pattern
        """
        input_schema = {
            "type": "object",
            "properties": dict(properties),
            "required": list(properties.keys()),
        }
        return GeneratedTool(
            name=name.strip(),
            description=description,
            category=category,
            parameters=parameters_from_schema(input_schema),
            input_schema=input_schema,
            implementation=implementation or "",
            dependencies=list(dependencies)
        )

    def tool_from_pattern(self, pattern_id: str) -> GeneratedTool:
        """Instantiate a catalog pattern unchanged."""
        pattern = get_pattern(pattern_id)
        if pattern is None:
            raise GenerationError(f"Unknown tool pattern: {pattern_id}", code="UNKNOWN_PATTERN")
        return GeneratedTool(
            name=pattern.id,
            description=pattern.description,
            category=pattern.category,
            origin_pattern_id=pattern.id,
            parameters=parameters_from_schema(pattern.input_schema),
            input_schema=dict(pattern.input_schema),
            output_schema=dict(pattern.output_schema),
            implementation=pattern.template,
            dependencies=list(pattern.dependencies)
        )

    def add_tool(self, config: ProjectConfiguration, tool: GeneratedTool) -> ProjectConfiguration:
        """
        Add a tool and its dependencies.

        Raises:
            ValidationError: The tool's name collides (case-insensitively) with an existing tool
        """
        return ensure_valid(config.model_copy(update={
            "tools": [*config.tools, tool],
            "dependencies": _merge(config.dependencies, tool.dependencies),
        }))

    def add_integration(
        self,
        config: ProjectConfiguration,
        integration: Union[IntegrationDefinition, str]
    ) -> ProjectConfiguration:
        """Add an integration (or catalog id) with its dependencies and environment variables."""
        if isinstance(integration, str):
            definition = get_integration(integration)
            if definition is None:
                raise GenerationError(f"Unknown integration: {integration}", code="UNKNOWN_INTEGRATION")
            integration = definition

        variables = dict(config.environment_variables)
        for key, description in compute_environment_variables([integration]).items():
            variables.setdefault(key, description)

        return ensure_valid(config.model_copy(update={
            "integrations": [*config.integrations, integration],
            "dependencies": _merge(config.dependencies, integration.dependencies),
            "environment_variables": variables,
        }))

    def add_dependency(self, config: ProjectConfiguration, dependency: str) -> ProjectConfiguration:
        return ensure_valid(config.model_copy(update={
            "dependencies": _merge(config.dependencies, [dependency]),
        }))

    def validate(self, config: ProjectConfiguration) -> List[str]:
        return validate_configuration(config)

    def from_template(self, template_name: str) -> ProjectConfiguration:
        """
        Build the configuration of a starter template.

        Raises:
            GenerationError: Unknown template name (code UNKNOWN_TEMPLATE)
        """
        template = STARTER_TEMPLATES.get(template_name)
        if template is None:
            raise GenerationError(
                f"Unknown template: {template_name}. Available: {', '.join(STARTER_TEMPLATES)}",
                code="UNKNOWN_TEMPLATE"
            )

        config = self.create_basic_config(f"{template.name}-mcp-server", template.description)
        for pattern_id in template.pattern_ids:
            config = self.add_tool(config, self.tool_from_pattern(pattern_id))
        for integration_id in template.integration_ids:
            config = self.add_integration(config, integration_id)

        logger.info(f"Built starter template {template_name} with {len(config.tools)} tools")
        return config.model_copy(update={"metadata": {"template": template_name}})

    def generate(
        self,
        name: str,
        description: str,
        output_dir: Union[str, Path],
        tools: Sequence[GeneratedTool] = (),
        integrations: Sequence[Union[IntegrationDefinition, str]] = (),
        dependencies: Sequence[str] = ()
    ) -> List[str]:
        """
        Build a configuration from parts, validate it and render it.

        Returns:
            List[str]: Written relative paths

        Raises:
            ValidationError: The assembled configuration is invalid
            TemplateError: A placeholder could not be resolved
        """
        config = self.create_basic_config(name, description)
        for tool in tools:
            config = self.add_tool(config, tool)
        for integration in integrations:
            config = self.add_integration(config, integration)
        for dependency in dependencies:
            config = self.add_dependency(config, dependency)

        ensure_valid(config)
        return self.renderer.render(config, output_dir)
