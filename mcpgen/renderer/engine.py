"""
Template engine that expands a ProjectConfiguration into a Python MCP server project.

Rendering is a pure function of the configuration: every identifier is derived
through the naming helpers, so a tool or integration is spelled the same way in
every file that refers to it.
"""

import json
import keyword
import logging
import textwrap
from pathlib import Path
from pprint import pformat
from string import Template
from typing import Any, Dict, List, Mapping, Union

from pydantic import BaseModel

from mcpgen.errors import TemplateError
from mcpgen.models.catalog import IntegrationDefinition
from mcpgen.models.project import GeneratedTool, ProjectConfiguration, RenderedFile
from mcpgen.utils.naming import (
    constant_case,
    environment_key,
    kebab_case,
    pascal_case,
    snake_case,
)
from mcpgen.utils.schema import python_type_for, required_properties, schema_properties
from . import templates

logger = logging.getLogger(__name__)

# Names bound at module level in every generated tool module
_RESERVED_TOOL_NAMES = {"logging", "logger"}


def python_identifier(value: str) -> str:
    """Snake-case identifier that is safe as a Python module, function or attribute name."""
    identifier = snake_case(value) or "unnamed"
    if keyword.iskeyword(identifier) or identifier in _RESERVED_TOOL_NAMES:
        identifier += "_"
    return identifier


def field_name(property_name: str) -> str:
    """Model field for a schema property; avoids keywords and BaseModel attributes."""
    name = snake_case(property_name) or "field"
    if keyword.iskeyword(name) or hasattr(BaseModel, name) or name.startswith("model_"):
        name += "_"
    return name


def python_literal(value: Any) -> str:
    return pformat(value, sort_dicts=False, width=88)


def docstring_text(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


class ToolSymbols:
    """Every identifier derived from one tool name."""

    def __init__(self, tool: GeneratedTool):
        self.tool = tool
        self.tool_name = kebab_case(tool.name)
        self.module = python_identifier(tool.name)
        self.function = self.module
        self.args_class = f"{pascal_case(tool.name)}Args"
        self.schema_constant = f"{constant_case(tool.name)}_SCHEMA"


class IntegrationSymbols:
    """Every identifier derived from one integration id."""

    def __init__(self, integration: IntegrationDefinition):
        self.integration = integration
        self.module = python_identifier(integration.id)
        self.attribute = self.module
        self.class_name = f"{pascal_case(integration.id)}Integration"


class TemplateRenderer:
    """
    Renders a project configuration into a file tree.

    Files are produced in a fixed order: package scaffold, entry point, manifest,
    one module per tool, one module per integration, environment template,
    documentation and the aggregated type declarations.
    """

    def build_file_tree(self, config: ProjectConfiguration) -> List[RenderedFile]:
        """
        Render every file of the project in memory.

        Args:
            config: Configuration to render

        Returns:
            List[RenderedFile]: Files in emission order

        Raises:
            TemplateError: A placeholder could not be resolved
        """
        package = python_identifier(config.name)
        distribution = kebab_case(config.name)
        tools = [ToolSymbols(tool) for tool in config.tools]
        integrations = [IntegrationSymbols(integration) for integration in config.integrations]

        base = f"src/{package}"
        files = [
            RenderedFile(relative_path=f"{base}/__init__.py", content=self._render_package_init(config)),
            RenderedFile(relative_path=f"{base}/tools/__init__.py", content=self._render_tools_init(distribution, tools)),
            RenderedFile(
                relative_path=f"{base}/integrations/__init__.py",
                content=self._render_integrations_init(distribution, integrations)
            ),
            RenderedFile(relative_path=f"{base}/server.py", content=self._render_server(config, distribution, tools, integrations)),
            RenderedFile(relative_path="pyproject.toml", content=self._render_manifest(config, distribution, package)),
        ]
        for symbols in tools:
            files.append(RenderedFile(
                relative_path=f"{base}/tools/{symbols.module}.py",
                content=self._render_tool(symbols)
            ))
        for symbols in integrations:
            files.append(RenderedFile(
                relative_path=f"{base}/integrations/{symbols.module}.py",
                content=self._render_integration(config, symbols)
            ))
        files.append(RenderedFile(relative_path=".env.example", content=self._render_env_template(config, distribution)))
        files.append(RenderedFile(relative_path="README.md", content=self._render_readme(config, distribution)))
        files.append(RenderedFile(relative_path=f"{base}/types.py", content=self._render_types(distribution, tools, integrations)))

        logger.debug(f"Rendered {len(files)} files for {config.name}")
        return files

    def render(self, config: ProjectConfiguration, output_dir: Union[str, Path]) -> List[str]:
        """
        Render ``config`` and write the files under ``output_dir``.

        Rendering completes in memory before anything is written; an OSError
        while writing propagates and leaves the files written so far in place.

        Returns:
            List[str]: Written relative paths in emission order
        """
        written = self.write_files(self.build_file_tree(config), output_dir)
        logger.info(f"Wrote {len(written)} files for {config.name} to {output_dir}")
        return written

    def write_files(self, files: List[RenderedFile], output_dir: Union[str, Path]) -> List[str]:
        """Write rendered files in order; OSError propagates."""
        root = Path(output_dir)

        written = []
        for rendered in files:
            path = root / rendered.relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(rendered.content)
            written.append(rendered.relative_path)
        return written

    def substitute(self, template: Template, values: Mapping[str, str], template_name: str) -> str:
        """Fill a template, converting unresolved placeholders into TemplateError."""
        try:
            return template.substitute(values)
        except KeyError as e:
            placeholder = e.args[0] if e.args else None
            raise TemplateError(
                f"Unresolved placeholder '${placeholder}' in {template_name}",
                template=template_name,
                placeholder=placeholder
            ) from e
        except ValueError as e:
            raise TemplateError(f"Invalid placeholder in {template_name}: {e}", template=template_name) from e

    # Scaffold

    def _render_package_init(self, config: ProjectConfiguration) -> str:
        return self.substitute(templates.PACKAGE_INIT, {
            "description": docstring_text(config.description),
            "version": config.version,
        }, "package __init__")

    def _render_tools_init(self, distribution: str, tools: List[ToolSymbols]) -> str:
        imports = "".join(
            f"\nfrom .{s.module} import {s.schema_constant}, {s.function}" for s in tools
        )
        exports = [name for s in tools for name in (s.function, s.schema_constant)]
        return self.substitute(templates.TOOLS_INIT, {
            "distribution": distribution,
            "imports": imports + "\n" if imports else "",
            "exports": ", ".join(f'"{name}"' for name in exports),
        }, "tools __init__")

    def _render_integrations_init(self, distribution: str, integrations: List[IntegrationSymbols]) -> str:
        imports = "".join(f"\nfrom .{s.module} import {s.class_name}" for s in integrations)
        return self.substitute(templates.INTEGRATIONS_INIT, {
            "distribution": distribution,
            "imports": imports + "\n" if imports else "",
            "exports": ", ".join(f'"{s.class_name}"' for s in integrations),
        }, "integrations __init__")

    # Entry point and manifest

    def _render_server(
        self,
        config: ProjectConfiguration,
        distribution: str,
        tools: List[ToolSymbols],
        integrations: List[IntegrationSymbols]
    ) -> str:
        if tools:
            entries = "".join(
                f"\n    {json.dumps(s.tool_name)}: (tools.{s.function}, "
                f"{json.dumps(s.tool.description)}, tools.{s.schema_constant}),"
                for s in tools
            )
            registry = "{" + entries + "\n}"
        else:
            registry = "{}"

        if integrations:
            context_arguments = "".join(
                f"\n        {s.attribute}=integrations.{s.class_name}()," for s in integrations
            ) + "\n    "
        else:
            context_arguments = ""

        return self.substitute(templates.SERVER, {
            "description": docstring_text(config.description),
            "distribution": distribution,
            "registry": registry,
            "context_arguments": context_arguments,
        }, "server.py")

    def _render_manifest(self, config: ProjectConfiguration, distribution: str, package: str) -> str:
        return self.substitute(templates.MANIFEST, {
            "distribution": distribution,
            "package": package,
            "version": config.version,
            "toml_description": json.dumps(config.description),
            "dependencies": "\n".join(f"    {json.dumps(d)}," for d in config.dependencies),
        }, "pyproject.toml")

    # Tools

    def _render_body(self, symbols: ToolSymbols) -> str:
        values = {
            "tool_name": symbols.tool_name,
            "function_name": symbols.function,
            "description": symbols.tool.description,
        }
        name = f"implementation of {symbols.tool_name}"
        if symbols.tool.implementation.strip():
            body = self.substitute(Template(symbols.tool.implementation), values, name)
        else:
            body = self.substitute(templates.STUB_BODY, values, name)
        return textwrap.indent(textwrap.dedent(body).strip("\n"), "    ")

    def _render_tool(self, symbols: ToolSymbols) -> str:
        tool = symbols.tool
        return self.substitute(templates.TOOL_MODULE, {
            "docstring": docstring_text(tool.description),
            "args_class": symbols.args_class,
            "tool_name": symbols.tool_name,
            "schema_constant": symbols.schema_constant,
            "schema": python_literal(tool.input_schema),
            "body": self._render_body(symbols),
            "function_name": symbols.function,
        }, f"tools/{symbols.module}.py")

    # Integrations

    def _render_integration(self, config: ProjectConfiguration, symbols: IntegrationSymbols) -> str:
        integration = symbols.integration
        lines = []
        attributes = set()
        for variable in integration.environment_variables:
            attribute = python_identifier(variable)
            attributes.add(attribute)
            lines.append(f"        self.{attribute}: str = os.environ[{json.dumps(variable)}]")
        for property_name in integration.config_properties():
            key = environment_key(integration.id, property_name)
            if key not in config.environment_variables:
                continue
            attribute = python_identifier(property_name)
            if attribute in attributes:
                attribute = python_identifier(key)
            attributes.add(attribute)
            lines.append(f"        self.{attribute}: Optional[str] = os.getenv({json.dumps(key)})")

        return self.substitute(templates.INTEGRATION_MODULE, {
            "docstring": docstring_text(f"{integration.display_name} integration.\n\n{integration.description}"),
            "required": python_literal(list(integration.environment_variables)),
            "class_name": symbols.class_name,
            "integration_id": integration.id,
            "display_name": integration.display_name.replace('"', "'"),
            "fields": "\n".join(lines),
        }, f"integrations/{symbols.module}.py")

    # Environment template and documentation

    def _render_env_template(self, config: ProjectConfiguration, distribution: str) -> str:
        lines = [
            f"# Environment variables for {distribution}",
            "# Copy this file to .env and fill in the values.",
        ]
        written = set()
        for integration in config.integrations:
            if not integration.environment_variables:
                continue
            lines.extend(["", f"# {integration.display_name} (required)"])
            for variable in integration.environment_variables:
                if variable not in written:
                    lines.append(f"{variable}=")
                    written.add(variable)

        optional = [(k, v) for k, v in config.environment_variables.items() if k not in written]
        if optional:
            lines.extend(["", "# Integration configuration"])
            for key, description in optional:
                lines.append(f"# {' '.join(description.split())}")
                lines.append(f"{key}=")

        return "\n".join(lines) + "\n"

    def _render_readme(self, config: ProjectConfiguration, distribution: str) -> str:
        tool_sections = []
        for tool in config.tools:
            section = [f"### `{kebab_case(tool.name)}`", "", tool.description, ""]
            if tool.parameters:
                section.extend(["| Parameter | Type | Required | Description |", "| --- | --- | --- | --- |"])
                for parameter in tool.parameters:
                    section.append(
                        f"| `{parameter.name}` | {parameter.type} | "
                        f"{'yes' if parameter.required else 'no'} | {parameter.description} |"
                    )
                section.append("")
            section.extend(["Input schema:", "", "```json", json.dumps(tool.input_schema, indent=2), "```", ""])
            tool_sections.append("\n".join(section))

        integration_sections = []
        for integration in config.integrations:
            section = [f"### {integration.display_name}", "", integration.description, ""]
            if integration.environment_variables:
                variables = ", ".join(f"`{v}`" for v in integration.environment_variables)
                section.extend([f"Required environment variables: {variables}", ""])
            if integration.setup_instructions.strip():
                section.extend([integration.setup_instructions.strip(), ""])
            integration_sections.append("\n".join(section))

        return self.substitute(templates.README, {
            "name": config.name,
            "description": config.description,
            "distribution": distribution,
            "tools": "\n".join(tool_sections) if tool_sections else "No tools configured.\n",
            "integrations": "\n".join(integration_sections) if integration_sections else "No integrations configured.\n",
            "dependencies": "\n".join(f"- `{d}`" for d in config.dependencies),
        }, "README.md")

    # Type declarations

    def _render_args_model(self, symbols: ToolSymbols) -> str:
        schema = symbols.tool.input_schema
        required = set(required_properties(schema))
        lines = []
        used = set()
        for property_name, spec in schema_properties(schema).items():
            name = field_name(property_name)
            while name in used:
                name += "_"
            used.add(name)

            annotation = python_type_for(spec)
            arguments = []
            if property_name not in required:
                annotation = f"Optional[{annotation}]"
                arguments.append(f"default={python_literal(spec.get('default'))}")
            if name != property_name:
                arguments.append(f"alias={json.dumps(property_name)}")
            if spec.get("description"):
                arguments.append(f"description={json.dumps(spec['description'])}")
            lines.append(f"    {name}: {annotation} = Field({', '.join(arguments)})")

        return self.substitute(templates.ARGS_MODEL, {
            "class_name": symbols.args_class,
            "tool_name": symbols.tool_name,
            "fields": "".join(f"\n{line}" for line in lines),
        }, "types.py")

    def _render_types(
        self,
        distribution: str,
        tools: List[ToolSymbols],
        integrations: List[IntegrationSymbols]
    ) -> str:
        if integrations:
            type_checking_imports = "\n".join(
                f"    from .integrations.{s.module} import {s.class_name}" for s in integrations
            )
            context_fields = "\n".join(
                f'    {s.attribute}: Optional["{s.class_name}"] = None' for s in integrations
            )
        else:
            type_checking_imports = "    pass"
            context_fields = "    pass"

        models = "\n\n\n".join(self._render_args_model(s) for s in tools)
        return self.substitute(templates.TYPES_MODULE, {
            "distribution": distribution,
            "type_checking_imports": type_checking_imports,
            "context_fields": context_fields,
            "models": f"\n\n{models}\n" if models else "",
        }, "types.py")


def render_summary(files: List[RenderedFile]) -> Dict[str, int]:
    """Byte size per rendered path, for logging."""
    return {rendered.relative_path: len(rendered.content.encode("utf-8")) for rendered in files}
