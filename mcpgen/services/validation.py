"""
Invariant checks for project configurations.

Every violation is collected so callers can report them all at once.
"""

import re
from typing import Any, Dict, Iterable, List

from mcpgen.constants import CORE_DEPENDENCIES, DEFAULT_LANGUAGE
from mcpgen.errors import ValidationError
from mcpgen.models.project import ProjectConfiguration
from mcpgen.utils.naming import identity_key, kebab_case
from mcpgen.utils.schema import is_object_schema

_ENV_KEY = re.compile(r"^[A-Z][A-Z0-9_]*$")


def dependency_closure(*groups: Iterable[Any]) -> List[str]:
    """
    Core dependencies followed by the dependencies of every item in ``groups``.

    Groups are patterns, tools or integrations; order is kept and duplicates dropped.
    """
    closure = list(CORE_DEPENDENCIES)
    for group in groups:
        for item in group:
            for dependency in item.dependencies:
                if dependency not in closure:
                    closure.append(dependency)
    return closure


def validate_configuration(config: ProjectConfiguration) -> List[str]:
    """
    Check a configuration against its invariants.

    Tool names and integration ids are compared by ``identity_key``, so two
    entries that differ only in case or separators, and would therefore render
    to the same module or class, are reported as duplicates.

    Args:
        config: Configuration to check

    Returns:
        List[str]: Violation messages, empty when the configuration is valid
    """
    errors: List[str] = []

    if not config.name.strip():
        errors.append("Server name is required")
    elif not kebab_case(config.name):
        errors.append(f"Server name '{config.name}' has no letters or digits")

    if not config.description.strip():
        errors.append("Server description is required")

    if config.language != DEFAULT_LANGUAGE:
        errors.append(f"Unsupported language: {config.language}")

    seen_tools: Dict[str, str] = {}
    for index, tool in enumerate(config.tools):
        label = tool.name or f"#{index}"
        key = identity_key(tool.name)
        if not tool.name.strip():
            errors.append(f"Tool {label}: name is required")
        elif not key:
            errors.append(f"Tool {label}: name has no letters or digits")
        if not tool.description.strip():
            errors.append(f"Tool {label}: description is required")
        if not is_object_schema(tool.input_schema):
            errors.append(f"Tool {label}: input schema must be an object schema")

        if key in seen_tools:
            errors.append(f"Duplicate tool name: '{tool.name}' conflicts with '{seen_tools[key]}'")
        elif key:
            seen_tools[key] = tool.name

    seen_integrations: Dict[str, str] = {}
    for integration in config.integrations:
        key = identity_key(integration.id)
        if not key:
            errors.append(f"Integration '{integration.id}': id has no letters or digits")
        elif key in seen_integrations:
            errors.append(
                f"Duplicate integration: '{integration.id}' conflicts with '{seen_integrations[key]}'"
            )
        else:
            seen_integrations[key] = integration.id

    duplicates = sorted({d for d in config.dependencies if config.dependencies.count(d) > 1})
    for dependency in duplicates:
        errors.append(f"Duplicate dependency: {dependency}")

    for dependency in dependency_closure(config.tools, config.integrations):
        if dependency not in config.dependencies:
            errors.append(f"Missing dependency: {dependency}")

    for key in config.environment_variables:
        if not _ENV_KEY.match(key):
            errors.append(f"Environment variable '{key}' must be upper snake case")

    return errors


def ensure_valid(config: ProjectConfiguration) -> ProjectConfiguration:
    """Return ``config`` unchanged, or raise ValidationError listing every violation."""
    errors = validate_configuration(config)
    if errors:
        raise ValidationError(errors, details={"name": config.name})
    return config
