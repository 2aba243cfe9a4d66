"""
File templates of the generated server project.

Placeholders use ``$name`` syntax and are filled by the renderer; every value is
derived from the project configuration through the naming helpers.
"""

from string import Template

PACKAGE_INIT = Template('''\
"""
$description
"""

__version__ = "$version"
''')

TOOLS_INIT = Template('''\
"""Tools exposed by the $distribution server."""
$imports
__all__ = [$exports]
''')

INTEGRATIONS_INIT = Template('''\
"""Service integrations used by the $distribution tools."""
$imports
__all__ = [$exports]
''')

SERVER = Template('''\
"""
$description

MCP entry point: lists every tool and dispatches calls by tool name.
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from . import integrations, tools
from .types import IntegrationContext

logger = logging.getLogger("$distribution")

server = Server("$distribution")

# tool name -> (handler, description, input schema)
TOOLS = $registry

_context: Optional[IntegrationContext] = None


def create_context() -> IntegrationContext:
    """Construct every configured integration; fails fast on missing environment variables."""
    return IntegrationContext($context_arguments)


@server.list_tools()
async def list_tools() -> List[types.Tool]:
    return [
        types.Tool(name=name, description=description, inputSchema=schema)
        for name, (_, description, schema) in TOOLS.items()
    ]


@server.call_tool()
async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
    if name not in TOOLS:
        raise ValueError(f"Unknown tool: {name}")
    handler = TOOLS[name][0]
    result = await handler(arguments or {}, _context)
    return [types.TextContent(type="text", text=json.dumps(result, default=str))]


async def run() -> None:
    global _context
    _context = create_context()
    logger.info("Starting $distribution with %d tools", len(TOOLS))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    asyncio.run(run())


if __name__ == "__main__":
    main()
''')

MANIFEST = Template('''\
[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "$distribution"
version = "$version"
description = $toml_description
readme = "README.md"
requires-python = ">=3.10"
dependencies = [
$dependencies
]

[project.scripts]
$distribution = "$package.server:main"

[tool.hatch.build.targets.wheel]
packages = ["src/$package"]
''')

TOOL_MODULE = Template('''\
"""
$docstring
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..types import $args_class, IntegrationContext, ToolResult

logger = logging.getLogger(__name__)

TOOL_NAME = "$tool_name"

$schema_constant = $schema


async def _execute(args: $args_class, context: Optional[IntegrationContext]) -> Any:
$body


async def $function_name(
    arguments: Dict[str, Any],
    context: Optional[IntegrationContext] = None
) -> ToolResult:
    """Validate ``arguments`` and run the $tool_name tool. Never raises."""
    try:
        args = $args_class.model_validate(arguments)
    except ValidationError as e:
        return {"success": False, "error": f"Invalid arguments: {e}", "result": None}

    try:
        result = await _execute(args, context)
    except Exception as e:
        logger.exception("$tool_name failed")
        return {"success": False, "error": str(e), "result": None}

    return {"success": True, "error": None, "result": result}
''')

STUB_BODY = Template('''\
raise NotImplementedError("$tool_name is not implemented yet")
''')

INTEGRATION_MODULE = Template('''\
"""
$docstring
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)

REQUIRED_ENVIRONMENT = $required


class $class_name:
    """Configuration for the $integration_id integration, read from the environment."""

    def __init__(self) -> None:
        missing = [name for name in REQUIRED_ENVIRONMENT if not os.environ.get(name)]
        if missing:
            raise RuntimeError(
                f"$display_name requires environment variables: {', '.join(missing)}"
            )
$fields
        logger.info("$display_name integration configured")
''')

TYPES_MODULE = Template('''\
"""
Type declarations shared by the $distribution tools and integrations.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
$type_checking_imports


class ToolResult(TypedDict):
    """Standard return value of every tool."""
    success: bool
    error: Optional[str]
    result: Any


@dataclass
class IntegrationContext:
    """Configured integrations handed to every tool call."""
$context_fields
$models''')

ARGS_MODEL = Template('''\
class $class_name(BaseModel):
    """Arguments of the $tool_name tool."""

    model_config = ConfigDict(populate_by_name=True)
$fields''')

README = Template('''\
# $name

$description

## Installation

```bash
pip install -e .
cp .env.example .env
```

Fill in `.env` before starting the server.

## Running

```bash
$distribution
```

To register the server with an MCP client, run the `$distribution` command over stdio.

## Tools

$tools
## Integrations

$integrations
## Dependencies

$dependencies
''')
