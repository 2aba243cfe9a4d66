"""
Shared constants for requirement resolution and server rendering.
"""

# Generation cost bounds
MAX_TOOL_PATTERNS = 5
MAX_INTEGRATIONS = 3

# Every generated server depends on the MCP SDK and pydantic for input validation
CORE_DEPENDENCIES = ("mcp", "pydantic")

SERVER_NAME_SUFFIX = "mcp-server"
DEFAULT_SERVER_VERSION = "1.0.0"
DEFAULT_LANGUAGE = "python"
DEFAULT_SERVER_DESCRIPTION = "Generated MCP server"

FALLBACK_SUMMARY_LENGTH = 100

# Standard contract every generated tool follows, shared with the synthesis agent
STANDARD_TOOL_DEFINITION = """## Generated Tool Standard

A Tool is an async Python function exposed over MCP that does one focused task,
with a JSON-Schema input declaration.

**Requirements:**

1. **Single Purpose**: One capability per tool. Separate jobs become separate tools.

2. **Validated Input**: The generated module validates its arguments against the
   declared input schema (through a pydantic model) before the implementation
   body runs. The implementation body receives the validated model as `args`.

3. **Error Handling**: The implementation body may raise. The generated module
   catches every exception and converts it into the standard return format.

4. **Return Format**: The implementation body returns the `result` payload only.
   The generated module wraps it as:
   - `"success"`: bool indicating if the operation succeeded
   - `"error"`: str or None containing error message if success is False
   - `"result"`: The actual result data (None if error)

**Implementation Body Rules:**
- Written as the body of `async def _execute(args, context)`, without the `def` line
- `args` is the validated pydantic model; read fields as attributes (e.g. `args.url`)
- Attribute names are the snake_case form of each property: `apiKey` is read as
  `args.api_key`. Names that are Python keywords or pydantic model attributes get a
  trailing underscore: `class` is `args.class_`, `json` is `args.json_`
- `context` exposes configured integrations as attributes (may be None)
- Import third-party modules inside the body
- Never hardcode credentials; integrations read them from the environment
"""
