"""MCP server generator: free-text requirements to a runnable MCP server project."""

__version__ = "1.0.0"
