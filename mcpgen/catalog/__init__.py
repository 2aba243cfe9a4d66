# Static catalog of tool patterns and integration definitions

from .patterns import (
    TOOL_PATTERNS,
    all_patterns,
    get_pattern,
    get_patterns_by_category,
    get_tool_categories,
)
from .integrations import (
    INTEGRATIONS,
    all_integrations,
    get_integration,
    get_integrations_by_auth_type,
)
from .matcher import find_patterns, find_integrations

__all__ = [
    "TOOL_PATTERNS",
    "all_patterns",
    "get_pattern",
    "get_patterns_by_category",
    "get_tool_categories",
    "INTEGRATIONS",
    "all_integrations",
    "get_integration",
    "get_integrations_by_auth_type",
    "find_patterns",
    "find_integrations",
]
