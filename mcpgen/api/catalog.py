"""
Catalog API endpoints: read-only listings of tool patterns and integrations.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Query

from mcpgen.catalog import all_integrations, all_patterns, get_patterns_by_category
from mcpgen.models.catalog import ToolCategory
from mcpgen.models.requests import IntegrationListResponse, PatternListResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/patterns", response_model=PatternListResponse)
async def list_patterns(
    category: Optional[ToolCategory] = Query(default=None, description="Only patterns of this category")
) -> PatternListResponse:
    """
    List tool patterns in catalog order.

    Args:
        category: Optional category filter

    Returns:
        PatternListResponse: Patterns and their count
    """
    patterns = get_patterns_by_category(category) if category else list(all_patterns())
    return PatternListResponse(patterns=patterns, total=len(patterns))


@router.get("/integrations", response_model=IntegrationListResponse)
async def list_integrations() -> IntegrationListResponse:
    """List integration definitions in catalog order."""
    integrations = list(all_integrations())
    return IntegrationListResponse(integrations=integrations, total=len(integrations))
