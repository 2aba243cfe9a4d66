"""
Keyword matching against the catalog.

Matching is a case-insensitive substring test in both directions: a catalog term
matches when it contains the keyword or the keyword contains it. This favours
recall; the resolver deduplicates and caps what comes back. Results always follow
catalog order.
"""

from typing import Iterable, List, Optional, Sequence

from mcpgen.models.catalog import IntegrationDefinition, ToolPattern
from .integrations import INTEGRATIONS
from .patterns import TOOL_PATTERNS


def _normalize(keywords: Iterable[str]) -> List[str]:
    normalized = []
    for keyword in keywords:
        keyword = (keyword or "").strip().lower()
        if keyword and keyword not in normalized:
            normalized.append(keyword)
    return normalized


def _matches_any(term: str, keywords: Sequence[str]) -> bool:
    term = term.lower()
    return any(keyword in term or term in keyword for keyword in keywords)


def pattern_matches(pattern: ToolPattern, keywords: Sequence[str]) -> bool:
    """Check a single pattern against already-normalized keywords."""
    if any(_matches_any(action, keywords) for action in pattern.actions):
        return True
    if any(_matches_any(example, keywords) for example in pattern.examples):
        return True
    return _matches_any(pattern.category.value, keywords)


def find_patterns(
    keywords: Iterable[str],
    actions: Iterable[str] = (),
    catalog: Optional[Sequence[ToolPattern]] = None
) -> List[ToolPattern]:
    """
    Find tool patterns that match the given keywords and actions.

    Args:
        keywords: Free keywords (categories, nouns, phrases)
        actions: Action verbs (get, send, query, ...)
        catalog: Pattern table to search, defaults to the built-in catalog

    Returns:
        List[ToolPattern]: Matching patterns in catalog order
    """
    terms = _normalize([*keywords, *actions])
    if not terms:
        return []
    patterns = TOOL_PATTERNS if catalog is None else catalog
    return [pattern for pattern in patterns if pattern_matches(pattern, terms)]


def find_integrations(
    keywords: Iterable[str],
    catalog: Optional[Sequence[IntegrationDefinition]] = None
) -> List[IntegrationDefinition]:
    """
    Find integrations whose id, name, display name or description match a keyword.

    Args:
        keywords: Service names or other keywords
        catalog: Integration table to search, defaults to the built-in catalog

    Returns:
        List[IntegrationDefinition]: Matching integrations in catalog order
    """
    terms = _normalize(keywords)
    if not terms:
        return []
    integrations = INTEGRATIONS if catalog is None else catalog
    return [
        integration for integration in integrations
        if any(
            _matches_any(field, terms)
            for field in (
                integration.id,
                integration.name,
                integration.display_name,
                integration.description,
            )
        )
    ]
