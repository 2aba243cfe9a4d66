"""
Deterministic keyword analyzer used when the AI analysis is unavailable.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from mcpgen.constants import FALLBACK_SUMMARY_LENGTH
from mcpgen.models.analysis import (
    AnalysisResult,
    Complexity,
    IntegrationSuggestion,
    RequirementRecord,
)
from mcpgen.models.catalog import ToolCategory
from .base import Analyzer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeywordRule:
    """Substrings that, when present, imply a category and optionally a service."""
    triggers: Tuple[str, ...]
    category: ToolCategory
    integration_id: Optional[str] = None
    service: Optional[str] = None


KEYWORD_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(("github",), ToolCategory.API, integration_id="github", service="GitHub"),
    KeywordRule(("slack",), ToolCategory.NOTIFICATION, integration_id="slack", service="Slack"),
    KeywordRule(("database", "sql"), ToolCategory.DATABASE, integration_id="postgresql"),
    KeywordRule(("file", "upload"), ToolCategory.FILE),
    KeywordRule(("email",), ToolCategory.NOTIFICATION, integration_id="sendgrid"),
)

DEFAULT_CATEGORY = ToolCategory.API


class KeywordAnalyzer(Analyzer):
    """Maps description substrings to categories and integrations with a fixed table."""

    def __init__(self, rules: Tuple[KeywordRule, ...] = KEYWORD_RULES):
        self.rules = rules

    @property
    def name(self) -> str:
        return "keyword"

    async def analyze(self, description: str) -> AnalysisResult:
        return self.analyze_sync(description)

    def analyze_sync(self, description: str) -> AnalysisResult:
        """Run the keyword table; never raises."""
        lowered = description.lower()
        categories: List[ToolCategory] = []
        services: List[str] = []
        suggestions: List[IntegrationSuggestion] = []
        requirements: List[RequirementRecord] = []

        for rule in self.rules:
            trigger = next((t for t in rule.triggers if t in lowered), None)
            if trigger is None:
                continue

            if rule.category not in categories:
                categories.append(rule.category)
            if rule.service and rule.service not in services:
                services.append(rule.service)
            if rule.integration_id and rule.integration_id not in [s.service for s in suggestions]:
                suggestions.append(IntegrationSuggestion(
                    service=rule.integration_id,
                    reason=f"Description mentions '{trigger}'",
                    confidence=0.5
                ))
            requirements.append(RequirementRecord(
                action_type=rule.category.value,
                description=f"{rule.category.value} capability inferred from '{trigger}'",
                priority=min(len(requirements) + 1, 5)
            ))

        if not categories:
            categories.append(DEFAULT_CATEGORY)
            requirements.append(RequirementRecord(
                action_type=DEFAULT_CATEGORY.value,
                description="No keyword matched; defaulting to API tools",
                priority=1
            ))

        summary = description[:FALLBACK_SUMMARY_LENGTH]
        if len(description) > FALLBACK_SUMMARY_LENGTH:
            summary += "..."

        logger.info(
            f"Keyword analysis: categories={[c.value for c in categories]}, "
            f"integrations={[s.service for s in suggestions]}"
        )

        return AnalysisResult(
            summary=summary,
            requirements=requirements,
            integrations=suggestions,
            tool_categories=categories,
            primary_actions=[],
            services=services,
            key_features=[],
            complexity=Complexity.SIMPLE,
            suggested_name="",
            suggested_description=description,
            fallback=True
        )
