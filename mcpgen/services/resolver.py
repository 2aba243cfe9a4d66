"""
Requirement resolver: free text -> analysis -> catalog selection -> project configuration.
"""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from mcpgen.agents.analysis_agent import AnalysisAgent
from mcpgen.agents.base import Analyzer, ToolSynthesizer
from mcpgen.agents.keyword_analyzer import KeywordAnalyzer
from mcpgen.agents.pattern_synthesizer import PatternSynthesizer
from mcpgen.agents.synthesis_agent import ToolSynthesisAgent
from mcpgen.catalog import (
    TOOL_PATTERNS,
    find_integrations,
    find_patterns,
    get_integration,
    get_patterns_by_category,
)
from mcpgen.config import Settings, get_settings
from mcpgen.constants import (
    DEFAULT_SERVER_DESCRIPTION,
    MAX_INTEGRATIONS,
    MAX_TOOL_PATTERNS,
    SERVER_NAME_SUFFIX,
)
from mcpgen.errors import AnalysisError
from mcpgen.models.analysis import AnalysisResult, GeneratedToolDetail
from mcpgen.models.catalog import IntegrationDefinition, ToolPattern
from mcpgen.models.project import GeneratedTool, ProjectConfiguration
from mcpgen.utils.naming import environment_key, identity_key, slugify_server_name
from mcpgen.utils.schema import is_object_schema, parameters_from_schema, schema_properties
from .validation import dependency_closure, ensure_valid

logger = logging.getLogger(__name__)


def select_patterns(analysis: AnalysisResult, limit: int = MAX_TOOL_PATTERNS) -> List[ToolPattern]:
    """
    Select tool patterns for an analysis.

    Category lookups come first, then action matches; the first occurrence of a
    pattern id wins and anything beyond ``limit`` is dropped. When nothing
    matches, the first catalog pattern is used.
    """
    candidates: List[ToolPattern] = []
    for category in analysis.tool_categories:
        candidates.extend(get_patterns_by_category(category))
    candidates.extend(find_patterns([], analysis.primary_actions))

    selected: List[ToolPattern] = []
    seen = set()
    for pattern in candidates:
        if pattern.id in seen:
            continue
        seen.add(pattern.id)
        selected.append(pattern)

    if not selected:
        selected.append(TOOL_PATTERNS[0])

    if len(selected) > limit:
        logger.info(f"Dropping {len(selected) - limit} patterns beyond the cap of {limit}")
    return selected[:limit]


def select_integrations(
    analysis: AnalysisResult,
    limit: int = MAX_INTEGRATIONS
) -> List[IntegrationDefinition]:
    """Exact lookups for suggested ids followed by keyword matches over services, capped."""
    candidates: List[IntegrationDefinition] = []
    for integration_id in analysis.suggested_integration_ids():
        integration = get_integration(integration_id)
        if integration is None:
            logger.debug(f"Suggested integration '{integration_id}' is not in the catalog")
            continue
        candidates.append(integration)
    candidates.extend(find_integrations(analysis.services))

    selected: List[IntegrationDefinition] = []
    seen = set()
    for integration in candidates:
        key = identity_key(integration.id)
        if key in seen:
            continue
        seen.add(key)
        selected.append(integration)

    if len(selected) > limit:
        logger.info(f"Dropping {len(selected) - limit} integrations beyond the cap of {limit}")
    return selected[:limit]


def compute_environment_variables(integrations: Sequence[IntegrationDefinition]) -> Dict[str, str]:
    """One entry per configuration-schema property of every integration."""
    variables: Dict[str, str] = {}
    for integration in integrations:
        for property_name, spec in schema_properties(integration.config_schema).items():
            key = environment_key(integration.id, property_name)
            variables[key] = spec.get("description") or f"{integration.display_name} {property_name}"
    return variables


def server_name(analysis: AnalysisResult) -> str:
    return slugify_server_name(analysis.summary, SERVER_NAME_SUFFIX)


def build_tool(pattern: ToolPattern, detail: GeneratedToolDetail) -> GeneratedTool:
    """
    Combine a catalog pattern with synthesized detail.

    An empty implementation falls back to the pattern template together with
    the pattern schema, so the body and its arguments always agree.
    """
    if detail.implementation.strip():
        implementation = detail.implementation
        input_schema = detail.input_schema if is_object_schema(detail.input_schema) else pattern.input_schema
    else:
        implementation = pattern.template
        input_schema = pattern.input_schema

    name = detail.name.strip()
    if not identity_key(name):
        name = pattern.id

    return GeneratedTool(
        name=name,
        description=detail.description.strip() or pattern.description,
        category=pattern.category,
        origin_pattern_id=pattern.id,
        parameters=parameters_from_schema(input_schema),
        input_schema=dict(input_schema),
        output_schema=dict(detail.output_schema or pattern.output_schema),
        implementation=implementation,
        dependencies=list(pattern.dependencies)
    )


class RequirementResolver:
    """
    Resolves a free-text description into a validated ProjectConfiguration.

    The remote analyzer and synthesizer are optional; without them, or whenever
    the analysis falls back to keywords, tools are instantiated from the catalog
    patterns directly.
    """

    def __init__(
        self,
        analyzer: Optional[Analyzer] = None,
        synthesizer: Optional[ToolSynthesizer] = None,
        fallback_analyzer: Optional[Analyzer] = None,
        settings: Optional[Settings] = None
    ):
        self.settings = settings or get_settings()
        if analyzer is None and self.settings.remote_analysis_enabled:
            analyzer = AnalysisAgent(self.settings)
        if synthesizer is None and self.settings.remote_analysis_enabled:
            synthesizer = ToolSynthesisAgent(self.settings)

        self.analyzer = analyzer
        self.synthesizer = synthesizer
        self.fallback_analyzer = fallback_analyzer or KeywordAnalyzer()
        self.local_synthesizer = PatternSynthesizer()

    async def resolve(self, description: str) -> ProjectConfiguration:
        """
        Resolve a description into a configuration.

        Args:
            description: What the generated server should do

        Returns:
            ProjectConfiguration: Validated configuration

        Raises:
            ValidationError: The assembled configuration violates an invariant
        """
        analysis = await self.analyze(description)

        patterns = select_patterns(analysis)
        integrations = select_integrations(analysis)
        logger.info(
            f"Selected patterns={[p.id for p in patterns]}, "
            f"integrations={[i.id for i in integrations]}"
        )

        tools = await self.synthesize_tools(analysis, patterns)

        server_description = (
            analysis.suggested_description.strip()
            or analysis.summary.strip()
            or DEFAULT_SERVER_DESCRIPTION
        )

        config = ProjectConfiguration(
            name=server_name(analysis),
            description=server_description,
            tools=tools,
            integrations=integrations,
            dependencies=dependency_closure(patterns, tools, integrations),
            environment_variables=compute_environment_variables(integrations),
            metadata={
                "summary": analysis.summary,
                "complexity": analysis.complexity.value,
                "fallback": analysis.fallback,
                "patterns": [pattern.id for pattern in patterns],
            }
        )

        logger.info(
            f"Resolved configuration '{config.name}' with {len(config.tools)} tools "
            f"and {len(config.integrations)} integrations"
        )
        return ensure_valid(config)

    async def analyze(self, description: str) -> AnalysisResult:
        """Run the analyzer under its deadline; any failure falls back to keyword rules."""
        if self.analyzer is None:
            logger.info("No remote analyzer configured, using keyword analysis")
            return await self.fallback_analyzer.analyze(description)

        try:
            return await asyncio.wait_for(
                self.analyzer.analyze(description),
                timeout=self.settings.analysis_timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"{self.analyzer.name} analysis timed out after "
                f"{self.settings.analysis_timeout}s, using keyword analysis"
            )
        except Exception as e:
            logger.warning(f"{self.analyzer.name} analysis failed ({e}), using keyword analysis")

        return await self.fallback_analyzer.analyze(description)

    def _synthesizer_for(self, analysis: AnalysisResult) -> ToolSynthesizer:
        if analysis.fallback or self.synthesizer is None:
            return self.local_synthesizer
        return self.synthesizer

    async def _synthesize_one(
        self,
        synthesizer: ToolSynthesizer,
        analysis: AnalysisResult,
        pattern: ToolPattern
    ) -> GeneratedToolDetail:
        try:
            return await asyncio.wait_for(
                synthesizer.synthesize(analysis, pattern),
                timeout=self.settings.synthesis_timeout
            )
        except asyncio.TimeoutError as e:
            raise AnalysisError(
                f"Synthesis for pattern {pattern.id} timed out after {self.settings.synthesis_timeout}s"
            ) from e

    async def synthesize_tools(
        self,
        analysis: AnalysisResult,
        patterns: Sequence[ToolPattern]
    ) -> List[GeneratedTool]:
        """
        Synthesize one tool per pattern concurrently.

        Results keep selection order. A failed synthesis skips its pattern and a
        tool whose name collides with an earlier one is dropped.
        """
        synthesizer = self._synthesizer_for(analysis)
        logger.info(f"Synthesizing {len(patterns)} tools with {synthesizer.name}")

        results = await asyncio.gather(
            *(self._synthesize_one(synthesizer, analysis, pattern) for pattern in patterns),
            return_exceptions=True
        )

        tools: List[GeneratedTool] = []
        seen = set()
        for pattern, result in zip(patterns, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(f"Skipping pattern {pattern.id}: {result}")
                continue

            tool = build_tool(pattern, result)
            key = identity_key(tool.name)
            if key in seen:
                logger.warning(f"Skipping pattern {pattern.id}: tool name '{tool.name}' already used")
                continue
            seen.add(key)
            tools.append(tool)

        return tools
