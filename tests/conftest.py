"""
Pytest fixtures and configuration for unit tests.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from mcpgen.agents.base import Analyzer, ToolSynthesizer
from mcpgen.config import Settings
from mcpgen.models.analysis import (
    AnalysisResult,
    Complexity,
    GeneratedToolDetail,
    IntegrationSuggestion,
)
from mcpgen.models.catalog import ToolCategory
from mcpgen.renderer import TemplateRenderer
from mcpgen.services.generation_service import GenerationService
from mcpgen.services.project_builder import ProjectBuilder
from mcpgen.services.resolver import RequirementResolver


@pytest.fixture
def settings(tmp_path):
    """Settings without an API key, writing under a temporary directory."""
    return Settings(
        openai_api_key="",
        environment="test",
        analysis_timeout=1.0,
        synthesis_timeout=1.0,
        output_root=str(tmp_path / "generated"),
        logs_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def keyword_resolver(settings):
    """Resolver with no remote capabilities: keyword analysis and pattern synthesis only."""
    return RequirementResolver(settings=settings)


@pytest.fixture
def sample_analysis():
    """A successful remote analysis."""
    return AnalysisResult(
        summary="GitHub issue tracker that notifies Slack",
        tool_categories=[ToolCategory.API, ToolCategory.NOTIFICATION],
        primary_actions=["send"],
        services=["GitHub", "Slack"],
        integrations=[
            IntegrationSuggestion(service="github", reason="Issues", confidence=0.9),
            IntegrationSuggestion(service="slack", reason="Notifications", confidence=0.8),
        ],
        key_features=["issue lookup", "slack alerts"],
        complexity=Complexity.MODERATE,
        suggested_description="Track GitHub issues and notify Slack",
        fallback=False,
    )


@pytest.fixture
def mock_analyzer(sample_analysis):
    """Remote analyzer returning ``sample_analysis``."""
    analyzer = MagicMock(spec=Analyzer)
    analyzer.name = "mock-analyzer"
    analyzer.analyze = AsyncMock(return_value=sample_analysis)
    return analyzer


@pytest.fixture
def mock_synthesizer():
    """Remote synthesizer naming each tool after its pattern with a custom body."""
    synthesizer = MagicMock(spec=ToolSynthesizer)
    synthesizer.name = "mock-synthesizer"

    async def synthesize(analysis, pattern):
        return GeneratedToolDetail(
            name=f"custom-{pattern.id}",
            description=f"Custom {pattern.name}",
            input_schema={
                "type": "object",
                "properties": {"target": {"type": "string", "description": "Target"}},
                "required": ["target"],
            },
            implementation='return {"target": args.target, "tool": "$tool_name"}',
        )

    synthesizer.synthesize = AsyncMock(side_effect=synthesize)
    return synthesizer


@pytest.fixture
def renderer():
    return TemplateRenderer()


@pytest.fixture
def builder(renderer):
    return ProjectBuilder(renderer=renderer)


@pytest.fixture
def basic_config(builder):
    """Configuration with one hand-built tool and no integrations."""
    config = builder.create_basic_config("Weather Server", "Weather lookups")
    tool = builder.create_tool(
        "Get Weather",
        "Get the current weather for a city",
        {"city": {"type": "string", "description": "City name"}},
        implementation='return {"city": args.city, "source": "$tool_name"}',
    )
    return builder.add_tool(config, tool)


@pytest.fixture
def generation_service(keyword_resolver, renderer, builder, settings):
    return GenerationService(
        resolver=keyword_resolver,
        renderer=renderer,
        builder=builder,
        settings=settings,
    )
