"""
Unit tests for RequirementResolver and its selection helpers.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from mcpgen.agents.base import Analyzer, ToolSynthesizer
from mcpgen.catalog import TOOL_PATTERNS, get_pattern
from mcpgen.constants import CORE_DEPENDENCIES, MAX_INTEGRATIONS, MAX_TOOL_PATTERNS
from mcpgen.errors import AnalysisError
from mcpgen.models.analysis import (
    AnalysisResult,
    Complexity,
    GeneratedToolDetail,
    IntegrationSuggestion,
)
from mcpgen.models.catalog import ToolCategory
from mcpgen.services.resolver import (
    RequirementResolver,
    compute_environment_variables,
    select_integrations,
    select_patterns,
)
from mcpgen.services.validation import dependency_closure, validate_configuration
from mcpgen.utils.naming import identity_key


SCENARIO_A = "send Slack notifications when a GitHub issue is created"


def _analyzer_returning(analysis):
    analyzer = MagicMock(spec=Analyzer)
    analyzer.name = "stub-analyzer"
    analyzer.analyze = AsyncMock(return_value=analysis)
    return analyzer


def _failing_analyzer(error):
    analyzer = MagicMock(spec=Analyzer)
    analyzer.name = "failing-analyzer"
    analyzer.analyze = AsyncMock(side_effect=error)
    return analyzer


def _synthesizer(side_effect):
    synthesizer = MagicMock(spec=ToolSynthesizer)
    synthesizer.name = "stub-synthesizer"
    synthesizer.synthesize = AsyncMock(side_effect=side_effect)
    return synthesizer


@pytest.mark.asyncio
async def test_scenario_a_offline_resolution(keyword_resolver):
    """Without a remote analyzer the keyword table still yields tools and integrations."""
    # When
    config = await keyword_resolver.resolve(SCENARIO_A)

    # Then
    assert config.integration_ids() == ["github", "slack"]
    assert any(tool.category == ToolCategory.NOTIFICATION for tool in config.tools)
    assert {tool.category for tool in config.tools} == {ToolCategory.API, ToolCategory.NOTIFICATION}
    assert config.name == "send-slack-notifications-mcp-server"
    assert config.metadata["fallback"] is True
    assert config.metadata["complexity"] == Complexity.SIMPLE.value
    assert validate_configuration(config) == []


@pytest.mark.asyncio
async def test_scenario_a_when_analyzer_fails(settings, mock_synthesizer):
    # Given
    resolver = RequirementResolver(
        analyzer=_failing_analyzer(AnalysisError("service unavailable")),
        synthesizer=mock_synthesizer,
        settings=settings,
    )

    # When
    config = await resolver.resolve(SCENARIO_A)

    # Then
    assert len(config.integrations) >= 2
    assert any(tool.category == ToolCategory.NOTIFICATION for tool in config.tools)
    assert config.metadata["fallback"] is True
    # Fallback analyses are synthesized locally from the catalog
    mock_synthesizer.synthesize.assert_not_called()
    assert "notification-sender" in config.tool_names()


@pytest.mark.asyncio
async def test_unexpected_analyzer_error_falls_back(settings):
    resolver = RequirementResolver(analyzer=_failing_analyzer(RuntimeError("boom")), settings=settings)

    config = await resolver.resolve("store uploaded file metadata in a database")

    assert config.metadata["fallback"] is True
    assert "postgresql" in config.integration_ids()


@pytest.mark.asyncio
async def test_analyzer_timeout_falls_back(settings):
    # Given
    async def slow_analyze(description):
        await asyncio.sleep(5)

    analyzer = MagicMock(spec=Analyzer)
    analyzer.name = "slow-analyzer"
    analyzer.analyze = slow_analyze
    resolver = RequirementResolver(
        analyzer=analyzer,
        settings=settings.model_copy(update={"analysis_timeout": 0.01}),
    )

    # When
    config = await resolver.resolve(SCENARIO_A)

    # Then
    assert config.metadata["fallback"] is True
    assert config.integration_ids() == ["github", "slack"]


@pytest.mark.asyncio
async def test_remote_analysis_and_synthesis(settings, mock_analyzer, mock_synthesizer):
    # Given
    resolver = RequirementResolver(analyzer=mock_analyzer, synthesizer=mock_synthesizer, settings=settings)

    # When
    config = await resolver.resolve("Track GitHub issues and ping Slack")

    # Then
    mock_analyzer.analyze.assert_awaited_once_with("Track GitHub issues and ping Slack")
    assert config.tool_names() == [
        "custom-api-request",
        "custom-webhook-sender",
        "custom-notification-sender",
    ]
    assert config.name == "github-issue-tracker-mcp-server"
    assert config.description == "Track GitHub issues and notify Slack"
    assert config.metadata["fallback"] is False
    tool = config.tools[0]
    assert tool.origin_pattern_id == "api-request"
    assert [p.name for p in tool.parameters] == ["target"]
    assert tool.dependencies == ["httpx"]


@pytest.mark.asyncio
async def test_synthesis_results_follow_selection_order(settings, mock_analyzer):
    # Given: earlier patterns finish last
    delays = {"api-request": 0.05, "webhook-sender": 0.02, "notification-sender": 0.0}

    async def synthesize(analysis, pattern):
        await asyncio.sleep(delays[pattern.id])
        return GeneratedToolDetail(name=f"{pattern.id}-tool", description=pattern.description)

    resolver = RequirementResolver(
        analyzer=mock_analyzer,
        synthesizer=_synthesizer(synthesize),
        settings=settings,
    )

    # When
    config = await resolver.resolve("anything")

    # Then
    assert config.tool_names() == ["api-request-tool", "webhook-sender-tool", "notification-sender-tool"]


@pytest.mark.asyncio
async def test_failed_synthesis_skips_pattern(settings, mock_analyzer):
    async def synthesize(analysis, pattern):
        if pattern.id == "webhook-sender":
            raise AnalysisError("model returned garbage")
        return GeneratedToolDetail(name=pattern.id, description=pattern.description)

    resolver = RequirementResolver(
        analyzer=mock_analyzer,
        synthesizer=_synthesizer(synthesize),
        settings=settings,
    )

    config = await resolver.resolve("anything")

    assert config.tool_names() == ["api-request", "notification-sender"]
    assert validate_configuration(config) == []


@pytest.mark.asyncio
async def test_synthesis_timeout_skips_pattern(settings, mock_analyzer):
    async def synthesize(analysis, pattern):
        if pattern.id == "api-request":
            await asyncio.sleep(5)
        return GeneratedToolDetail(name=pattern.id, description=pattern.description)

    resolver = RequirementResolver(
        analyzer=mock_analyzer,
        synthesizer=_synthesizer(synthesize),
        settings=settings.model_copy(update={"synthesis_timeout": 0.05}),
    )

    config = await resolver.resolve("anything")

    assert "api-request" not in config.tool_names()
    assert config.tool_names() == ["webhook-sender", "notification-sender"]


@pytest.mark.asyncio
async def test_colliding_tool_names_keep_first(settings, mock_analyzer):
    # Given: every pattern comes back with the same name in different casing
    names = iter(["Notify Team", "notify-team", "NOTIFY_TEAM"])

    async def synthesize(analysis, pattern):
        return GeneratedToolDetail(name=next(names), description=pattern.description)

    resolver = RequirementResolver(
        analyzer=mock_analyzer,
        synthesizer=_synthesizer(synthesize),
        settings=settings,
    )

    # When
    config = await resolver.resolve("anything")

    # Then
    assert config.tool_names() == ["Notify Team"]
    keys = [identity_key(name) for name in config.tool_names()]
    assert len(keys) == len(set(keys))


@pytest.mark.asyncio
async def test_names_differing_only_in_case_collide(settings, mock_analyzer):
    # Given: "GetWeather" and "getweather" would render the same server entry
    names = iter(["GetWeather", "getweather", "Weather Alerts"])

    async def synthesize(analysis, pattern):
        return GeneratedToolDetail(name=next(names), description=pattern.description)

    resolver = RequirementResolver(
        analyzer=mock_analyzer,
        synthesizer=_synthesizer(synthesize),
        settings=settings,
    )

    # When
    config = await resolver.resolve("anything")

    # Then
    assert config.tool_names() == ["GetWeather", "Weather Alerts"]
    assert validate_configuration(config) == []


@pytest.mark.asyncio
async def test_failed_synthesis_keeps_pattern_dependencies(settings):
    # Given: a processing analysis whose csv-processing synthesis fails
    analysis = AnalysisResult(
        summary="CSV report builder",
        tool_categories=[ToolCategory.PROCESSING],
        fallback=False,
    )

    async def synthesize(analysis, pattern):
        if pattern.id == "csv-processing":
            raise AnalysisError("model returned garbage")
        return GeneratedToolDetail(name=pattern.id, description=pattern.description)

    resolver = RequirementResolver(
        analyzer=_analyzer_returning(analysis),
        synthesizer=_synthesizer(synthesize),
        settings=settings,
    )

    # When
    config = await resolver.resolve("build csv reports")

    # Then
    assert config.metadata["patterns"] == ["data-processing", "csv-processing"]
    assert [tool.origin_pattern_id for tool in config.tools] == ["data-processing"]
    assert "pandas" in config.dependencies
    assert validate_configuration(config) == []


@pytest.mark.asyncio
async def test_empty_implementation_uses_pattern_template(settings, mock_analyzer):
    async def synthesize(analysis, pattern):
        return GeneratedToolDetail(
            name=pattern.id,
            description="",
            input_schema={"type": "string"},
        )

    resolver = RequirementResolver(
        analyzer=mock_analyzer,
        synthesizer=_synthesizer(synthesize),
        settings=settings,
    )

    config = await resolver.resolve("anything")

    by_pattern = {pattern.id: pattern for pattern in TOOL_PATTERNS}
    for tool in config.tools:
        pattern = by_pattern[tool.origin_pattern_id]
        assert tool.implementation == pattern.template
        assert tool.input_schema == pattern.input_schema
        assert tool.description == pattern.description


@pytest.mark.asyncio
async def test_scenario_b_caps(settings):
    # Given: every category and five suggested integrations
    analysis = AnalysisResult(
        summary="Everything server",
        tool_categories=list(ToolCategory),
        integrations=[
            IntegrationSuggestion(service=service_id)
            for service_id in ("github", "slack", "postgresql", "sendgrid", "aws-s3")
        ],
        fallback=True,
    )
    assert len(select_patterns(analysis, limit=len(TOOL_PATTERNS))) > MAX_TOOL_PATTERNS
    resolver = RequirementResolver(analyzer=_analyzer_returning(analysis), settings=settings)

    # When
    config = await resolver.resolve("everything")

    # Then
    assert len(config.tools) <= MAX_TOOL_PATTERNS
    assert len(config.integrations) <= MAX_INTEGRATIONS
    assert config.integration_ids() == ["github", "slack", "postgresql"]


@pytest.mark.asyncio
async def test_dependencies_are_exact_closure(keyword_resolver):
    config = await keyword_resolver.resolve("email a database report and upload the file")

    assert list(config.dependencies[:2]) == list(CORE_DEPENDENCIES)
    patterns = [get_pattern(pattern_id) for pattern_id in config.metadata["patterns"]]
    assert config.dependencies == dependency_closure(patterns, config.tools, config.integrations)
    assert len(config.dependencies) == len(set(config.dependencies))
    for tool in config.tools:
        assert set(tool.dependencies) <= set(config.dependencies)
    for integration in config.integrations:
        assert set(integration.dependencies) <= set(config.dependencies)


@pytest.mark.asyncio
async def test_empty_description_still_resolves(keyword_resolver):
    config = await keyword_resolver.resolve("")

    assert config.name == "mcp-server"
    assert config.description == "Generated MCP server"
    assert config.tools
    assert validate_configuration(config) == []


def test_select_patterns_category_then_actions():
    analysis = AnalysisResult(
        summary="s",
        tool_categories=[ToolCategory.AUTH],
        primary_actions=["send", "verify"],
    )

    assert [p.id for p in select_patterns(analysis)] == ["auth-handler", "notification-sender"]


def test_select_patterns_defaults_to_first_catalog_pattern():
    analysis = AnalysisResult(summary="s")

    assert [p.id for p in select_patterns(analysis)] == [TOOL_PATTERNS[0].id]


def test_select_integrations_ignores_unknown_and_duplicates():
    analysis = AnalysisResult(
        summary="s",
        integrations=[IntegrationSuggestion(service="jira"), IntegrationSuggestion(service="slack")],
        services=["Slack", "Twilio"],
    )

    assert [i.id for i in select_integrations(analysis)] == ["slack", "twilio"]


def test_scenario_c_environment_keys():
    # Given
    from mcpgen.catalog import get_integration
    sendgrid = get_integration("sendgrid").model_copy(update={
        "config_schema": {
            "type": "object",
            "properties": {
                "apiKey": {"type": "string", "description": "SendGrid API key"},
                "fromEmail": {"type": "string"},
            },
        },
    })

    # When
    variables = compute_environment_variables([sendgrid])

    # Then
    assert list(variables) == ["SENDGRID_APIKEY", "SENDGRID_FROMEMAIL"]
    assert variables["SENDGRID_APIKEY"] == "SendGrid API key"
    assert variables["SENDGRID_FROMEMAIL"] == f"{sendgrid.display_name} fromEmail"
