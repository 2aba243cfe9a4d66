"""
Requirement Analysis Agent using OpenAI Agents SDK.

This agent reads a free-text description of the MCP server a user wants and
returns a structured AnalysisResult for the resolver.
"""

import logging
from typing import Optional

import agents
from agents import Agent, AgentOutputSchema, Runner

from mcpgen.config import Settings, get_settings
from mcpgen.errors import AnalysisError
from mcpgen.models.analysis import AnalysisResult
from mcpgen.models.catalog import ToolCategory
from .base import Analyzer

logger = logging.getLogger(__name__)


class AnalysisAgent(Analyzer):
    """
    Agent for analyzing server descriptions.

    Responsibilities:
    1. Summarize what the user wants to build
    2. Identify primary actions and tool categories
    3. Identify third-party services and suggest catalog integrations
    4. Classify complexity
    """

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the analysis agent."""
        self.settings = settings or get_settings()
        self._agent = None

    @property
    def name(self) -> str:
        return "openai-agent"

    def _ensure_agent(self):
        """Lazy initialization of the agent."""
        if self._agent is None:
            self._initialize_agent()

    def _initialize_agent(self):
        """Initialize the agent with OpenAI Agents SDK."""
        try:
            self._agent = Agent(
                name="Requirement Analysis Agent",
                instructions=self._get_agent_instructions(),
                output_type=AgentOutputSchema(AnalysisResult, strict_json_schema=False),
                model=self.settings.openai_model,
                tools=[]  # Pure reasoning - no tools needed
            )
            agents.set_default_openai_key(self.settings.openai_api_key)

            logger.info("Initialized requirement analysis agent")

        except Exception as e:
            logger.error(f"Failed to initialize requirement analysis agent: {e}")
            raise

    async def analyze(self, description: str) -> AnalysisResult:
        """
        Analyze a server description.

        Args:
            description: Natural language description of the server

        Returns:
            AnalysisResult: Structured analysis

        Raises:
            AnalysisError: No API key configured, the run failed, or the output is unusable
        """
        if not self.settings.openai_api_key:
            raise AnalysisError("OPENAI_API_KEY is not configured")

        try:
            self._ensure_agent()
            logger.info(f"Analyzing description: {description[:100]}...")

            result = await Runner.run(
                starting_agent=self._agent,
                input=self._build_analysis_message(description)
            )
            analysis = result.final_output_as(AnalysisResult)

        except Exception as e:
            logger.error(f"Error in requirement analysis agent: {e}")
            raise AnalysisError(f"Requirement analysis failed: {e}") from e

        if not isinstance(analysis, AnalysisResult) or not analysis.summary.strip():
            raise AnalysisError("Requirement analysis returned no usable summary")

        logger.info(
            f"Analysis completed: complexity={analysis.complexity.value}, "
            f"categories={[c.value for c in analysis.tool_categories]}"
        )
        return analysis.model_copy(update={"fallback": False})

    def _build_analysis_message(self, description: str) -> str:
        """Build message for the agent with the user's description."""
        return f"""Analyze the following description of an MCP server:

<description>
{description}
</description>

Return an AnalysisResult following your instructions.
"""

    def _get_agent_instructions(self) -> str:
        """Get system instructions for the analysis agent."""
        categories = ", ".join(f"`{c.value}`" for c in ToolCategory)
        return f"""
You are a technical requirements analyst for an MCP (Model Context Protocol) server generator.

## Your Mission:

- You are given a description of tools a user wants exposed by an MCP server
- Work out which actions they want to perform and which services they need
- Produce an `AnalysisResult` the generator can map onto its catalog

## Output Format:

- `summary`: One sentence describing what the user wants to build. Start with the subject, e.g. "GitHub issue notifier that posts to Slack"
- `requirements`: One record per capability with `action_type` (verb), `description` and `priority` (1 = most important, up to 5)
- `tool_categories`: Any of {categories}
- `primary_actions`: Verbs such as get, post, send, query, read, write, transform, verify
- `services`: Third-party services mentioned by name (GitHub, Slack, PostgreSQL, ...)
- `integrations`: Suggested catalog integrations with `service` set to one of
  `github`, `slack`, `postgresql`, `sendgrid`, `aws-s3`, `discord`, `twilio`, `openai`,
  a short `reason` and a `confidence` between 0 and 1
- `key_features`: Notable features in a few words each
- `complexity`: `simple`, `moderate` or `complex`
- `suggested_name` / `suggested_description`: Optional name and description for the server

## Guidelines:

- Only suggest integrations that the description actually needs
- Prefer fewer, focused capabilities over many overlapping ones
- If the description is vague, make reasonable assumptions and default to API tools
"""

    async def cleanup(self):
        """Clean up agent resources if needed."""
        logger.info("Requirement analysis agent cleanup completed")
