"""
Tool Synthesis Agent using OpenAI Agents SDK.

Given the analysis of a request and one selected catalog pattern, this agent
designs the concrete tool: name, description, input schema and implementation body.
"""

import json
import logging
from typing import Optional

import agents
from agents import Agent, AgentOutputSchema, Runner

from mcpgen.config import Settings, get_settings
from mcpgen.constants import STANDARD_TOOL_DEFINITION
from mcpgen.errors import AnalysisError
from mcpgen.models.analysis import AnalysisResult, GeneratedToolDetail
from mcpgen.models.catalog import ToolPattern
from .base import ToolSynthesizer

logger = logging.getLogger(__name__)


class ToolSynthesisAgent(ToolSynthesizer):
    """Agent that specializes a catalog pattern for a user's requirements."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the synthesis agent."""
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
                name="Tool Synthesis Agent",
                instructions=self._get_agent_instructions(),
                output_type=AgentOutputSchema(GeneratedToolDetail, strict_json_schema=False),
                model=self.settings.openai_model,
                tools=[]
            )
            agents.set_default_openai_key(self.settings.openai_api_key)

            logger.info("Initialized tool synthesis agent")

        except Exception as e:
            logger.error(f"Failed to initialize tool synthesis agent: {e}")
            raise

    async def synthesize(self, analysis: AnalysisResult, pattern: ToolPattern) -> GeneratedToolDetail:
        """
        Synthesize a tool for one pattern.

        Args:
            analysis: Analysis of the user's request
            pattern: Selected catalog pattern

        Returns:
            GeneratedToolDetail: Tool detail; the implementation has literal '$' escaped

        Raises:
            AnalysisError: The run failed or returned an unusable tool
        """
        if not self.settings.openai_api_key:
            raise AnalysisError("OPENAI_API_KEY is not configured")

        try:
            self._ensure_agent()
            logger.info(f"Synthesizing tool for pattern {pattern.id}")

            result = await Runner.run(
                starting_agent=self._agent,
                input=self._build_synthesis_message(analysis, pattern)
            )
            detail = result.final_output_as(GeneratedToolDetail)

        except Exception as e:
            logger.error(f"Error synthesizing tool for pattern {pattern.id}: {e}")
            raise AnalysisError(f"Tool synthesis failed for pattern {pattern.id}: {e}") from e

        if not isinstance(detail, GeneratedToolDetail) or not detail.name.strip():
            raise AnalysisError(f"Tool synthesis for pattern {pattern.id} returned no tool name")

        logger.info(f"Synthesized tool '{detail.name}' from pattern {pattern.id}")

        # Bodies from the model are opaque data, never templates
        return detail.model_copy(update={"implementation": detail.implementation.replace("$", "$$")})

    def _build_synthesis_message(self, analysis: AnalysisResult, pattern: ToolPattern) -> str:
        """Build the pattern-scoped message for the agent."""
        key_features = ", ".join(analysis.key_features) or "none listed"
        return f"""Design one MCP tool based on this pattern and these requirements.

<pattern>
Name: {pattern.name} ({pattern.id})
Category: {pattern.category.value}
Actions: {", ".join(pattern.actions)}
Description: {pattern.description}
Input schema:
{json.dumps(pattern.input_schema, indent=2)}
Reference implementation body:
{pattern.template}
</pattern>

<requirements>
Summary: {analysis.summary}
Key features: {key_features}
</requirements>

Return a GeneratedToolDetail with:
1. `name`: short lowercase name with hyphens, e.g. "create-github-issue"
2. `description`: one sentence on what the tool does
3. `input_schema`: JSON-Schema object with `properties` and `required`
4. `output_schema`: JSON-Schema of the result payload
5. `implementation`: body of `async def _execute(args, context)`. Read each `input_schema`
   property as the snake_case attribute of `args` (`apiKey` is `args.api_key`,
   `class` is `args.class_`), never by its original spelling
"""

    def _get_agent_instructions(self) -> str:
        """Get system instructions for the synthesis agent."""
        return f"""
You are an expert Python developer specializing in MCP tools.

{STANDARD_TOOL_DEFINITION}

## Your Mission:

Specialize a catalog tool pattern for a user's requirements. Keep the pattern's
purpose, narrow its inputs to what the user needs and write a production-ready
implementation body.

## Guidelines:

- Only use the dependencies of the pattern plus the standard library
- Keep the input schema flat: string, number, integer, boolean, array and object properties
- Do not include the `def` line in `implementation`; it is placed inside the generated function
- A module-level `logger` is available in the generated module
"""

    async def cleanup(self):
        """Clean up agent resources if needed."""
        logger.info("Tool synthesis agent cleanup completed")
