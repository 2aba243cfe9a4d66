"""
Local tool synthesizer that instantiates a catalog pattern as-is.
"""

import logging

from mcpgen.models.analysis import AnalysisResult, GeneratedToolDetail
from mcpgen.models.catalog import ToolPattern
from .base import ToolSynthesizer

logger = logging.getLogger(__name__)


class PatternSynthesizer(ToolSynthesizer):
    """Deterministic synthesizer used when no remote model is available."""

    @property
    def name(self) -> str:
        return "pattern"

    async def synthesize(self, analysis: AnalysisResult, pattern: ToolPattern) -> GeneratedToolDetail:
        logger.debug(f"Instantiating pattern {pattern.id} without refinement")
        return GeneratedToolDetail(
            name=pattern.id,
            description=pattern.description,
            input_schema=dict(pattern.input_schema),
            output_schema=dict(pattern.output_schema),
            implementation=pattern.template
        )
