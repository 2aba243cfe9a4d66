"""Abstract capabilities consumed by the requirement resolver."""

from abc import ABC, abstractmethod

from mcpgen.models.analysis import AnalysisResult, GeneratedToolDetail
from mcpgen.models.catalog import ToolPattern


class Analyzer(ABC):
    """Turns a free-text server description into an AnalysisResult."""

    @abstractmethod
    async def analyze(self, description: str) -> AnalysisResult:
        """
        Analyze a free-text description.

        Args:
            description: What the user wants the generated server to do

        Returns:
            AnalysisResult with categories, actions and suggested integrations

        Raises:
            AnalysisError: The capability is unavailable or its output is unusable
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Analyzer name for logging."""
        pass


class ToolSynthesizer(ABC):
    """Refines one selected tool pattern into concrete tool detail."""

    @abstractmethod
    async def synthesize(self, analysis: AnalysisResult, pattern: ToolPattern) -> GeneratedToolDetail:
        """
        Synthesize a tool for ``pattern`` that serves ``analysis``.

        Raises:
            AnalysisError: Synthesis failed; the resolver skips the pattern
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Synthesizer name for logging."""
        pass
