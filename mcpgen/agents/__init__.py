# Analysis and tool synthesis capabilities

from .base import Analyzer, ToolSynthesizer
from .analysis_agent import AnalysisAgent
from .keyword_analyzer import KeywordAnalyzer, KeywordRule, KEYWORD_RULES
from .synthesis_agent import ToolSynthesisAgent
from .pattern_synthesizer import PatternSynthesizer

__all__ = [
    "Analyzer",
    "ToolSynthesizer",
    "AnalysisAgent",
    "KeywordAnalyzer",
    "KeywordRule",
    "KEYWORD_RULES",
    "ToolSynthesisAgent",
    "PatternSynthesizer",
]
