"""
Error types raised by the requirement resolver and the template renderer.
"""

from typing import Any, List, Optional


class GenerationError(Exception):
    """Base error for server generation."""

    def __init__(self, message: str, code: str = "GENERATION_ERROR", details: Optional[Any] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class AnalysisError(GenerationError):
    """The analysis capability failed or returned an unusable structure."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, "AI_ANALYSIS_ERROR", details)


class ValidationError(GenerationError):
    """A project configuration violates one or more invariants.

    All violations are collected in ``errors`` so callers can report them at once.
    """

    def __init__(self, errors: List[str], details: Optional[Any] = None):
        message = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors)
        super().__init__(message, "VALIDATION_ERROR", details)
        self.errors = list(errors)


class TemplateError(GenerationError):
    """A render-time placeholder could not be resolved."""

    def __init__(self, message: str, template: Optional[str] = None, placeholder: Optional[str] = None):
        super().__init__(message, "TEMPLATE_ERROR", {"template": template, "placeholder": placeholder})
        self.template = template
        self.placeholder = placeholder
