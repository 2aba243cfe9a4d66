"""Service layer for requirement resolution and project generation."""

from .validation import dependency_closure, ensure_valid, validate_configuration
from .resolver import RequirementResolver
from .project_builder import ProjectBuilder, STARTER_TEMPLATES
from .generation_service import GenerationService

__all__ = [
    "dependency_closure",
    "ensure_valid",
    "validate_configuration",
    "RequirementResolver",
    "ProjectBuilder",
    "STARTER_TEMPLATES",
    "GenerationService",
]
