"""
Centralized dependency injection for FastAPI with singleton pattern.

Services are instantiated once per process using @lru_cache(); tests override
them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from mcpgen.config import get_settings
from mcpgen.renderer import TemplateRenderer
from mcpgen.services.generation_service import GenerationService
from mcpgen.services.project_builder import ProjectBuilder
from mcpgen.services.resolver import RequirementResolver


@lru_cache()
def get_renderer() -> TemplateRenderer:
    """Get singleton TemplateRenderer instance."""
    return TemplateRenderer()


@lru_cache()
def get_resolver() -> RequirementResolver:
    """Get singleton RequirementResolver instance.

    Uses the OpenAI-backed agents when an API key is configured and the
    keyword analyzer otherwise.
    """
    return RequirementResolver(settings=get_settings())


@lru_cache()
def get_project_builder() -> ProjectBuilder:
    """Get singleton ProjectBuilder instance."""
    return ProjectBuilder(renderer=get_renderer())


@lru_cache()
def get_generation_service() -> GenerationService:
    """Get singleton GenerationService instance."""
    return GenerationService(
        resolver=get_resolver(),
        renderer=get_renderer(),
        builder=get_project_builder(),
        settings=get_settings()
    )
