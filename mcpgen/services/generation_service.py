"""
Generation service: resolve, validate and render in one request.
"""

import asyncio
import logging
import uuid
from pathlib import Path
from typing import Optional, Union

from mcpgen.config import Settings, get_settings
from mcpgen.errors import GenerationError
from mcpgen.models.project import GenerationResult, ProjectConfiguration
from mcpgen.renderer import TemplateRenderer, render_summary
from mcpgen.utils.generation_logger import (
    cleanup_generation_loggers,
    get_generation_logger,
    log_divider,
    log_multiline,
)
from .project_builder import ProjectBuilder
from .resolver import RequirementResolver
from .validation import ensure_valid

logger = logging.getLogger(__name__)


class GenerationService:
    """Runs the resolver and the renderer for generation requests."""

    def __init__(
        self,
        resolver: RequirementResolver,
        renderer: Optional[TemplateRenderer] = None,
        builder: Optional[ProjectBuilder] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize generation service.

        Args:
            resolver: Requirement resolver
            renderer: Template renderer
            builder: Project builder for starter templates
            settings: Application settings
        """
        self.resolver = resolver
        self.renderer = renderer or TemplateRenderer()
        self.builder = builder or ProjectBuilder(self.renderer)
        self.settings = settings or get_settings()

    async def resolve(self, description: str) -> ProjectConfiguration:
        return await self.resolver.resolve(description)

    async def generate(
        self,
        description: str,
        output_dir: Optional[Union[str, Path]] = None,
        run_id: Optional[str] = None
    ) -> GenerationResult:
        """
        Generate a server project from a free-text description.

        Rendering and writing run in a worker thread so the event loop is not
        blocked by file I/O.

        Args:
            description: What the server should do
            output_dir: Target directory, defaults to ``<output_root>/<run_id>``
            run_id: Run identifier, generated when omitted

        Returns:
            GenerationResult: Resolved configuration and written paths

        Raises:
            ValidationError: The resolved configuration is invalid
            TemplateError: Rendering failed on a placeholder
            OSError: Writing the project failed
        """
        run_id = run_id or self._new_run_id()
        run_logger = get_generation_logger(run_id, logs_dir=self.settings.logs_dir)

        try:
            log_divider(run_logger, f"GENERATION {run_id}")
            log_multiline(run_logger, "Description:", description)

            config = await self.resolver.resolve(description)
            log_divider(run_logger, "RESOLVED CONFIGURATION")
            log_multiline(run_logger, "Configuration:", config.model_dump_json(indent=2))

            return await asyncio.to_thread(self._render, run_id, config, output_dir, run_logger)

        except Exception as e:
            run_logger.error(f"Generation failed: {e}")
            raise
        finally:
            cleanup_generation_loggers(run_id)

    def generate_from_template(
        self,
        template_name: str,
        output_dir: Optional[Union[str, Path]] = None,
        run_id: Optional[str] = None
    ) -> GenerationResult:
        """Render a starter template; unknown names raise GenerationError. Blocks on file I/O."""
        run_id = run_id or self._new_run_id()
        run_logger = get_generation_logger(run_id, logs_dir=self.settings.logs_dir)

        try:
            log_divider(run_logger, f"TEMPLATE {template_name} ({run_id})")
            config = self.builder.from_template(template_name)
            return self._render(run_id, config, output_dir, run_logger)

        except GenerationError as e:
            run_logger.error(f"Template generation failed: {e}")
            raise
        finally:
            cleanup_generation_loggers(run_id)

    def _render(
        self,
        run_id: str,
        config: ProjectConfiguration,
        output_dir: Optional[Union[str, Path]],
        run_logger: logging.Logger
    ) -> GenerationResult:
        ensure_valid(config)

        target = Path(output_dir) if output_dir else Path(self.settings.output_root) / run_id
        logger.info(f"Rendering {config.name} into {target}")

        files = self.renderer.build_file_tree(config)
        log_divider(run_logger, "RENDERED FILES")
        for path, size in render_summary(files).items():
            run_logger.debug(f"{path} ({size} bytes)")

        written = self.renderer.write_files(files, target)
        run_logger.info(f"Wrote {len(written)} files to {target}")

        return GenerationResult(
            run_id=run_id,
            output_dir=str(target),
            config=config,
            files=written,
            used_fallback=bool(config.metadata.get("fallback", False))
        )

    def _new_run_id(self) -> str:
        return uuid.uuid4().hex[:12]
