"""
Generation API endpoints: resolve descriptions and render server projects.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from mcpgen.dependencies import get_generation_service
from mcpgen.errors import GenerationError, TemplateError, ValidationError
from mcpgen.middleware.logging import get_request_id
from mcpgen.models.project import GenerationResult, ProjectConfiguration
from mcpgen.models.requests import GenerateRequest, ResolveRequest
from mcpgen.services.generation_service import GenerationService

logger = logging.getLogger(__name__)

router = APIRouter()


def _validation_failed(e: ValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"message": "Configuration validation failed", "errors": e.errors}
    )


@router.post("/resolve", response_model=ProjectConfiguration)
async def resolve_description(
    request: ResolveRequest,
    generation_service: GenerationService = Depends(get_generation_service)
) -> ProjectConfiguration:
    """
    Resolve a description into a project configuration without rendering it.

    Args:
        request: Description of the server
        generation_service: Generation service instance

    Returns:
        ProjectConfiguration: Validated configuration
    """
    try:
        logger.info(f"Resolving description ({len(request.description)} chars)")
        return await generation_service.resolve(request.description)

    except ValidationError as e:
        logger.warning(f"Resolved configuration is invalid: {e.errors}")
        raise _validation_failed(e)


@router.post("/generate", response_model=GenerationResult, status_code=status.HTTP_201_CREATED)
async def generate_server(
    request: GenerateRequest,
    http_request: Request,
    generation_service: GenerationService = Depends(get_generation_service)
) -> GenerationResult:
    """
    Resolve a description and render the server project under the output root.

    Args:
        request: Description of the server
        http_request: Incoming request; its request id becomes the run id
        generation_service: Generation service instance

    Returns:
        GenerationResult: Run id, output directory, configuration and written files
    """
    try:
        result = await generation_service.generate(
            request.description, run_id=get_request_id(http_request)
        )
        logger.info(f"Generated {result.config.name} ({len(result.files)} files) in run {result.run_id}")
        return result

    except ValidationError as e:
        logger.warning(f"Generation rejected: {e.errors}")
        raise _validation_failed(e)

    except TemplateError as e:
        logger.error(f"Template rendering failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": str(e), "code": e.code, "placeholder": e.placeholder}
        )

    except OSError as e:
        logger.error(f"Writing generated project failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to write generated project: {str(e)}"
        )


@router.post("/templates/{template_name}", response_model=GenerationResult, status_code=status.HTTP_201_CREATED)
def generate_from_template(
    template_name: str,
    http_request: Request,
    generation_service: GenerationService = Depends(get_generation_service)
) -> GenerationResult:
    """
    Render one of the starter templates (api-tools, file-manager, database, notifications).

    Declared without async so the blocking render runs in the threadpool.
    """
    try:
        return generation_service.generate_from_template(
            template_name, run_id=get_request_id(http_request)
        )

    except ValidationError as e:
        raise _validation_failed(e)

    except TemplateError as e:
        logger.error(f"Template rendering failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": str(e), "code": e.code, "placeholder": e.placeholder}
        )

    except GenerationError as e:
        if e.code == "UNKNOWN_TEMPLATE":
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
