# Pydantic models for the MCP server generator

from .catalog import ToolCategory, AuthType, ToolPattern, IntegrationDefinition
from .analysis import (
    Complexity,
    RequirementRecord,
    IntegrationSuggestion,
    AnalysisResult,
    GeneratedToolDetail,
)
from .project import (
    ParameterSpec,
    GeneratedTool,
    ProjectConfiguration,
    RenderedFile,
    GenerationResult,
)
from .deployment import (
    DeploymentState,
    DeploymentConfig,
    LambdaDeploymentConfig,
    VercelDeploymentConfig,
    DeploymentResult,
    DeploymentStatus,
)
from .requests import (
    ResolveRequest,
    GenerateRequest,
    PatternListResponse,
    IntegrationListResponse,
)

__all__ = [
    # Catalog models
    "ToolCategory",
    "AuthType",
    "ToolPattern",
    "IntegrationDefinition",
    # Analysis models
    "Complexity",
    "RequirementRecord",
    "IntegrationSuggestion",
    "AnalysisResult",
    "GeneratedToolDetail",
    # Project models
    "ParameterSpec",
    "GeneratedTool",
    "ProjectConfiguration",
    "RenderedFile",
    "GenerationResult",
    # Deployment models
    "DeploymentState",
    "DeploymentConfig",
    "LambdaDeploymentConfig",
    "VercelDeploymentConfig",
    "DeploymentResult",
    "DeploymentStatus",
    # API models
    "ResolveRequest",
    "GenerateRequest",
    "PatternListResponse",
    "IntegrationListResponse",
]
