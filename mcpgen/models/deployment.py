"""
Deployment boundary models. Deployment adapters live outside the core; these
models fix the contract they are called with.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DeploymentState(str, Enum):
    """Lifecycle state of a deployed server."""
    PENDING = "pending"
    DEPLOYING = "deploying"
    READY = "ready"
    FAILED = "failed"
    REMOVED = "removed"


class DeploymentConfig(BaseModel):
    """Settings shared by every deployment target."""
    environment: Dict[str, str] = Field(
        default_factory=dict,
        description="Environment variables set on the deployed server"
    )


class LambdaDeploymentConfig(DeploymentConfig):
    """Function-style target configuration."""
    function_name: str = Field(description="Function name")
    region: str = Field(default="us-east-1", description="Cloud region")
    runtime: str = Field(default="python3.12", description="Function runtime")
    handler: str = Field(default="handler.main", description="Entry handler")
    role: Optional[str] = Field(default=None, description="Execution role ARN")
    timeout: int = Field(default=30, gt=0, description="Invocation timeout in seconds")
    memory_size: int = Field(default=512, gt=0, description="Memory in MB")


class VercelDeploymentConfig(DeploymentConfig):
    """Project-style target configuration."""
    project_name: str = Field(description="Project name")
    team_id: Optional[str] = Field(default=None, description="Team identifier")
    regions: List[str] = Field(default_factory=list, description="Deployment regions")


class DeploymentResult(BaseModel):
    """Result of a deploy or undeploy call."""
    success: bool = Field(description="Whether the operation succeeded")
    url: Optional[str] = Field(default=None, description="Public URL of the deployed server")
    error: Optional[str] = Field(default=None, description="Error message when success is False")
    logs: List[str] = Field(default_factory=list, description="Operation log lines")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Target-specific details")


class DeploymentStatus(BaseModel):
    """Current status of a deployment."""
    state: DeploymentState = Field(description="Lifecycle state")
    url: Optional[str] = Field(default=None, description="Public URL")
    details: Dict[str, Any] = Field(default_factory=dict, description="Target-specific details")
