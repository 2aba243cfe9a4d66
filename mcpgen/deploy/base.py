"""Boundary for deploying a rendered server project to a hosting target."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from mcpgen.models.deployment import DeploymentConfig, DeploymentResult, DeploymentStatus


class DeploymentAdapter(ABC):
    """
    Deploys a finished output directory.

    Adapters are collaborators of the generator, not part of it: each target
    (function-style or project-style hosting) implements this interface with
    its own ``DeploymentConfig`` subclass.
    """

    @abstractmethod
    async def deploy(self, project_path: Union[str, Path], config: DeploymentConfig) -> DeploymentResult:
        """
        Deploy the project at ``project_path``.

        Args:
            project_path: Rendered project directory
            config: Target-specific configuration

        Returns:
            DeploymentResult with the public URL on success
        """
        pass

    @abstractmethod
    async def undeploy(self, deployment_id: str) -> DeploymentResult:
        """Remove a deployment."""
        pass

    @abstractmethod
    async def get_status(self, deployment_id: str) -> DeploymentStatus:
        pass

    @abstractmethod
    async def get_logs(self, deployment_id: str, limit: int = 100) -> List[str]:
        """Most recent log lines of a deployment."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Target name for logging."""
        pass
