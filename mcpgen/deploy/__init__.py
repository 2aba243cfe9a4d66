from .base import DeploymentAdapter

__all__ = ["DeploymentAdapter"]
