"""
Tests for the deployment boundary: adapter contract and target configurations.
"""

from pathlib import Path
from typing import Dict, List

import pytest
from pydantic import ValidationError as PydanticValidationError

from mcpgen.deploy import DeploymentAdapter
from mcpgen.models.deployment import (
    DeploymentResult,
    DeploymentState,
    DeploymentStatus,
    LambdaDeploymentConfig,
    VercelDeploymentConfig,
)


class InMemoryAdapter(DeploymentAdapter):
    """Records deployments of rendered projects."""

    def __init__(self):
        self.deployments: Dict[str, Path] = {}

    @property
    def name(self) -> str:
        return "in-memory"

    async def deploy(self, project_path, config):
        root = Path(project_path)
        if not (root / "pyproject.toml").is_file():
            return DeploymentResult(success=False, error=f"No project manifest in {root}")
        deployment_id = root.name
        self.deployments[deployment_id] = root
        return DeploymentResult(
            success=True,
            url=f"https://{deployment_id}.example.test",
            metadata={"deployment_id": deployment_id, "environment": config.environment},
        )

    async def undeploy(self, deployment_id):
        removed = self.deployments.pop(deployment_id, None)
        return DeploymentResult(success=removed is not None)

    async def get_status(self, deployment_id):
        state = DeploymentState.READY if deployment_id in self.deployments else DeploymentState.REMOVED
        return DeploymentStatus(state=state)

    async def get_logs(self, deployment_id, limit=100) -> List[str]:
        return [f"{deployment_id}: started"][:limit]


def test_adapter_must_implement_every_operation():
    class Partial(DeploymentAdapter):
        async def deploy(self, project_path, config):
            return DeploymentResult(success=True)

    with pytest.raises(TypeError):
        Partial()


@pytest.mark.asyncio
async def test_deploy_rendered_project(renderer, basic_config, tmp_path):
    # Given
    project = tmp_path / "weather-server"
    renderer.render(basic_config, project)
    adapter = InMemoryAdapter()
    config = LambdaDeploymentConfig(function_name="weather-server", environment={"LOG_LEVEL": "INFO"})

    # When
    result = await adapter.deploy(project, config)

    # Then
    assert result.success is True
    assert result.metadata["environment"] == {"LOG_LEVEL": "INFO"}
    assert (await adapter.get_status("weather-server")).state == DeploymentState.READY
    assert await adapter.get_logs("weather-server") == ["weather-server: started"]

    assert (await adapter.undeploy("weather-server")).success is True
    assert (await adapter.get_status("weather-server")).state == DeploymentState.REMOVED


@pytest.mark.asyncio
async def test_deploy_without_manifest_fails(tmp_path):
    result = await InMemoryAdapter().deploy(tmp_path, VercelDeploymentConfig(project_name="empty"))

    assert result.success is False
    assert "manifest" in result.error


def test_target_configuration_defaults_and_bounds():
    lambda_config = LambdaDeploymentConfig(function_name="srv")
    vercel_config = VercelDeploymentConfig(project_name="srv", team_id="team_1")

    assert lambda_config.region == "us-east-1"
    assert lambda_config.memory_size == 512
    assert vercel_config.regions == []
    with pytest.raises(PydanticValidationError):
        LambdaDeploymentConfig(function_name="srv", timeout=0)
