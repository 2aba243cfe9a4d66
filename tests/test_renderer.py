"""
Unit tests for TemplateRenderer.
"""

import ast
import re

import pytest

from mcpgen.errors import TemplateError
from mcpgen.renderer import TemplateRenderer
from mcpgen.utils.naming import kebab_case, pascal_case, snake_case


def _files(renderer, config):
    return {f.relative_path: f.content for f in renderer.build_file_tree(config)}


def _read_tree(root):
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*")) if path.is_file()
    }


def test_emission_order(renderer, basic_config):
    paths = [f.relative_path for f in renderer.build_file_tree(basic_config)]

    assert paths == [
        "src/weather_server/__init__.py",
        "src/weather_server/tools/__init__.py",
        "src/weather_server/integrations/__init__.py",
        "src/weather_server/server.py",
        "pyproject.toml",
        "src/weather_server/tools/get_weather.py",
        ".env.example",
        "README.md",
        "src/weather_server/types.py",
    ]


def test_render_is_deterministic(renderer, builder, tmp_path):
    """Rendering the same configuration twice yields byte-identical trees."""
    # Given
    config = builder.add_integration(builder.from_template("notifications"), "github")
    first, second = tmp_path / "first", tmp_path / "second"

    # When
    renderer.render(config, first)
    TemplateRenderer().render(config, second)

    # Then
    assert _read_tree(first) == _read_tree(second)
    assert _read_tree(first)


@pytest.mark.parametrize("template_name", ["api-tools", "file-manager", "database", "notifications"])
def test_generated_python_is_valid(builder, renderer, template_name):
    config = builder.from_template(template_name)

    for path, content in _files(renderer, config).items():
        if path.endswith(".py"):
            ast.parse(content, filename=path)


def test_cross_file_references_match_configuration(renderer, builder):
    # Given
    config = builder.add_integration(builder.from_template("notifications"), "aws-s3")
    tool_names = {kebab_case(tool.name) for tool in config.tools}
    functions = {snake_case(tool.name) for tool in config.tools}
    integration_classes = {f"{pascal_case(i.id)}Integration" for i in config.integrations}

    # When
    files = _files(renderer, config)
    package = "src/notifications_mcp_server"
    server = files[f"{package}/server.py"]
    types_module = files[f"{package}/types.py"]
    readme = files["README.md"]

    # Then
    assert set(re.findall(r'"([a-z0-9-]+)": \(tools\.', server)) == tool_names
    assert set(re.findall(r"\(tools\.(\w+),", server)) == functions
    assert set(re.findall(r"integrations\.(\w+)\(\)", server)) == integration_classes
    assert set(re.findall(r"from \.integrations\.\w+ import (\w+)", types_module)) == integration_classes
    assert set(re.findall(r"^class (\w+)Args\(BaseModel\)", types_module, re.M)) == {
        pascal_case(tool.name) for tool in config.tools
    }
    assert set(re.findall(r"^### `([a-z0-9-]+)`", readme, re.M)) == tool_names
    for tool in config.tools:
        assert f"{package}/tools/{snake_case(tool.name)}.py" in files
    for integration in config.integrations:
        assert f"{package}/integrations/{snake_case(integration.id)}.py" in files


def test_tool_module_contents(renderer, basic_config):
    module = _files(renderer, basic_config)["src/weather_server/tools/get_weather.py"]

    assert 'TOOL_NAME = "get-weather"' in module
    assert "GET_WEATHER_SCHEMA = " in module
    assert "async def get_weather(" in module
    assert "GetWeatherArgs.model_validate(arguments)" in module
    assert '    return {"city": args.city, "source": "get-weather"}' in module
    assert '"success": False, "error": str(e), "result": None' in module


def test_empty_implementation_renders_stub(renderer, builder):
    config = builder.add_tool(
        builder.create_basic_config("srv", "desc"),
        builder.create_tool("Todo Tool", "Not built yet", {}),
    )

    module = _files(renderer, config)["src/srv/tools/todo_tool.py"]

    assert 'raise NotImplementedError("todo-tool is not implemented yet")' in module
    ast.parse(module)


def test_escaped_dollar_is_literal(renderer, builder):
    config = builder.add_tool(
        builder.create_basic_config("srv", "desc"),
        builder.create_tool("price", "Format a price", {}, implementation='return "$$5 from $tool_name"'),
    )

    module = _files(renderer, config)["src/srv/tools/price.py"]

    assert 'return "$5 from price"' in module


def test_unknown_placeholder_raises_template_error(renderer, builder):
    # Given
    config = builder.add_tool(
        builder.create_basic_config("srv", "desc"),
        builder.create_tool("broken", "Broken", {}, implementation="return $missing_value"),
    )

    # When / Then
    with pytest.raises(TemplateError) as exc_info:
        renderer.build_file_tree(config)

    assert exc_info.value.placeholder == "missing_value"
    assert exc_info.value.code == "TEMPLATE_ERROR"


def test_invalid_placeholder_raises_template_error(renderer, builder):
    config = builder.add_tool(
        builder.create_basic_config("srv", "desc"),
        builder.create_tool("broken", "Broken", {}, implementation="return $ 5"),
    )

    with pytest.raises(TemplateError):
        renderer.build_file_tree(config)


def test_template_error_writes_nothing(renderer, builder, tmp_path):
    config = builder.add_tool(
        builder.create_basic_config("srv", "desc"),
        builder.create_tool("broken", "Broken", {}, implementation="return $missing_value"),
    )

    with pytest.raises(TemplateError):
        renderer.render(config, tmp_path / "out")

    assert not (tmp_path / "out").exists()


def test_write_failure_propagates(renderer, basic_config, tmp_path):
    # Given: the output "directory" is a file
    target = tmp_path / "occupied"
    target.write_text("not a directory")

    # When / Then
    with pytest.raises(OSError):
        renderer.render(basic_config, target)


def test_integration_module_fails_fast(renderer, builder):
    config = builder.add_integration(builder.create_basic_config("srv", "desc"), "twilio")

    module = _files(renderer, config)["src/srv/integrations/twilio.py"]

    assert "class TwilioIntegration:" in module
    assert "REQUIRED_ENVIRONMENT = ['TWILIO_ACCOUNT_SID', 'TWILIO_AUTH_TOKEN', 'TWILIO_PHONE_NUMBER']" in module
    assert "raise RuntimeError(" in module
    assert 'self.twilio_account_sid: str = os.environ["TWILIO_ACCOUNT_SID"]' in module
    ast.parse(module)


def test_env_template_lists_required_and_configuration(renderer, builder):
    config = builder.add_integration(builder.create_basic_config("srv", "desc"), "sendgrid")

    env = _files(renderer, config)[".env.example"]

    assert "SENDGRID_API_KEY=\n" in env
    assert "SENDGRID_APIKEY=\n" in env
    assert "SENDGRID_FROMEMAIL=\n" in env


def test_manifest_lists_dependencies_and_script(renderer, builder):
    config = builder.add_integration(builder.from_template("database"), "github")

    manifest = _files(renderer, config)["pyproject.toml"]

    for dependency in config.dependencies:
        assert f'    "{dependency}",' in manifest
    assert 'database-mcp-server = "database_mcp_server.server:main"' in manifest


def test_args_model_renames_reserved_fields(renderer, builder):
    config = builder.add_tool(
        builder.create_basic_config("srv", "desc"),
        builder.create_tool(
            "shape",
            "Shape data",
            {"json": {"type": "object"}, "class": {"type": "string"}, "pageSize": {"type": "integer"}},
            implementation="return args.json_",
        ),
    )

    types_module = _files(renderer, config)["src/srv/types.py"]

    assert 'json_: dict = Field(alias="json")' in types_module
    assert 'class_: str = Field(alias="class")' in types_module
    assert 'page_size: int = Field(alias="pageSize")' in types_module
    ast.parse(types_module)
