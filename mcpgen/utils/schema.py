"""
Helpers for the JSON-Schema fragments carried by tools.
"""

from typing import Any, Dict, List

from mcpgen.models.project import ParameterSpec

# JSON-Schema type -> Python annotation used in generated models
_PYTHON_TYPES = {
    "string": "str",
    "number": "float",
    "integer": "int",
    "boolean": "bool",
    "array": "list",
    "object": "dict",
}


def is_object_schema(schema: Any) -> bool:
    """True for a dict schema declaring ``type: object``."""
    return isinstance(schema, dict) and schema.get("type") == "object"


def schema_properties(schema: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    properties = schema.get("properties") or {}
    return {name: (spec if isinstance(spec, dict) else {}) for name, spec in properties.items()}


def required_properties(schema: Dict[str, Any]) -> List[str]:
    return [name for name in schema.get("required") or [] if isinstance(name, str)]


def python_type_for(spec: Dict[str, Any]) -> str:
    """
    Python annotation for a property schema.

    Union types (``["string", "null"]``) use the first non-null member;
    a missing or unknown type maps to ``Any``.
    """
    json_type = spec.get("type")
    if isinstance(json_type, list):
        json_type = next((t for t in json_type if t != "null"), None)
    return _PYTHON_TYPES.get(json_type, "Any")


def parameters_from_schema(schema: Dict[str, Any]) -> List[ParameterSpec]:
    """Derive parameter specifications from an object schema, in property order."""
    required = set(required_properties(schema))
    parameters = []
    for name, spec in schema_properties(schema).items():
        json_type = spec.get("type", "any")
        if isinstance(json_type, list):
            json_type = "|".join(str(t) for t in json_type)
        parameters.append(ParameterSpec(
            name=name,
            type=str(json_type),
            description=spec.get("description", ""),
            required=name in required
        ))
    return parameters
