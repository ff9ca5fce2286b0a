"""Project validated request fields onto OpenAPI Parameter Objects."""

import copy
import json

from route_openapi.schema.base import Schema, as_schema
from route_openapi.schema.converter import convert, strip_shared


def _render_example(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def describe_with_example(param: dict) -> dict:
    """Append `` (Example: <value>)`` to the description once."""
    description = param.get("description") or ""
    if param.get("example") is not None:
        suffix = f" (Example: {_render_example(param['example'])})"
        if not description.endswith(suffix):
            description += suffix
    param["description"] = description
    return param


def field_to_parameter(name: str, field_schema: dict, location: str, required: bool = False) -> dict:
    """Build the Parameter Object for one converted top-level field."""
    param = {"name": name, "in": location}
    if required:
        param["required"] = True
    param["description"] = field_schema.get("description") or ""

    examples = field_schema.get("examples")
    if examples:
        param["example"] = examples[0]
    elif "example" in field_schema:
        param["example"] = field_schema["example"]

    param["schema"] = {
        key: copy.deepcopy(value)
        for key, value in field_schema.items()
        if key not in ("description", "example", "examples")
    }
    return describe_with_example(param)


def _convert_field(schema: Schema, name: str, shared_schemas: dict) -> dict:
    return strip_shared(convert(schema.extract(name), "open-api", shared_schemas))


def project_parameters(schema: Schema | None, location: str, shared_schemas: dict) -> list[dict]:
    """One Parameter Object per top-level field; none when there is no validator."""
    if schema is None:
        return []

    schema = as_schema(schema)
    required = set(schema.required_keys())
    return [
        field_to_parameter(name, _convert_field(schema, name, shared_schemas), location, name in required)
        for name in schema.keys()
    ]


def path_parameters(schema: Schema | None, names: list[str], shared_schemas: dict) -> list[dict]:
    """Parameter Objects for every ``{name}`` in the path template, in order.

    Names the path validator does not declare fall back to a required string.
    OpenAPI requires every path parameter to be marked required.
    """
    declared = []
    if schema is not None:
        schema = as_schema(schema)
        declared = schema.keys()

    params = []
    for name in names:
        if name in declared:
            param = field_to_parameter(name, _convert_field(schema, name, shared_schemas), "path", True)
        else:
            param = {
                "name": name,
                "in": "path",
                "required": True,
                "description": "",
                "schema": {"type": "string"},
            }
        params.append(param)
    return params
