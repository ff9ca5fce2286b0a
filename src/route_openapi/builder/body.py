"""Request Body Object construction and binary-field detection."""

from route_openapi.schema.base import Schema
from route_openapi.schema.converter import convert, strip_shared

SHARED_REF_PREFIX = "#/components/schemas/"

JSON_CONTENT = "application/json"
MULTIPART_CONTENT = "multipart/form-data"


class SchemaReferenceError(LookupError):
    """A ``$ref`` points at a shared schema that was never registered."""

    def __init__(self, name: str):
        super().__init__(f"Shared schema {name!r} is referenced but not defined")
        self.name = name


def _is_binary_field(field: dict) -> bool:
    if field.get("type") == "array":
        return (field.get("items") or {}).get("format") == "binary"
    return field.get("format") == "binary"


def contains_binary_field(schema: dict, shared_schemas: dict, _visited: frozenset = frozenset()) -> bool:
    """True if a top-level field (or an array of them) has ``format: binary``.

    Only a root-level ``$ref`` is followed; references inside individual
    properties are not. A reference cycle ends the search with False.
    """
    if any(_is_binary_field(field) for field in schema.get("properties", {}).values()):
        return True

    ref = schema.get("$ref")
    if not ref or not ref.startswith(SHARED_REF_PREFIX):
        return False

    name = ref[len(SHARED_REF_PREFIX):]
    if name in _visited:
        return False
    if name not in shared_schemas:
        raise SchemaReferenceError(name)
    return contains_binary_field(shared_schemas[name], shared_schemas, _visited | {name})


def build_request_body(schema: Schema | None, shared_schemas: dict) -> dict | None:
    """Wrap the converted body schema, picking multipart when it carries files."""
    if schema is None:
        return None

    json_schema = strip_shared(convert(schema, "open-api", shared_schemas))
    content_type = MULTIPART_CONTENT if contains_binary_field(json_schema, shared_schemas) else JSON_CONTENT
    return {"content": {content_type: {"schema": json_schema}}}
