"""SchemaConverter — turns a Schema into an OpenAPI Schema Object.

Shared definitions discovered while converting are written into the caller's
shared-schema store so that repeated calls accumulate one set of
``components.schemas`` entries for the whole document.
"""

import logging

from route_openapi.schema.base import DEFAULT_REF_TEMPLATE, Schema, as_schema

logger = logging.getLogger(__name__)

TARGET_FORMATS = ("open-api", "json")


def convert(schema: Schema | dict, target_format: str = "open-api", shared_schemas: dict | None = None) -> dict:
    """Convert a schema node, returning a dict with a ``schemas`` side-map.

    The side-map holds the shared definitions found in this call. They are
    also merged into ``shared_schemas`` when given; a later definition under
    an existing name replaces the earlier one.
    """
    if target_format not in TARGET_FORMATS:
        raise ValueError(f"Unknown target format: {target_format!r}")

    raw = as_schema(schema).json_schema(ref_template=DEFAULT_REF_TEMPLATE)
    raw.pop("$schema", None)
    definitions = raw.pop("$defs", {})

    if target_format == "open-api":
        raw = to_open_api(raw)
        definitions = {name: to_open_api(defn) for name, defn in definitions.items()}

    if shared_schemas is not None:
        for name, defn in definitions.items():
            if name in shared_schemas and shared_schemas[name] != defn:
                logger.debug("Replacing shared schema %s", name)
            shared_schemas[name] = defn

    raw["schemas"] = definitions
    return raw


def strip_shared(converted: dict) -> dict:
    """Drop the ``schemas`` side-map once it has been folded into the store."""
    converted.pop("schemas", None)
    return converted


def to_open_api(node):
    """Rewrite a JSON-Schema node into the OpenAPI 3.0 schema dialect."""
    if isinstance(node, list):
        return [to_open_api(item) for item in node]
    if not isinstance(node, dict):
        return node

    node = dict(node)

    if "const" in node:
        node["enum"] = [node.pop("const")]

    # 3.0 only has a boolean flag on minimum/maximum.
    for exclusive, bound in (("exclusiveMinimum", "minimum"), ("exclusiveMaximum", "maximum")):
        value = node.get(exclusive)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            node[bound] = value
            node[exclusive] = True

    # 3.0 Schema Objects carry a single example.
    examples = node.get("examples")
    if isinstance(examples, list):
        del node["examples"]
        if examples:
            node["example"] = examples[0]

    types = node.get("type")
    if isinstance(types, list):
        non_null = [t for t in types if t != "null"]
        if len(non_null) < len(types):
            node["nullable"] = True
        if len(non_null) == 1:
            node["type"] = non_null[0]
        elif non_null:
            node["type"] = non_null
        else:
            del node["type"]

    for key in ("anyOf", "oneOf"):
        if key in node:
            node = _fold_nullable(node, key)

    result = {}
    for key, value in node.items():
        if key in ("properties", "patternProperties", "$defs"):
            result[key] = {name: to_open_api(sub) for name, sub in value.items()}
        elif key in ("items", "additionalProperties", "not", "anyOf", "oneOf", "allOf"):
            result[key] = to_open_api(value)
        else:
            result[key] = value

    if "$ref" in result and len(result) > 1:
        ref = result.pop("$ref")
        result["allOf"] = [{"$ref": ref}] + result.get("allOf", [])
    return result


def _fold_nullable(node: dict, key: str) -> dict:
    options = node[key]
    non_null = [opt for opt in options if opt != {"type": "null"}]
    if len(non_null) == len(options):
        return node

    node = dict(node)
    node["nullable"] = True
    if len(non_null) == 1:
        del node[key]
        only = non_null[0]
        if "$ref" in only:
            node["allOf"] = [only]
        else:
            for k, v in only.items():
                node.setdefault(k, v)
    else:
        node[key] = non_null
    return node
