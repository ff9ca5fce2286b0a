"""Schema capability used by the OpenAPI builder.

The builder never inspects a validation library directly. Every validator
attached to a route is wrapped in a Schema, which only has to produce a
JSON-Schema dict and answer a few questions about its top-level fields.
"""

import copy
from abc import ABC, abstractmethod

from pydantic import BaseModel

DEFAULT_REF_TEMPLATE = "#/components/schemas/{model}"
LOCAL_REF_TEMPLATE = "#/$defs/{model}"

_LOCAL_REF_PREFIXES = ("#/$defs/", "#/definitions/")


class Schema(ABC):
    """A validation schema for one request location or response payload."""

    @abstractmethod
    def json_schema(self, ref_template: str = DEFAULT_REF_TEMPLATE) -> dict:
        """Return a JSON-Schema dict. Shared definitions live under ``$defs``."""

    def keys(self) -> list[str]:
        """Top-level field names, in declaration order."""
        return list(self._root().get("properties", {}))

    def required_keys(self) -> list[str]:
        return list(self._root().get("required", []))

    def extract(self, key: str) -> "Schema":
        """Return the sub-schema of one top-level field.

        Shared definitions travel with the extracted field so that its
        references still resolve.
        """
        full = self.json_schema(LOCAL_REF_TEMPLATE)
        properties = self._root(full).get("properties", {})
        if key not in properties:
            raise KeyError(f"{self!r} has no field {key!r}")

        sub = copy.deepcopy(properties[key])
        if full.get("$defs"):
            sub["$defs"] = copy.deepcopy(full["$defs"])
        return JsonSchema(sub)

    def _root(self, full: dict | None = None) -> dict:
        # A model emitted as {"$ref": ..., "$defs": {...}} keeps its fields
        # in the referenced definition.
        if full is None:
            full = self.json_schema(LOCAL_REF_TEMPLATE)
        ref = full.get("$ref")
        if not ref:
            return full
        name = ref.rsplit("/", 1)[-1]
        return full.get("$defs", {}).get(name, full)


class JsonSchema(Schema):
    """Schema backed by a plain JSON-Schema dict (e.g. loaded from YAML)."""

    def __init__(self, document: dict):
        if not isinstance(document, dict):
            raise TypeError(f"JSON schema must be a mapping, got {type(document).__name__}")
        self.document = document

    def json_schema(self, ref_template: str = DEFAULT_REF_TEMPLATE) -> dict:
        result = copy.deepcopy(self.document)
        legacy_defs = result.pop("definitions", None)
        if legacy_defs:
            result["$defs"] = {**legacy_defs, **result.get("$defs", {})}
        return _rewrite_refs(result, ref_template)

    def __repr__(self) -> str:
        return f"JsonSchema({self.document!r})"


class PydanticSchema(Schema):
    """Schema backed by a pydantic model class."""

    def __init__(self, model: type[BaseModel]):
        self.model = model

    def json_schema(self, ref_template: str = DEFAULT_REF_TEMPLATE) -> dict:
        return self.model.model_json_schema(ref_template=ref_template)

    def __repr__(self) -> str:
        return f"PydanticSchema({self.model.__name__})"


def as_schema(value) -> Schema:
    """Coerce a validator declaration into a Schema."""
    if isinstance(value, Schema):
        return value
    if isinstance(value, dict):
        return JsonSchema(value)
    if isinstance(value, type) and issubclass(value, BaseModel):
        return PydanticSchema(value)
    raise TypeError(f"Unsupported schema type: {type(value).__name__}")


def _rewrite_refs(node, ref_template: str):
    if isinstance(node, dict):
        return {
            key: _rewrite_ref(value, ref_template) if key == "$ref" and isinstance(value, str)
            else _rewrite_refs(value, ref_template)
            for key, value in node.items()
        }
    if isinstance(node, list):
        return [_rewrite_refs(item, ref_template) for item in node]
    return node


def _rewrite_ref(ref: str, ref_template: str) -> str:
    for prefix in _LOCAL_REF_PREFIXES:
        if ref.startswith(prefix):
            return ref_template.format(model=ref[len(prefix):])
    return ref
