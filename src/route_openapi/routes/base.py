"""Data models for annotated route definitions.

Route modules group routes under one URL prefix and one documentation tag.
Loaders (YAML/JSON files, Python objects) convert their input into these
models before the document is built.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from route_openapi.schema.base import Schema, as_schema

# Legacy location keys kept for route tables written against older gateways.
LOCATION_ALIASES = {
    "queryStringParameters": "query",
    "pathParameters": "path",
}


def _coerce(value) -> Schema | None:
    if value is None:
        return None
    try:
        return as_schema(value)
    except TypeError as e:
        raise ValueError(str(e)) from e


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class ResponseExample(_Frozen):
    """One documented response for a route."""

    code: int | str
    schema_: Schema | None = Field(default=None, alias="schema")
    media_type: str | None = Field(default=None, alias="mediaType")
    description: str | None = None

    @field_validator("schema_", mode="before")
    @classmethod
    def coerce_schema(cls, value):
        return _coerce(value)


class Validators(_Frozen):
    """Validation schema per request location."""

    path: Schema | None = None
    query: Schema | None = None
    header: Schema | None = None
    body: Schema | None = None

    @model_validator(mode="before")
    @classmethod
    def normalize_locations(cls, data: Any):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for alias, location in LOCATION_ALIASES.items():
            if alias not in data:
                continue
            if data.get(location) is not None:
                raise ValueError(f"Validators for {location!r} given both as {location!r} and {alias!r}")
            data[location] = data.pop(alias)
        return data

    @field_validator("path", "query", "header", "body", mode="before")
    @classmethod
    def coerce_schema(cls, value):
        return _coerce(value)


class RouteDefinition(_Frozen):
    """A single HTTP method on a single route path."""

    method: str
    path: str
    summary: str = ""
    description: str = ""
    security: list[dict] | None = None
    deprecated: bool = False
    validators: Validators = Field(default_factory=Validators)
    response_examples: list[ResponseExample] = Field(default_factory=list, alias="responseExamples")

    @field_validator("validators", mode="before")
    @classmethod
    def default_validators(cls, value):
        return {} if value is None else value


class RouteModule(_Frozen):
    """Routes sharing one base path and one tag."""

    base_path: str = Field(alias="basePath")
    name: str | None = None
    description: str | None = None
    routes: list[RouteDefinition] = Field(default_factory=list)
