import pytest
from pydantic import BaseModel, Field

from route_openapi.builder.document import convert as convert_routes
from route_openapi.builder.validator import validate_document
from route_openapi.schema.converter import convert, strip_shared, to_open_api


class Tag(BaseModel):
    label: str


class Item(BaseModel):
    tag: Tag
    note: str | None = None


class Order(BaseModel):
    quantity: int = Field(gt=0)
    discount: float = Field(ge=0, lt=1)


class Note(BaseModel):
    text: str = Field(examples=["hello", "hi"])


def build_document(body: type[BaseModel], response: type[BaseModel]) -> dict:
    return convert_routes([{
        "basePath": "/orders",
        "routes": [{
            "method": "post",
            "path": "",
            "validators": {"body": body},
            "responseExamples": [{"code": 201, "schema": response}],
        }],
    }])


class TestConvert:
    def test_returns_schemas_side_map(self):
        result = convert(Item)
        assert "Tag" in result["schemas"]
        assert result["properties"]["tag"] == {"$ref": "#/components/schemas/Tag"}

    def test_accumulates_into_shared_store(self):
        shared = {"Error": {"type": "object"}}
        convert(Item, "open-api", shared)
        convert({"$ref": "#/$defs/Other", "$defs": {"Other": {"type": "string"}}}, "open-api", shared)
        assert list(shared) == ["Error", "Tag", "Other"]

    def test_later_definition_replaces_earlier(self):
        shared = {"Tag": {"type": "string"}}
        convert(Item, "open-api", shared)
        assert shared["Tag"]["type"] == "object"

    def test_strips_dollar_schema(self):
        result = convert({"$schema": "https://json-schema.org/draft/2020-12/schema", "type": "object"})
        assert "$schema" not in result

    def test_nullable_rewrite_for_open_api(self):
        result = convert(Item, "open-api")
        note = result["properties"]["note"]
        assert note["type"] == "string"
        assert note["nullable"] is True
        assert "anyOf" not in note

    def test_json_target_keeps_any_of(self):
        result = convert(Item, "json")
        assert "anyOf" in result["properties"]["note"]

    def test_unknown_target_format(self):
        with pytest.raises(ValueError):
            convert(Item, "graphql")

    def test_json_target_preserves_field_metadata(self):
        result = convert({
            "type": "object",
            "properties": {
                "file": {"type": "string", "format": "binary", "description": "Upload", "examples": ["x"], "example": "y"},
            },
        }, "json")
        assert result["properties"]["file"] == {
            "type": "string", "format": "binary", "description": "Upload", "examples": ["x"], "example": "y",
        }

    def test_open_api_target_keeps_format_and_description(self):
        result = convert({
            "type": "object",
            "properties": {"file": {"type": "string", "format": "binary", "description": "Upload"}},
        })
        assert result["properties"]["file"] == {"type": "string", "format": "binary", "description": "Upload"}

    def test_constrained_model_is_valid_open_api(self):
        doc = build_document(body=Order, response=Order)
        body = doc["paths"]["/orders"]["post"]["requestBody"]["content"]["application/json"]["schema"]
        quantity = body["properties"]["quantity"]
        assert quantity["minimum"] == 0
        assert quantity["exclusiveMinimum"] is True
        assert validate_document(doc) == {}

    def test_examples_model_is_valid_open_api(self):
        doc = build_document(body=Note, response=Note)
        body = doc["paths"]["/orders"]["post"]["requestBody"]["content"]["application/json"]["schema"]
        assert body["properties"]["text"]["example"] == "hello"
        assert "examples" not in body["properties"]["text"]
        assert validate_document(doc) == {}

    def test_strip_shared(self):
        result = strip_shared(convert(Item))
        assert "schemas" not in result


class TestToOpenApi:
    def test_const_becomes_enum(self):
        assert to_open_api({"const": "a"}) == {"enum": ["a"]}

    def test_type_list_with_null(self):
        assert to_open_api({"type": ["integer", "null"]}) == {"type": "integer", "nullable": True}

    def test_nullable_ref_wrapped_in_all_of(self):
        node = {"anyOf": [{"$ref": "#/components/schemas/Tag"}, {"type": "null"}], "default": None}
        assert to_open_api(node) == {
            "default": None,
            "nullable": True,
            "allOf": [{"$ref": "#/components/schemas/Tag"}],
        }

    def test_ref_with_siblings(self):
        node = {"$ref": "#/components/schemas/Tag", "description": "The tag"}
        assert to_open_api(node) == {"description": "The tag", "allOf": [{"$ref": "#/components/schemas/Tag"}]}

    def test_recurses_into_items(self):
        node = {"type": "array", "items": {"const": 1}}
        assert to_open_api(node) == {"type": "array", "items": {"enum": [1]}}

    def test_numeric_exclusive_bounds(self):
        node = {"type": "number", "exclusiveMinimum": 0, "exclusiveMaximum": 1}
        assert to_open_api(node) == {
            "type": "number",
            "minimum": 0,
            "exclusiveMinimum": True,
            "maximum": 1,
            "exclusiveMaximum": True,
        }

    def test_boolean_exclusive_flag_untouched(self):
        node = {"type": "integer", "minimum": 0, "exclusiveMinimum": True}
        assert to_open_api(node) == node

    def test_examples_become_single_example(self):
        assert to_open_api({"type": "string", "examples": ["a", "b"]}) == {"type": "string", "example": "a"}

    def test_examples_rewritten_at_every_level(self):
        node = {
            "type": "object",
            "examples": [{"tags": ["x"]}],
            "properties": {"tags": {"type": "array", "items": {"type": "string", "examples": ["x"]}}},
        }
        result = to_open_api(node)
        assert result["example"] == {"tags": ["x"]}
        assert result["properties"]["tags"]["items"] == {"type": "string", "example": "x"}

    def test_property_named_examples_kept(self):
        node = {"type": "object", "properties": {"examples": {"type": "string"}}}
        assert to_open_api(node) == node
