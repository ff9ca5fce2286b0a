import pytest
from pydantic import BaseModel

from route_openapi.builder.body import SchemaReferenceError, build_request_body, contains_binary_field


def _ref(name: str) -> dict:
    return {"$ref": f"#/components/schemas/{name}"}


class Upload(BaseModel):
    title: str
    file: bytes


class Gallery(BaseModel):
    images: list[bytes]


class Profile(BaseModel):
    nickname: str


class TestContainsBinaryField:
    def test_direct_binary_field(self):
        schema = {"properties": {"file": {"type": "string", "format": "binary"}}}
        assert contains_binary_field(schema, {}) is True

    def test_array_of_binary(self):
        schema = {"properties": {"files": {"type": "array", "items": {"type": "string", "format": "binary"}}}}
        assert contains_binary_field(schema, {}) is True

    def test_array_without_items(self):
        assert contains_binary_field({"properties": {"files": {"type": "array"}}}, {}) is False

    def test_plain_fields(self):
        schema = {"properties": {"name": {"type": "string"}, "born": {"type": "string", "format": "date"}}}
        assert contains_binary_field(schema, {}) is False

    def test_root_ref_resolved(self):
        shared = {"Upload": {"properties": {"file": {"type": "string", "format": "binary"}}}}
        assert contains_binary_field(_ref("Upload"), shared) is True

    def test_chained_root_refs_resolved(self):
        shared = {
            "Alias": _ref("Upload"),
            "Upload": {"properties": {"file": {"type": "string", "format": "binary"}}},
        }
        assert contains_binary_field(_ref("Alias"), shared) is True

    def test_binary_behind_property_ref_not_detected(self):
        shared = {
            "Wrapper": {"properties": {"attachment": _ref("Attachment")}},
            "Attachment": {"properties": {"file": {"type": "string", "format": "binary"}}},
        }
        assert contains_binary_field(_ref("Wrapper"), shared) is False

    def test_reference_cycle_is_not_binary(self):
        shared = {"A": _ref("B"), "B": _ref("A")}
        assert contains_binary_field(_ref("A"), shared) is False

    def test_missing_reference(self):
        with pytest.raises(SchemaReferenceError) as exc_info:
            contains_binary_field(_ref("Ghost"), {})
        assert exc_info.value.name == "Ghost"
        assert "Ghost" in str(exc_info.value)


class TestBuildRequestBody:
    def test_no_validator(self):
        assert build_request_body(None, {}) is None

    def test_json_body(self):
        body = build_request_body(Profile, {})
        assert list(body["content"]) == ["application/json"]
        assert body["content"]["application/json"]["schema"]["properties"]["nickname"]["type"] == "string"
        assert "schemas" not in body["content"]["application/json"]["schema"]

    def test_binary_body_is_multipart(self):
        body = build_request_body(Upload, {})
        assert list(body["content"]) == ["multipart/form-data"]

    def test_binary_array_body_is_multipart(self):
        body = build_request_body(Gallery, {})
        assert list(body["content"]) == ["multipart/form-data"]

    def test_root_ref_into_shared_definitions(self):
        shared = {}
        schema = {
            "$ref": "#/$defs/Upload",
            "$defs": {"Upload": {"type": "object", "properties": {"file": {"type": "string", "format": "binary"}}}},
        }
        body = build_request_body(schema, shared)
        assert body["content"]["multipart/form-data"]["schema"] == _ref("Upload")
        assert "Upload" in shared
