"""Validates generated OpenAPI documents against the OpenAPI grammar."""

from openapi_spec_validator import validate
from openapi_spec_validator.validation.exceptions import OpenAPIValidationError


def validate_document(document: dict) -> dict[str, str]:
    """Check a document with openapi-spec-validator.

    Returns {} when valid, otherwise {"document": error_message}.
    """
    try:
        validate(document)
    except OpenAPIValidationError as e:
        return {"document": f"{type(e).__name__}: {e}"}
    return {}
