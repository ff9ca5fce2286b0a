"""Response Objects built from declared response examples."""

from route_openapi.routes.base import ResponseExample
from route_openapi.schema.converter import convert, strip_shared

DEFAULT_RESPONSE_DESCRIPTION = "Normal Response"
DEFAULT_MEDIA_TYPE = "application/json"


def build_responses(examples: list[ResponseExample], shared_schemas: dict) -> dict[str, dict]:
    """Map status code to Response Object. Later examples for a code win."""
    responses = {}
    for example in examples:
        if example.schema_ is None:
            continue

        json_schema = strip_shared(convert(example.schema_, "open-api", shared_schemas))
        responses[str(example.code)] = {
            "description": example.description or DEFAULT_RESPONSE_DESCRIPTION,
            "content": {
                example.media_type or DEFAULT_MEDIA_TYPE: {"schema": json_schema},
            },
        }
    return responses
