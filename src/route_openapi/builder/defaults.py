"""Built-in document and route skeletons."""

import copy

DOC_ROOT_TEMPLATE = {
    "openapi": "3.0.1",
    "info": {
        "description": "API Docs",
        "version": "1.0.0",
        "title": "API Docs",
    },
    "servers": [
        {"url": "http://localhost/"},
    ],
    "tags": [],
    "paths": {},
    "components": {
        "schemas": {
            "Error": {
                "type": "object",
                "required": ["code", "err"],
                "properties": {
                    "code": {"type": "string"},
                    "err": {"type": "string"},
                },
            },
        },
    },
}

ROUTE_DEF_TEMPLATE = {
    "tags": [],
    "summary": "",
    "description": "",
    "parameters": [],
    "responses": {
        "500": {
            "description": "When Server takes a nap.",
            "content": {
                "application/json": {
                    "schema": {"$ref": "#/components/schemas/Error"},
                },
            },
        },
    },
}


def merge_skeleton(default: dict, override: dict | None) -> dict:
    """Shallow-merge ``override`` over a copy of ``default``.

    Top-level keys from ``override`` replace the default wholesale: overriding
    ``info`` with ``{"title": "X"}`` drops the default version and description.
    """
    merged = copy.deepcopy(default)
    if override:
        merged.update(copy.deepcopy(override))
    return merged
