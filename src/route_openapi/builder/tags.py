"""Tag derivation and registration."""

from route_openapi.routes.base import RouteModule


def module_id(base_path: str) -> str:
    """``/admin/users`` -> ``admin-users``."""
    return base_path.removeprefix("/").replace("/", "-")


def module_tag(module: RouteModule) -> dict:
    mid = module_id(module.base_path)
    return {
        "name": module.name or mid,
        "description": module.description or mid,
    }


def register_tag(tags: list[dict], tag: dict) -> list[dict]:
    """Return ``tags`` with ``tag`` appended unless its name is already taken."""
    if any(existing.get("name") == tag["name"] for existing in tags):
        return tags
    return [*tags, tag]
