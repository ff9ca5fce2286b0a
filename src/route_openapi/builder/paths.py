"""Route path to OpenAPI path template conversion."""

PARAM_MARKER = ":"


def template_path(base_path: str, route_path: str, marker: str = PARAM_MARKER) -> tuple[str, list[str]]:
    """Turn ``/users`` + ``/:id`` into ``("/users/{id}", ["id"])``."""
    param_names = []
    segments = []
    for segment in (base_path + route_path).split("/"):
        if segment.startswith(marker):
            name = segment[len(marker):]
            param_names.append(name)
            segments.append(f"{{{name}}}")
        else:
            segments.append(segment)
    return "/".join(segments), param_names
