"""Load route modules and document skeletons.

Route tables come either from a YAML/JSON file, with validators written as
inline JSON Schema, or from a Python object reference ``package.module:name``.
"""

import importlib
import json
from pathlib import Path

import yaml

from route_openapi.routes.base import RouteModule


def detect_format(file_path: Path) -> str:
    """Detect whether a file holds YAML or JSON.

    Returns: 'json' or 'yaml'.
    """
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"

    text = file_path.read_text(encoding="utf-8")
    try:
        json.loads(text)
        return "json"
    except (json.JSONDecodeError, ValueError):
        return "yaml"


def read_mapping_file(file_path: Path):
    text = file_path.read_text(encoding="utf-8")
    if detect_format(file_path) == "json":
        return json.loads(text)
    return yaml.safe_load(text)


def load_modules(source: str | Path) -> list[RouteModule]:
    """Load route modules from a file path or a ``module:attribute`` reference."""
    if isinstance(source, str) and _is_object_ref(source):
        data = _import_object(source)
    else:
        data = read_mapping_file(Path(source))
        if isinstance(data, dict):
            data = data.get("modules")

    if not isinstance(data, (list, tuple)):
        raise ValueError(f"Expected a list of route modules in {source}")

    return [m if isinstance(m, RouteModule) else RouteModule.model_validate(m) for m in data]


def load_skeleton(file_path: Path) -> dict:
    """Load a document or route skeleton mapping."""
    data = read_mapping_file(file_path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Skeleton {file_path} must be a mapping, got {type(data).__name__}")
    return data


def _is_object_ref(source: str) -> bool:
    module_name, sep, attr = source.partition(":")
    return bool(sep and module_name and attr) and not Path(source).exists()


def _import_object(ref: str):
    module_name, _, attr_path = ref.partition(":")
    obj = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)
    if callable(obj):
        obj = obj()
    return obj
