"""DocumentAssembler — folds route modules into one OpenAPI document."""

import copy
import logging
from typing import NamedTuple

from route_openapi.builder.body import build_request_body
from route_openapi.builder.defaults import DOC_ROOT_TEMPLATE, ROUTE_DEF_TEMPLATE, merge_skeleton
from route_openapi.builder.parameters import path_parameters, project_parameters
from route_openapi.builder.paths import template_path
from route_openapi.builder.responses import build_responses
from route_openapi.builder.tags import module_tag, register_tag
from route_openapi.routes.base import RouteDefinition, RouteModule

logger = logging.getLogger(__name__)


class RouteFragment(NamedTuple):
    """The Route Object for one method on one path template."""

    path: str
    method: str
    operation: dict


def build_route(
    route_template: dict,
    tag: str,
    base_path: str,
    route_def: RouteDefinition,
    shared_schemas: dict,
) -> RouteFragment:
    """Build the Route Object for one route definition.

    ``shared_schemas`` receives any shared definitions met while converting
    the route's validators and response examples.
    """
    path, param_names = template_path(base_path, route_def.path)

    operation = copy.deepcopy(route_template)
    operation.setdefault("tags", []).append(tag)
    operation["summary"] = route_def.summary
    operation["description"] = route_def.description
    if route_def.security is not None:
        operation["security"] = copy.deepcopy(route_def.security)
    if route_def.deprecated:
        operation["deprecated"] = True

    validators = route_def.validators
    parameters = operation.setdefault("parameters", [])
    parameters.extend(path_parameters(validators.path, param_names, shared_schemas))
    parameters.extend(project_parameters(validators.query, "query", shared_schemas))
    parameters.extend(project_parameters(validators.header, "header", shared_schemas))

    request_body = build_request_body(validators.body, shared_schemas)
    if request_body is not None:
        operation["requestBody"] = request_body

    responses = operation.setdefault("responses", {})
    responses.update(build_responses(route_def.response_examples, shared_schemas))

    return RouteFragment(path, route_def.method.lower(), operation)


class DocumentAssembler:
    """Builds an OpenAPI document from route modules.

    The assembler owns the document while it is being built: tags and route
    fragments are merged into it in input order.
    """

    def __init__(self, doc_skeleton: dict | None = None, route_skeleton: dict | None = None):
        self.doc_skeleton = doc_skeleton
        self.route_template = merge_skeleton(ROUTE_DEF_TEMPLATE, route_skeleton)

    def build(self, modules: list[RouteModule]) -> dict:
        document = merge_skeleton(DOC_ROOT_TEMPLATE, self.doc_skeleton)
        document.setdefault("tags", [])
        document.setdefault("paths", {})
        shared_schemas = document.setdefault("components", {}).setdefault("schemas", {})

        for module in modules:
            self._add_module(document, shared_schemas, module)

        logger.info(
            "Built OpenAPI document: %d paths, %d tags, %d shared schemas",
            len(document["paths"]),
            len(document["tags"]),
            len(shared_schemas),
        )
        return document

    def _add_module(self, document: dict, shared_schemas: dict, module: RouteModule) -> None:
        tag = module_tag(module)
        document["tags"] = register_tag(document["tags"], tag)
        logger.debug("Module %s -> tag %s (%d routes)", module.base_path, tag["name"], len(module.routes))

        for route_def in module.routes:
            fragment = build_route(self.route_template, tag["name"], module.base_path, route_def, shared_schemas)
            path_item = document["paths"].setdefault(fragment.path, {})
            if fragment.method in path_item:
                logger.warning("Replacing %s %s", fragment.method.upper(), fragment.path)
            path_item[fragment.method] = fragment.operation
            logger.debug("Added %s %s", fragment.method.upper(), fragment.path)


def convert(all_module_routes: list, doc_skeleton: dict | None = None, route_skeleton: dict | None = None) -> dict:
    """Generate an OpenAPI document from route modules (models or plain dicts)."""
    modules = [m if isinstance(m, RouteModule) else RouteModule.model_validate(m) for m in all_module_routes]
    return DocumentAssembler(doc_skeleton, route_skeleton).build(modules)
