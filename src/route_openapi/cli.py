"""CLI entry point for route-openapi."""

import json
import logging
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from route_openapi.builder.body import SchemaReferenceError
from route_openapi.builder.document import convert
from route_openapi.builder.validator import validate_document
from route_openapi.routes.loader import load_modules, load_skeleton, read_mapping_file


def _output_format(output: Path, fmt: str) -> str:
    if fmt != "auto":
        return fmt
    return "yaml" if output.suffix.lower() in (".yaml", ".yml") else "json"


def _dump(document: dict, fmt: str) -> str:
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def _report_errors(errors: dict[str, str]) -> None:
    for name, message in errors.items():
        click.echo(f"  {name}: {message}", err=True)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log each module and route as it is processed.")
def main(verbose: bool):
    """route-openapi — generate OpenAPI documents from validated route tables."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("source")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the OpenAPI document.")
@click.option("--doc-skeleton", type=click.Path(exists=True, path_type=Path), default=None, help="YAML/JSON merged over the default document.")
@click.option("--route-skeleton", type=click.Path(exists=True, path_type=Path), default=None, help="YAML/JSON merged over the default route object.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format.")
@click.option("--validate/--no-validate", default=True, help="Validate the result with openapi-spec-validator.")
def generate(source: str, output: Path, doc_skeleton: Path | None, route_skeleton: Path | None, fmt: str, validate: bool):
    """Generate an OpenAPI document from SOURCE (route file or module:attribute)."""
    click.echo(f"Loading routes from {source}...")
    try:
        modules = load_modules(source)
        doc = load_skeleton(doc_skeleton) if doc_skeleton else None
        route = load_skeleton(route_skeleton) if route_skeleton else None
        document = convert(modules, doc, route)
    except (ValidationError, SchemaReferenceError, ValueError, TypeError, ImportError, AttributeError) as e:
        raise click.ClickException(f"Invalid route definitions: {e}") from e

    click.echo(f"Found {len(modules)} modules, {len(document['paths'])} paths.")

    if validate:
        errors = validate_document(document)
        if errors:
            _report_errors(errors)
            raise click.ClickException("Generated document is not a valid OpenAPI document")

    fmt = _output_format(output, fmt)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(_dump(document, fmt), encoding="utf-8")
    click.echo(f"OpenAPI document saved to {output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def check(doc_path: Path):
    """Validate an existing OpenAPI document."""
    document = read_mapping_file(doc_path)
    if not isinstance(document, dict):
        raise click.ClickException(f"{doc_path} does not contain a mapping")

    errors = validate_document(document)
    if errors:
        _report_errors(errors)
        raise click.ClickException(f"{doc_path} is not a valid OpenAPI document")
    click.echo(f"{doc_path} is valid.")
