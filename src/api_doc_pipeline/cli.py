"""CLI entry point for api-doc-pipeline."""

import logging
from pathlib import Path

import click
import yaml

from api_doc_pipeline.config import ConfigurationMissing, load_configuration
from api_doc_pipeline.document.export import FORMATS, document_filename, document_route, dump_document
from api_doc_pipeline.pipeline.registry import DocumentRegistry, build_registry
from api_doc_pipeline.routing.manifest import Manifest, load_manifest
from api_doc_pipeline.transforms.describe import format_short_date


def _read_manifest(manifest_path: Path) -> Manifest:
    try:
        return load_manifest(manifest_path)
    except (KeyError, ValueError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Invalid manifest {manifest_path}: {exc}") from exc


def _load_registry(manifest_path: Path, config_path: Path) -> DocumentRegistry | None:
    try:
        configuration = load_configuration(config_path)
    except ConfigurationMissing as exc:
        raise click.ClickException(str(exc)) from exc
    manifest = _read_manifest(manifest_path)
    return build_registry(configuration, manifest)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """API Doc Pipeline: build versioned OpenAPI documents from an API manifest."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", "config_path", required=True, type=click.Path(exists=True, path_type=Path), help="Configuration file (YAML or JSON).")
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output directory for documents.")
@click.option("--format", "fmt", default="json", type=click.Choice(FORMATS), help="Document format.")
@click.option("-d", "--document", "names", multiple=True, help="Document name to build (repeatable). Defaults to every version.")
def build(manifest_path: Path, config_path: Path, output: Path, fmt: str, names: tuple[str, ...]):
    """Build one document per API version."""
    registry = _load_registry(manifest_path, config_path)
    if registry is None:
        click.echo("No OpenApi configuration section; documentation is disabled.")
        return

    output.mkdir(parents=True, exist_ok=True)
    written = 0
    for name in names or registry.names:
        try:
            document = registry.get(name)
        except ConfigurationMissing as exc:
            raise click.ClickException(str(exc)) from exc
        if document is None:
            click.echo(f"  No API version matches '{name}', skipped")
            continue
        file_path = output / document_filename(name, fmt)
        file_path.write_text(dump_document(document, fmt), encoding="utf-8")
        click.echo(f"  Created {file_path}")
        written += 1

    click.echo(f"Generated {written} documents in {output}")


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, path_type=Path))
@click.argument("name")
@click.option("-c", "--config", "config_path", required=True, type=click.Path(exists=True, path_type=Path), help="Configuration file (YAML or JSON).")
@click.option("--format", "fmt", default="json", type=click.Choice(FORMATS), help="Document format.")
def show(manifest_path: Path, name: str, config_path: Path, fmt: str):
    """Print the document for a single API version."""
    registry = _load_registry(manifest_path, config_path)
    if registry is None:
        raise click.ClickException("Documentation is disabled: no OpenApi configuration section.")

    try:
        document = registry.get(name)
    except ConfigurationMissing as exc:
        raise click.ClickException(str(exc)) from exc
    if document is None:
        raise click.ClickException(f"Document '{name}' not found.")
    click.echo(dump_document(document, fmt), nl=False)


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, path_type=Path))
def versions(manifest_path: Path):
    """List the API versions declared in a manifest."""
    manifest = _read_manifest(manifest_path)
    for descriptor in manifest.versions:
        line = f"{descriptor.name}\t{descriptor.version}\t{document_route(descriptor.name)}"
        if descriptor.deprecated:
            line += "\tdeprecated"
        policy = descriptor.sunset_policy
        if policy is not None and policy.date is not None:
            line += f"\tsunset {format_short_date(policy.date)}"
        click.echo(line)
