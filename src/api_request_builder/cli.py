"""CLI entry point for api-request-builder."""

import json
from pathlib import Path

import click
import yaml

from api_request_builder.config import BuilderSettings, get_settings
from api_request_builder.exceptions import RequestBuildError
from api_request_builder.logging import configure_logging
from api_request_builder.parser.base import ApiEndpoint
from api_request_builder.parser.detect import load_document
from api_request_builder.parser.swagger import parse_document, server_url
from api_request_builder.request.builder import RequestBuilder


def _find_endpoint(endpoints: list[ApiEndpoint], operation_id: str) -> ApiEndpoint:
    for ep in endpoints:
        if ep.operation_id == operation_id:
            return ep
    raise click.ClickException(f"No operation with id '{operation_id}'")


def _collect_arguments(params: tuple[str, ...], endpoint: ApiEndpoint) -> dict[str, str | list[str]]:
    """Turn repeated NAME=VALUE options into call arguments.

    A name given more than once, or naming an array parameter, becomes a list.
    """
    values: dict[str, list[str]] = {}
    for item in params:
        name, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected NAME=VALUE, got '{item}'", param_hint="--param")
        values.setdefault(name, []).append(value)

    array_names = {p.name for p in endpoint.parameters if p.param_type == "array"}
    array_names |= {f"{p.location.value}.{p.name}" for p in endpoint.parameters if p.param_type == "array"}
    return {
        name: vals if len(vals) > 1 or name in array_names else vals[0]
        for name, vals in values.items()
    }


@click.group()
def main():
    """API Request Builder — turn API operations into request descriptors."""
    pass


def _describe(ep: ApiEndpoint) -> list[str]:
    """Detail lines for one operation: summary, parameters and responses."""
    indent = " " * 8
    lines = []
    if ep.summary or ep.tags:
        tags = f" [{', '.join(ep.tags)}]" if ep.tags else ""
        lines.append(f"{indent}{ep.summary}{tags}".rstrip())
    for p in ep.parameters:
        flags = [p.param_type, p.style.value]
        if p.explode:
            flags.append("explode")
        if p.required:
            flags.append("required")
        line = f"{indent}{p.location.value} {p.name} ({', '.join(flags)})"
        if p.constraints:
            line += " " + ", ".join(f"{k}={v}" for k, v in p.constraints.items())
        if p.description:
            line += f": {p.description}"
        lines.append(line)
    if ep.responses:
        described = [f"{code} {r.get('description', '')}".rstrip() for code, r in ep.responses.items()]
        lines.append(f"{indent}responses: {'; '.join(described)}")
    return lines


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-v", "--verbose", is_flag=True, help="Also show summaries, parameters and responses.")
def operations(doc_path: Path, verbose: bool):
    """List the operations declared in an API document."""
    try:
        endpoints = parse_document(load_document(doc_path))
    except (RequestBuildError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    for ep in endpoints:
        click.echo(f"{ep.method:<7} {ep.path}  {ep.operation_id}")
        if verbose:
            for line in _describe(ep):
                click.echo(line)
    click.echo(f"Found {len(endpoints)} operations.")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.argument("operation_id")
@click.option("-p", "--param", "params", multiple=True, help="Parameter value as NAME=VALUE; repeat a name for multiple values.")
@click.option("--body", default=None, help="Request body as JSON.")
@click.option("--base-url", default=None, help="Base URL used by --expand (default: settings, then the document's server).")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML settings file.")
@click.option("--expand", is_flag=True, help="Also print the URL with all bindings substituted.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.option("--log-level", default=None, help="Logging level (default: from settings).")
def build(
    doc_path: Path,
    operation_id: str,
    params: tuple[str, ...],
    body: str | None,
    base_url: str | None,
    config_path: Path | None,
    expand: bool,
    fmt: str,
    log_level: str | None,
):
    """Build the request descriptor for one operation call."""
    try:
        settings = BuilderSettings.from_yaml(config_path) if config_path else get_settings()
        configure_logging(log_level or settings.log_level)
        doc = load_document(doc_path)
        endpoint = _find_endpoint(parse_document(doc), operation_id)
        arguments = _collect_arguments(params, endpoint)
        payload = json.loads(body) if body is not None else None
        descriptor = RequestBuilder(settings).build(endpoint, arguments, payload)
    except (RequestBuildError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    data = descriptor.model_dump(mode="json")
    if fmt == "yaml":
        click.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), nl=False)
    else:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))

    if expand:
        click.echo(descriptor.expand_url(base_url or settings.base_url or server_url(doc)))
