"""pkggodev - command line interface for pkg.go.dev"""

import json
from typing import Any, List

import click
from pydantic import BaseModel

from pkggodev.core.config import settings
from pkggodev.core.errors import PkgGoDevError
from pkggodev.core.log import configure_logging
from pkggodev.services.client import PkgGoDevClient

FORMATS = ("pretty", "json")


def _label(name: str, color: bool) -> str:
    label = name + ":"
    return click.style(label, bold=True) if color else label


def format_record(record: BaseModel, color: bool = False) -> str:
    """Aligned 'field: value' rows for one record."""
    data = record.model_dump()
    width = max((len(k) for k in data), default=0) + 1
    lines = []
    for key, value in data.items():
        padding = " " * (width - len(key) - 1)
        lines.append(f"{_label(key, color)}{padding} {value}")
    return "\n".join(lines)


def format_pretty(value: Any, color: bool = False) -> str:
    if isinstance(value, BaseModel):
        return format_record(value, color)
    if isinstance(value, list):
        if value and isinstance(value[0], BaseModel):
            return "\n\n".join(format_record(v, color) for v in value)
        return "\n".join(str(v) for v in value)
    raise click.ClickException(f"unable to pretty print value of type '{type(value).__name__}'")


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return value


def emit(ctx: click.Context, value: Any):
    fmt = ctx.obj["format"]
    if fmt == "json":
        click.echo(json.dumps(_to_jsonable(value)))
    else:
        color = click.get_text_stream("stdout").isatty()
        click.echo(format_pretty(value, color))


def _client(ctx: click.Context) -> PkgGoDevClient:
    return ctx.obj["client_factory"]()


@click.group()
@click.option("--format", "-f", "fmt", type=click.Choice(FORMATS), default="pretty", show_default=True,
              help="Output format")
@click.option("--base-url", default=None, help="pkg.go.dev mirror to scrape")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and parsing details")
@click.pass_context
def main(ctx: click.Context, fmt: str, base_url: str, verbose: bool) -> None:
    """CLI interface for pkg.go.dev"""
    configure_logging("DEBUG" if verbose else settings.LOG_LEVEL)
    ctx.ensure_object(dict)
    ctx.obj["format"] = fmt
    ctx.obj.setdefault("client_factory", lambda: PkgGoDevClient(base_url=base_url))


@main.command("imported-by")
@click.argument("package")
@click.pass_context
def imported_by(ctx: click.Context, package: str) -> None:
    """Show the packages that import the given package"""
    try:
        result = _client(ctx).imported_by(package)
    except PkgGoDevError as e:
        raise click.ClickException(str(e))
    emit(ctx, result.imported_by)


@main.command()
@click.argument("query")
@click.option("--limit", default=settings.SEARCH_LIMIT, show_default=True, type=click.IntRange(min=1),
              help="Maximum number of results")
@click.pass_context
def search(ctx: click.Context, query: str, limit: int) -> None:
    """Search for packages"""
    try:
        result = _client(ctx).search(query, limit=limit)
    except PkgGoDevError as e:
        raise click.ClickException(str(e))
    emit(ctx, result.results)


@main.command()
@click.argument("package")
@click.pass_context
def versions(ctx: click.Context, package: str) -> None:
    """Show version information for the given package"""
    try:
        result = _client(ctx).versions(package)
    except PkgGoDevError as e:
        raise click.ClickException(str(e))
    emit(ctx, result.versions)


@main.command("package-info")
@click.argument("packages", nargs=-1, required=True)
@click.pass_context
def package_info(ctx: click.Context, packages: List[str]) -> None:
    """Show package information for the given package(s)"""
    client = _client(ctx)
    for package in packages:
        try:
            result = client.describe_package(package)
        except PkgGoDevError as e:
            raise click.ClickException(str(e))
        emit(ctx, result)


if __name__ == "__main__":
    main()
