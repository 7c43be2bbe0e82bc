"""Command line interface for the Mediacat project."""

from __future__ import annotations

import asyncio
import difflib
from pathlib import Path
from typing import Any, Sequence

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from mediacat.catalog import CatalogEntry, CatalogScanner, DirectoryReadError
from mediacat.config import ConfigError, ConfigManager, MediacatConfig
from mediacat.log import configure_logging
from mediacat.view import (
    FILTER_OPTIONS,
    TYPE_LABELS,
    CatalogClient,
    CatalogView,
    FilterState,
    Notifier,
    Stats,
    ViewPhase,
    compute_stats,
    filter_entries,
)

console = Console()

_CATEGORY_CHOICES = [value for _, value in FILTER_OPTIONS]


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        console.print_json(data={"error": {"code": code, "message": message}})
        raise SystemExit(1)

    raise click.ClickException(message) from original


def _emit_message(message: Any, *, quiet: bool) -> None:
    if not quiet:
        console.print(message)


def _without_timestamp(lines: list[str]) -> list[str]:
    return [line for line in lines if not line.startswith("# Last updated:")]


def _load_config(cli_overrides: dict[str, Any] | None = None) -> MediacatConfig:
    """Load the effective configuration and apply its logging level."""
    manager = ConfigManager()
    try:
        config = manager.load(cli_overrides=cli_overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    configure_logging(config.logging.level)
    return config


def _stats_table(stats: Stats) -> Table:
    table = Table(title="Catalog", show_header=True, header_style="bold")
    table.add_column("Total files", justify="right")
    table.add_column("Images", justify="right")
    table.add_column("Videos", justify="right")
    table.add_column("Docs & Other", justify="right")
    table.add_row(str(stats.total), str(stats.image), str(stats.video), str(stats.docs_and_other))
    return table


def _entries_table(entries: Sequence[CatalogEntry], link_prefix: str = "") -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", overflow="fold")
    table.add_column("Type")
    table.add_column("Link", overflow="fold")
    for entry in entries:
        table.add_row(entry.name, TYPE_LABELS[entry.type], link_prefix + entry.url)
    return table


def _listing_payload(
    entries: Sequence[CatalogEntry], filtered: Sequence[CatalogEntry], filters: FilterState
) -> dict[str, Any]:
    return {
        "files": [entry.model_dump() for entry in filtered],
        "stats": compute_stats(entries).model_dump(),
        "filter": filters.model_dump(),
    }


def _render_listing(
    entries: Sequence[CatalogEntry],
    filtered: Sequence[CatalogEntry],
    *,
    quiet: bool,
    link_prefix: str = "",
) -> None:
    _emit_message(_stats_table(compute_stats(entries)), quiet=quiet)
    if not entries:
        _emit_message("[yellow]No media files found.[/yellow]", quiet=quiet)
    elif not filtered:
        _emit_message("[yellow]No files match the current filters.[/yellow]", quiet=quiet)
    else:
        _emit_message(_entries_table(filtered, link_prefix), quiet=quiet)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mediacat")
def cli() -> None:
    """Mediacat catalogs a media directory and serves it as a filterable gallery listing."""


@cli.command()
@click.argument("path", required=False, type=click.Path(path_type=Path))
@click.option(
    "--type", "category", type=click.Choice(_CATEGORY_CHOICES), default="all", show_default=True
)
@click.option("--search", "query", default="", help="Case-insensitive filename substring.")
@click.option("--json", "json_output", is_flag=True, help="Emit the listing as JSON.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
def scan(
    path: Path | None, category: str, query: str, json_output: bool, quiet: bool
) -> None:
    """Scan PATH (default: the configured media directory) and list its catalog."""
    config = _load_config()
    directory = path or Path(config.media.directory).expanduser()
    quiet = quiet or config.cli.quiet_default

    scanner = CatalogScanner.from_settings(config.media)
    try:
        entries = scanner.scan(directory)
    except DirectoryReadError as exc:
        _handle_cli_error(
            str(exc), code="directory_unreadable", json_output=json_output, original=exc
        )
        return

    filters = FilterState(category=category, search=query)  # type: ignore[arg-type]
    filtered = filter_entries(entries, filters)
    if json_output:
        console.print_json(data=_listing_payload(entries, filtered, filters))
        return
    _render_listing(entries, filtered, quiet=quiet)


@cli.command()
@click.option(
    "--directory",
    type=click.Path(file_okay=False, path_type=str),
    help="Media directory to catalog and serve.",
)
@click.option("--host", type=str, help="Interface to bind.")
@click.option("--port", type=int, help="Port to listen on.")
def serve(directory: str | None, host: str | None, port: int | None) -> None:
    """Run the catalog HTTP endpoint."""
    import uvicorn

    from mediacat.api import create_app

    overrides: dict[str, Any] = {}
    if directory is not None:
        overrides["media.directory"] = directory
    if host is not None:
        overrides["server.host"] = host
    if port is not None:
        overrides["server.port"] = port
    config = _load_config(overrides)

    console.print(
        f"[green]Serving {config.media.directory} at "
        f"http://{config.server.host}:{config.server.port}{config.server.endpoint_path}[/green]"
    )
    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


@cli.command()
@click.option("--url", "base_url", type=str, help="Base URL of a running Mediacat server.")
@click.option(
    "--type", "category", type=click.Choice(_CATEGORY_CHOICES), default="all", show_default=True
)
@click.option("--search", "query", default="", help="Case-insensitive filename substring.")
@click.option("--copy", "copy_name", type=str, help="Copy the share link of the named file.")
@click.option("--json", "json_output", is_flag=True, help="Emit the listing as JSON.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
def browse(
    base_url: str | None,
    category: str,
    query: str,
    copy_name: str | None,
    json_output: bool,
    quiet: bool,
) -> None:
    """Fetch the catalog from a server and show stats and the filtered listing."""
    config = _load_config()
    quiet = quiet or config.cli.quiet_default
    client = CatalogClient(
        base_url or config.client.base_url, endpoint_path=config.server.endpoint_path
    )
    view = CatalogView(client, notifier=Notifier(config.client.notification_seconds))

    phase = asyncio.run(view.load())
    if phase is ViewPhase.ERROR_NOTIFIED:
        note = view.notification
        message = note.message if note else "Unable to fetch media files"
        _handle_cli_error(
            f"{message} from {client.base_url}.", code="fetch_failed", json_output=json_output
        )
        return

    view.select_category(category)  # type: ignore[arg-type]
    filtered = view.search(query)

    link: str | None = None
    if copy_name is not None:
        entry = next((item for item in view.entries if item.name == copy_name), None)
        if entry is None:
            _handle_cli_error(
                f"No file named {copy_name!r} in the catalog.",
                code="not_found",
                json_output=json_output,
            )
            return
        link = view.copy_link(entry.url)

    if json_output:
        payload = _listing_payload(view.entries, filtered, view.filters)
        if link is not None:
            payload["copied"] = link
        console.print_json(data=payload)
        return

    _render_listing(view.entries, filtered, quiet=quiet, link_prefix=view.origin)
    note = view.notification
    if link is not None:
        _emit_message(link, quiet=quiet)
    if note is not None:
        _emit_message(f"[cyan]{note.message}[/cyan]", quiet=quiet)


@cli.group()
def config() -> None:
    """Manage Mediacat configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        config = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(config.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    manager.ensure_exists()
    before = manager.read_text().splitlines()

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        manager.set_value(key, parsed_value)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    after = manager.read_text().splitlines()

    diff = list(
        difflib.unified_diff(
            _without_timestamp(before),
            _without_timestamp(after),
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )
    if not diff:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {key}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an interactive editor session.

    Raises:
        click.ClickException: If edited content is invalid or cannot be saved.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")

    if edited is None:
        console.print("[yellow]Edit cancelled; no changes applied.[/yellow]")
        return

    if edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc

    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        manager.replace_overrides(parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point."""
    cli()


if __name__ == "__main__":
    main()
