"""Command line interface for the FileLight project."""

from __future__ import annotations

import difflib
import logging
from typing import Any

import click
import yaml
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from filelight.browser import (
    AuthorizationContext,
    BrowseRequest,
    BrowseResult,
    FileBrowser,
    MutationRequest,
)
from filelight.config import ConfigError, ConfigManager, FileLightConfig, resolve_with_precedence
from filelight.paths import ConfinementError

console = Console()

SORT_CHOICES = ["name", "date", "size", "type", "description"]


def _handle_cli_error(
    message: str,
    *,
    code: str,
    json_output: bool,
    details: Any | None = None,
    original: Exception | None = None,
) -> None:
    """Emit a standardized error and terminate the command appropriately.

    Args:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        json_output: Indicates whether JSON mode is active.
        details: Optional structured details to include in the payload.
        original: Original exception for chaining when not using JSON.

    Raises:
        SystemExit: When emitting JSON output to terminate the command.
        click.ClickException: For non-JSON flows to surface the error.
    """

    if json_output:
        payload: dict[str, Any] = {"error": {"code": code, "message": message}}
        if details is not None:
            payload["error"]["details"] = details
        console.print_json(data=payload)
        raise SystemExit(1)

    if isinstance(original, click.ClickException):
        raise original

    raise click.ClickException(message) from original


def _configure_logging(level: str) -> None:
    """Route library logging through Rich on stderr at ``level``."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load_config() -> FileLightConfig:
    """Load the effective configuration and configure logging from it.

    Raises:
        click.ClickException: If the configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        config = manager.load()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    _configure_logging(config.logging.level)
    return config


def _open_browser(config: FileLightConfig, root: str | None, *, json_output: bool) -> FileBrowser:
    try:
        return FileBrowser(config.browser, root=root)
    except ConfinementError as exc:
        _handle_cli_error(str(exc), code="invalid_root", json_output=json_output, original=exc)
        raise


def _assign_nested(target: dict[str, Any], path: list[str], value: Any) -> None:
    """Assign a nested value within a dictionary for a dotted path.

    Args:
        target: Mapping to mutate in-place.
        path: Sequence of keys representing the nested location.
        value: Value to assign at the nested location.

    Raises:
        ConfigError: If a non-mapping value is encountered along the path.
    """

    node = target
    for segment in path[:-1]:
        existing = node.get(segment)
        if existing is None:
            existing = {}
            node[segment] = existing
        elif not isinstance(existing, dict):
            raise ConfigError(
                f"Cannot assign into '{segment}' because it is not a mapping in the config file."
            )
        node = existing
    node[path[-1]] = value


def _render_listing(result: BrowseResult) -> Table:
    """Build the Rich table shown by `filelight ls`."""
    crumbs = " / ".join(["~", *(crumb.name for crumb in result.breadcrumb)])
    title = escape(crumbs)
    if result.query:
        title += f" [dim](search: {escape(result.query)})[/dim]"
    table = Table(title=title, title_justify="left")
    arrow = "▲" if result.order == "asc" else "▼"
    for column, header, justify in (
        ("name", "Name", "left"),
        ("size", "Size", "right"),
        ("date", "Modified", "left"),
        ("type", "Type", "left"),
        ("description", "Description", "left"),
    ):
        label = f"{header} {arrow}" if column == result.sort else header
        table.add_column(label, justify=justify, no_wrap=column != "description")

    for entry in result.entries:
        name = escape(entry.name)
        if entry.is_directory:
            name = f"[bold blue]{name}/[/bold blue]"
        table.add_row(
            name,
            entry.display_size,
            entry.modified_at.strftime("%Y-%m-%d %H:%M"),
            escape(entry.type_label),
            escape(entry.description or ""),
        )
    return table


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="filelight")
def cli() -> None:
    """FileLight browses a confined directory tree and manages DESCRIPT.ION descriptions.

    Returns:
        None: This function is invoked for its side effects.
    """


@cli.command("ls")
@click.argument("directory", required=False, default="")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=str),
    help="Browse root (defaults to browser.root from the configuration).",
)
@click.option(
    "-q", "--query", default="", help="Only show entries whose name or description matches."
)
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice(SORT_CHOICES, case_sensitive=False),
    default=None,
    help="Column to sort by.",
)
@click.option(
    "--order",
    type=click.Choice(["asc", "desc"], case_sensitive=False),
    default=None,
    help="Sort direction.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit the listing as JSON.")
def list_directory(
    directory: str,
    root: str | None,
    query: str,
    sort_key: str | None,
    order: str | None,
    json_output: bool,
) -> None:
    """List DIRECTORY, a path relative to the browse root.

    Args:
        directory: Root-relative directory to list; empty lists the root.
        root: Optional browse root overriding the configuration.
        query: Case-insensitive search text.
        sort_key: Sort column.
        order: Sort direction.
        json_output: When True, emit JSON instead of a table.

    Raises:
        click.ClickException: If the directory is rejected or cannot be listed.
    """
    config = _load_config()
    browser = _open_browser(config, root, json_output=json_output)

    request = BrowseRequest(directory=directory, query=query, sort=sort_key, order=order)
    try:
        result = browser.browse(request)
    except ConfinementError as exc:
        _handle_cli_error("Forbidden", code="forbidden", json_output=json_output, original=exc)
        return
    except OSError as exc:
        _handle_cli_error(
            f"Unable to list {directory or '/'}: {exc}",
            code="listing_failed",
            json_output=json_output,
            original=exc,
        )
        return

    if json_output:
        console.print_json(data=result.model_dump(mode="json"))
        return

    console.print(_render_listing(result))
    files = sum(1 for entry in result.entries if not entry.is_directory)
    console.print(
        f"[green]{len(result.entries) - files} director(ies), {files} file(s).[/green]"
    )


@cli.command()
@click.argument("directory")
@click.argument("filename")
@click.argument("description", required=False, default="")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=str),
    help="Browse root (defaults to browser.root from the configuration).",
)
@click.option("--json", "json_output", is_flag=True, help="Emit the result as JSON.")
@click.option("--quiet", is_flag=True, help="Suppress non-error output.")
@click.pass_context
def describe(
    ctx: click.Context,
    directory: str,
    filename: str,
    description: str,
    root: str | None,
    json_output: bool,
    quiet: bool,
) -> None:
    """Set the DESCRIPTION of FILENAME inside DIRECTORY; omit it to remove the entry.

    DIRECTORY is relative to the browse root; use "" for the root itself.

    Args:
        ctx: Click context for parameter source inspection.
        directory: Root-relative directory owning the sidecar file.
        filename: Entry whose description changes.
        description: New description; empty removes it.
        root: Optional browse root overriding the configuration.
        json_output: When True, emit JSON instead of text.
        quiet: When True, suppress the confirmation message.

    Raises:
        click.ClickException: If the update is rejected or cannot be written.
    """
    config = _load_config()
    explicit_quiet = ctx.get_parameter_source("quiet") == ParameterSource.COMMANDLINE
    quiet_enabled = quiet if explicit_quiet else config.cli.quiet_default
    browser = _open_browser(config, root, json_output=json_output)

    request = MutationRequest(directory=directory, filename=filename, description=description)
    result = browser.update_description(request, AuthorizationContext(is_admin=True))

    if not result.success:
        _handle_cli_error(
            result.error or "Description update failed",
            code="update_failed",
            json_output=json_output,
        )
        return

    if json_output:
        console.print_json(data=result.model_dump(mode="json"))
        return

    if quiet_enabled:
        return
    action = "Updated" if description.strip() else "Removed"
    console.print(f"[green]{action} description for {escape(filename)}.[/green]")


@cli.group()
def config() -> None:
    """Manage FileLight configuration files and overrides.

    Returns:
        None: This function is invoked for its side effects.
    """


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules.

    Args:
        no_env: If True, ignore environment-derived overrides.

    Raises:
        click.ClickException: If configuration cannot be loaded.
    """
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        loaded = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(loaded.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path describing the configuration field to update.
        value: YAML-literal value to write into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    manager.ensure_exists()

    before = manager.read_text().splitlines()
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'browser.root'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        file_data = manager.load_file_overrides()
        _assign_nested(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=FileLightConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()

    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )

    if not any(_is_value_change(line) for line in diff):
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


def _is_value_change(line: str) -> bool:
    """Return whether a diff line changes content other than the timestamp header."""
    if line.startswith(("+++", "---")) or not line.startswith(("+", "-")):
        return False
    return not line[1:].startswith("# Last updated:")


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
        resolve_with_precedence(defaults=FileLightConfig(), file_overrides=parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)
    console.print("[green]Configuration updated successfully.[/green]")


def main() -> None:
    """Invoke the Click CLI as the console script entry point.

    Returns:
        None: This function is invoked for its side effects.
    """
    cli()


if __name__ == "__main__":
    main()
