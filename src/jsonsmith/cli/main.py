"""
Main CLI entry point for jsonsmith.

Provides the command-line interface using Click. Document commands are
thin wrappers over the same tools the MCP server exposes.
"""

import asyncio as _asyncio
import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click

import jsonsmith
import jsonsmith.config as config
import jsonsmith.logging as jsonsmith_logging
import jsonsmith.tools as tools

_logger = _logging.getLogger(__name__)

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def _run_async(coro: _typing.Coroutine[_typing.Any, _typing.Any, _typing.Any]) -> _typing.Any:
    """Run an async coroutine synchronously."""
    return _asyncio.run(coro)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(jsonsmith.__version__, "-v", "--version", prog_name="jsonsmith")
@_click.option(
    "--log-level",
    type=_click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Log level for stderr logging (default: logging.level from config)",
)
@_click.pass_context
def cli(ctx: _click.Context, log_level: str | None) -> None:
    """
    jsonsmith - edit JSON documents by dot-notation path.

    \b
    Examples:
        jsonsmith get en.json common.welcome          # Read a value
        jsonsmith set fr.json common.bye '"Au revoir"' # Write a value
        jsonsmith merge fr.json '{"common": {"hi": "Salut"}}'
        jsonsmith dedupe messy.json --dry-run         # List duplicate keys
        jsonsmith serve                               # Run the MCP server
    """
    try:
        settings = config.Settings()
    except config.ConfigFileError as e:
        raise _click.ClickException(str(e)) from None

    jsonsmith_logging.configure_logging(log_level or settings.logging.level)

    unknown = settings.collect_all_extra_fields()
    if unknown:
        _logger.warning("Unknown config fields ignored: %s", ", ".join(sorted(unknown)))

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# =============================================================================
# Document Commands
# =============================================================================


def _parse_cli_value(text: str) -> _typing.Any:
    """Parse a command-line value as JSON, falling back to the raw string."""
    try:
        return _json.loads(text)
    except _json.JSONDecodeError:
        return text


def _document_path(file: str) -> str:
    """Command-line document paths are relative to the working directory."""
    return str(_pathlib.Path(file).expanduser().absolute())


def _run_tool(
    ctx: _click.Context,
    tool_name: str,
    tool_input: dict[str, _typing.Any],
) -> tools.ToolResult:
    """Dispatch a tool call; echo the error and exit 1 on failure."""
    settings: config.Settings = ctx.obj["settings"]
    dispatcher = tools.create_dispatcher(settings, source="cli")
    try:
        result: tools.ToolResult = _run_async(dispatcher.execute(tool_name, tool_input))
    finally:
        dispatcher.close()

    if not result.success:
        _click.echo(f"Error: {result.error}", err=True)
        raise SystemExit(1)
    return result


@cli.command(name="get")
@_click.argument("file")
@_click.argument("path")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
@_click.pass_context
def get_cmd(ctx: _click.Context, file: str, path: str, use_color: bool | None) -> None:
    """Print the value at PATH in FILE as JSON."""
    result = _run_tool(
        ctx,
        "read_json_value",
        {"file_path": _document_path(file), "path": path},
    )
    color_enabled, force_color = _should_use_color(use_color)
    _print_syntax(result.output, "json", color=color_enabled, force_color=force_color)


@cli.command(name="set")
@_click.argument("file")
@_click.argument("path")
@_click.argument("value")
@_click.pass_context
def set_cmd(ctx: _click.Context, file: str, path: str, value: str) -> None:
    """Write VALUE at PATH in FILE.

    VALUE is parsed as JSON; anything that is not valid JSON is written
    as a string.
    """
    result = _run_tool(
        ctx,
        "write_json_value",
        {"file_path": _document_path(file), "path": path, "value": _parse_cli_value(value)},
    )
    _click.echo(result.output)


@cli.command(name="delete")
@_click.argument("file")
@_click.argument("path")
@_click.pass_context
def delete_cmd(ctx: _click.Context, file: str, path: str) -> None:
    """Delete the key at PATH in FILE."""
    result = _run_tool(
        ctx,
        "delete_json_value",
        {"file_path": _document_path(file), "path": path},
    )
    _click.echo(result.output)


@cli.command(name="merge")
@_click.argument("file")
@_click.argument("source")
@_click.option("--path", "json_path", default=None, help="Merge into the sub-tree at this path")
@_click.pass_context
def merge_cmd(ctx: _click.Context, file: str, source: str, json_path: str | None) -> None:
    """Deep-merge SOURCE into FILE.

    SOURCE is JSON text, or @FILE to read the JSON from a file.
    """
    if source.startswith("@"):
        try:
            source = _pathlib.Path(source[1:]).read_text(encoding="utf-8")
        except OSError as e:
            raise _click.ClickException(f"Cannot read {source[1:]}: {e}") from None

    try:
        value = _json.loads(source)
    except _json.JSONDecodeError as e:
        raise _click.ClickException(f"Invalid JSON source: {e}") from None

    tool_input: dict[str, _typing.Any] = {"file_path": _document_path(file), "value": value}
    if json_path is not None:
        tool_input["path"] = json_path
    result = _run_tool(ctx, "merge_json_value", tool_input)
    _click.echo(result.output)


@cli.command(name="dedupe")
@_click.argument("file")
@_click.option("--dry-run", is_flag=True, help="List duplicate keys without rewriting FILE")
@_click.pass_context
def dedupe_cmd(ctx: _click.Context, file: str, dry_run: bool) -> None:
    """Merge duplicate keys in FILE (later occurrences win on conflicts)."""
    result = _run_tool(
        ctx,
        "merge_duplicate_keys",
        {"file_path": _document_path(file), "dry_run": dry_run},
    )
    _click.echo(result.output)


# =============================================================================
# Config Commands
# =============================================================================


@cli.group()
def config_cmd() -> None:
    """Configuration management commands."""
    pass


# Register config_cmd with the name "config" to avoid shadowing the module
cli.add_command(config_cmd, name="config")


@config_cmd.command(name="show")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option("--section", type=str, default=None, help="Show specific section only")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
@_click.pass_context
def config_show(
    ctx: _click.Context,
    as_json: bool,
    section: str | None,
    use_color: bool | None,
) -> None:
    """Show effective configuration from all sources.

    \b
    Examples:
        jsonsmith config show                    # YAML (colorized on a TTY)
        jsonsmith config show --json             # JSON
        jsonsmith config show --section sandbox  # One section
    """
    import yaml as _yaml

    settings: config.Settings = ctx.obj["settings"]
    color_enabled, force_color = _should_use_color(use_color)

    full_config = settings.model_dump(mode="json")

    if section:
        if section not in full_config:
            raise _click.ClickException(f"Unknown section: {section}")
        full_config = {section: full_config[section]}

    if as_json:
        _click.echo(_json.dumps(full_config, indent=2))
    else:
        yaml_text = _yaml.dump(full_config, default_flow_style=False, sort_keys=False)
        _print_syntax(yaml_text, "yaml", color=color_enabled, force_color=force_color)


@config_cmd.command(name="path")
@_click.option("--all", "show_all", is_flag=True, help="Show all paths even if not found")
def config_path(show_all: bool) -> None:
    """Show configuration file paths and their status."""
    import jsonsmith.config.sources as config_sources

    paths = [
        ("Built-in defaults", config_sources.get_builtin_defaults_path()),
        ("User config", config_sources.get_user_config_path()),
        ("Project config", config_sources.get_project_config_path(config.find_project_root())),
    ]

    for name, path in paths:
        exists = path.exists()
        if exists or show_all:
            status = "✓" if exists else "✗"
            _click.echo(f"{status} {name}: {path}")


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. JSONSMITH_COLOR env var (1=on, 0=off)
    3. NO_COLOR env var (if set, disable color)
    4. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
        force_color is True when color was explicitly requested (not auto-detected).
    """
    import os as _os_local
    import sys as _sys_local

    if cli_flag is not None:
        return (cli_flag, cli_flag)

    env_color = _os_local.environ.get("JSONSMITH_COLOR")
    if env_color is not None:
        enabled = env_color.lower() in ("1", "true", "yes", "on")
        return (enabled, enabled)

    if _os_local.environ.get("NO_COLOR") is not None:
        return (False, False)

    return (_sys_local.stdout.isatty(), False)


def _print_syntax(
    text: str,
    lexer: str,
    *,
    color: bool = True,
    force_color: bool = False,
) -> None:
    """Print JSON or YAML text, optionally with syntax highlighting."""
    if not color:
        _click.echo(text)
        return

    import rich.console as _rich_console
    import rich.syntax as _rich_syntax

    # Forcing color must also override NO_COLOR / FORCE_COLOR=0
    console = _rich_console.Console(
        force_terminal=force_color,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    console.print(
        _rich_syntax.Syntax(text, lexer, theme="monokai", background_color="default")
    )


# =============================================================================
# Tool Commands
# =============================================================================


@cli.group()
def tools_cmd() -> None:
    """Tool listing and direct execution."""
    pass


# Register tools_cmd with the name "tools" to avoid shadowing the module
cli.add_command(tools_cmd, name="tools")


@tools_cmd.command(name="list")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def tools_list(ctx: _click.Context, json_output: bool) -> None:
    """List all available tools."""
    registry = tools.build_registry_from_settings(ctx.obj["settings"])

    if json_output:
        tool_list = [
            {
                "name": t.name,
                "description": t.description,
                "categories": t.categories,
                "modifies_documents": t.requires_permission,
            }
            for t in registry.list_tools()
        ]
        _click.echo(_json.dumps(tool_list, indent=2))
    else:
        _click.echo("Available Tools:")
        for t in registry.list_tools():
            _click.echo(f"  {t.name}: {t.description[:60]}...")


@tools_cmd.command(name="schema")
@_click.argument("tool_name")
@_click.pass_context
def tools_schema(ctx: _click.Context, tool_name: str) -> None:
    """Show the input schema for a tool (always JSON)."""
    registry = tools.build_registry_from_settings(ctx.obj["settings"])

    try:
        tool = registry.get_or_raise(tool_name)
    except KeyError as e:
        _click.echo(_json.dumps({"error": str(e)}, indent=2))
        raise SystemExit(1) from None

    _click.echo(_json.dumps(tool.to_api_format(), indent=2))


@tools_cmd.command(name="exec")
@_click.argument("tool_name")
@_click.option("--input", "input_json", required=True, help="Tool input as JSON string")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def tools_exec(
    ctx: _click.Context,
    tool_name: str,
    input_json: str,
    json_output: bool,
) -> None:
    """Execute a tool by name with raw JSON input."""
    try:
        tool_input = _json.loads(input_json)
    except _json.JSONDecodeError as e:
        if json_output:
            _click.echo(_json.dumps({"error": f"Invalid JSON: {e}"}, indent=2))
        else:
            _click.echo(f"Error: Invalid JSON input: {e}", err=True)
        raise SystemExit(1) from None

    settings: config.Settings = ctx.obj["settings"]
    dispatcher = tools.create_dispatcher(settings, source="cli")
    try:
        result: tools.ToolResult = _run_async(dispatcher.execute(tool_name, tool_input))
    finally:
        dispatcher.close()

    if json_output:
        _click.echo(_json.dumps(result.to_dict(), indent=2))
        if not result.success:
            raise SystemExit(1)
    elif result.success:
        _click.echo(result.output)
    else:
        _click.echo(f"Error: {result.error}", err=True)
        raise SystemExit(1)


# =============================================================================
# MCP Server
# =============================================================================


@cli.command(name="serve")
@_click.pass_context
def serve_cmd(ctx: _click.Context) -> None:
    """Run the MCP server on stdio."""
    import jsonsmith.server as server

    server.run_server(ctx.obj["settings"])


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="jsonsmith")


if __name__ == "__main__":
    main()
