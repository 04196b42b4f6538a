"""CLI: panel config show|set|reset"""

import json
from typing import Any, Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from assistant_panel.config import SessionSettings, load_config, save_config

console = Console()

NULL_VALUES = ("none", "null", "")


def _parse_value(raw: str) -> Optional[str]:
    return None if raw.strip().lower() in NULL_VALUES else raw


@click.group()
def config():
    """Session settings."""


@config.command("show")
@click.option("--json-output", "--json", is_flag=True)
def config_show(json_output: bool):
    """Show effective settings."""
    try:
        settings = SessionSettings.model_validate(load_config())
    except ValidationError as e:
        raise click.ClickException(f"Config file is invalid: {e}")
    if json_output:
        click.echo(settings.model_dump_json(indent=2))
        return
    table = Table(title="Session settings")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, json.dumps(value))
    console.print(table)


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set KEY to VALUE ("none" clears optional keys)."""
    if key not in SessionSettings.model_fields:
        raise click.BadParameter(
            f"unknown key {key!r}; expected one of {', '.join(SessionSettings.model_fields)}",
            param_hint="KEY",
        )
    cfg: dict[str, Any] = load_config()
    cfg[key] = _parse_value(value)
    try:
        settings = SessionSettings.model_validate(cfg)
    except ValidationError as e:
        raise click.ClickException(f"Invalid value for {key}: {e}")
    cfg[key] = getattr(settings, key)
    save_config(cfg)
    console.print(f"[green]{key} = {json.dumps(cfg[key])}[/green]")


@config.command("reset")
def config_reset():
    """Restore default settings."""
    save_config({})
    console.print("[green]Settings reset.[/green]")
