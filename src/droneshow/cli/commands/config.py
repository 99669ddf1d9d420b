"""
Config command: show, change and reset application settings.

Keys are AppConfig field names; nested settings use dots:

\b
    droneshow config set default_altitude 25
    droneshow config set flight.max_speed 12
    droneshow config set draw_color '#00ff00'
"""

import json

import click
from pydantic import ValidationError

from droneshow.cli.session import command_errors
from droneshow.exceptions import wrap_pydantic_error
from droneshow.model_manager import ModelManagerService
from droneshow.models import AppConfig, Color
from droneshow.models.config import DEFAULT_CONFIG_PATH


def _service(ctx: click.Context) -> ModelManagerService[AppConfig]:
    root = ctx.find_root()
    path = (root.obj or {}).get("config_path") or DEFAULT_CONFIG_PATH
    return ModelManagerService[AppConfig](AppConfig, AppConfig.load_or_default(path), default_path=path)


def _display(value) -> str:
    if isinstance(value, Color):
        return value.to_hex()
    return str(value)


def _echo_fields(values: dict, prefix: str = "") -> None:
    for key, value in values.items():
        if isinstance(value, dict):
            _echo_fields(value, f"{prefix}{key}.")
        else:
            click.echo(f"  {prefix}{key}: {value}")


@click.group(name="config", invoke_without_command=True)
@click.pass_context
def config(ctx: click.Context):
    """Show or change droneshow settings."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(show)


@config.command(name="show")
@click.option("--field", "-f", type=str, default=None, help="Show one (dotted) field")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
@command_errors
def show(ctx: click.Context, field: str | None, as_json: bool):
    """Display the current configuration."""
    service = _service(ctx)
    if field:
        if not service.has_field(field):
            raise ValueError(f"Unknown config field: {field}")
        click.echo(_display(service.get(field)))
        return

    values = service.get_all()
    if as_json:
        click.echo(json.dumps(values, indent=2))
        return
    click.echo(f"Configuration ({service.default_path}):")
    _echo_fields(values)


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
@command_errors
def set_value(ctx: click.Context, key: str, value: str):
    """Set KEY to VALUE and save."""
    service = _service(ctx)
    if not service.has_field(key):
        raise ValueError(f"Unknown config field: {key}")
    try:
        service.set(key, value)
    except ValidationError as e:
        raise wrap_pydantic_error(e, str(service.default_path)) from e
    service.save()
    click.echo(f"{key} = {_display(service.get(key))}")


@config.command(name="reset")
@click.option("--yes", "-y", is_flag=True, help="Don't ask for confirmation")
@click.pass_context
@command_errors
def reset(ctx: click.Context, yes: bool):
    """Restore all settings to their defaults."""
    if not yes:
        click.confirm("Reset all settings to defaults?", abort=True)
    service = _service(ctx)
    service.reset()
    service.save()
    click.echo("Configuration reset to defaults.")
