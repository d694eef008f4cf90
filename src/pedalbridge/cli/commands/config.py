"""Config commands - inspect and edit the saved bridge settings."""

import sys
from pathlib import Path
from typing import Optional

import click

from pedalbridge.exceptions import PedalBridgeError
from pedalbridge.models import DEFAULT_CONFIG_PATH, BridgeConfig

from .run import report_error

config_option = click.option(
    '--config',
    'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Config file (default: ~/.pedalbridge/config.json)'
)


def _load(config_path: Optional[Path]) -> BridgeConfig:
    try:
        return BridgeConfig.load_or_default(config_path)
    except PedalBridgeError as e:
        report_error(e, None)
        sys.exit(1)


@click.group(name="config")
def config_group():
    """Configure Pedal Bridge settings."""
    pass


@config_group.command(name="show")
@config_option
@click.option('--field', '-f', default=None, help='Show a single field')
def show_config(config_path: Optional[Path], field: Optional[str]):
    """Display the current configuration."""
    config_obj = _load(config_path)
    values = config_obj.model_dump()

    if field:
        if field not in values:
            raise click.BadParameter(
                f"unknown field (choose from {', '.join(values)})", param_hint="--field"
            )
        click.echo(f"{field}: {values[field]}")
        return

    click.echo(f"Configuration ({config_path or DEFAULT_CONFIG_PATH}):\n")
    for name, value in values.items():
        description = BridgeConfig.model_fields[name].description or ""
        click.echo(f"  {name:<20} {value!s:<12} {description}")


@config_group.command(name="path")
def config_path_command():
    """Print the default config file location."""
    click.echo(str(DEFAULT_CONFIG_PATH))


@config_group.command(name="validate")
@config_option
def validate_config(config_path: Optional[Path]):
    """Check that the config file loads."""
    _load(config_path)
    click.echo("[OK] Configuration is valid")


@config_group.command(name="reset")
@config_option
@click.confirmation_option(prompt='Reset all settings to defaults?')
def reset_config(config_path: Optional[Path]):
    """Reset the config file to defaults."""
    BridgeConfig().save(config_path)
    click.echo("Configuration reset to defaults")
