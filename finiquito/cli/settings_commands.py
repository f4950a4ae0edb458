"""Settings CLI commands for Finiquito Calc.

Manages settings.json - the UMA and minimum wage used by 'calc'.
"""

import click

from finiquito.sdk import (
    clear_setting,
    default_economic_config,
    get_setting,
    get_settings_path,
    load_settings,
    set_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - uma: current UMA value
    - minimum_wage: general daily minimum wage
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and the effective economic values."""
    settings_path = get_settings_path()
    current = load_settings()
    defaults = default_economic_config()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if current:
        click.echo("Current settings:")
        for key, value in current.items():
            click.echo(f"  {key}: {value}")
        click.echo()

    click.echo("Effective values:")
    for key in ("uma", "minimum_wage"):
        if key in current:
            click.echo(f"  {key}: {current[key]}")
        else:
            click.echo(f"  {key}: {getattr(defaults, key)} (default)")


def _set_positive_amount(key: str, value, clear: bool) -> None:
    """Show, set or clear one economic value."""
    default = getattr(default_economic_config(), key)

    if clear:
        if clear_setting(key):
            click.echo(f"Cleared {key} setting.")
        else:
            click.echo(f"{key} was not set.")
        click.echo(f"{key} is now: {default} (default)")
        return

    if value is None:
        current = get_setting(key)
        if current is not None:
            click.echo(f"Current {key}: {current}")
        else:
            click.echo(f"No custom {key} set. Using default: {default}")
        return

    if value <= 0:
        raise click.ClickException(f"{key} must be greater than zero, got {value}")

    path = set_setting(key, value)
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("uma")
@click.argument("value", required=False, type=float)
@click.option("--clear", is_flag=True, help="Clear custom UMA, revert to the table default")
def settings_uma(value, clear):
    """Set or clear the UMA value.

    \b
    Examples:
        finiquito settings uma 117.31
        finiquito settings uma --clear
    """
    _set_positive_amount("uma", value, clear)


@settings.command("minimum-wage")
@click.argument("value", required=False, type=float)
@click.option("--clear", is_flag=True, help="Clear custom minimum wage, revert to the table default")
def settings_minimum_wage(value, clear):
    """Set or clear the general daily minimum wage.

    \b
    Examples:
        finiquito settings minimum-wage 315.04
        finiquito settings minimum-wage --clear
    """
    _set_positive_amount("minimum_wage", value, clear)
