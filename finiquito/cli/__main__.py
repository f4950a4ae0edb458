"""Finiquito Calc CLI - Command-line interface for employee settlements."""

import click

from finiquito import __version__

from .calc_commands import calc as calc_command
from .settings_commands import settings as settings_group


@click.group()
@click.version_option(version=__version__, prog_name="finiquito")
def cli():
    """Finiquito Calc - Mexican employment settlement calculator.

    Computes finiquito (voluntary separation) and liquidacion (separation
    with severance) amounts from a tab-separated roster, including the
    ISR withholding and IMSS worker contributions.

    Economic values (UMA, minimum wage) are loaded from (in order):

    \b
    1. --uma / --minimum-wage options on 'calc'
    2. settings.json (FINIQUITO_CONFIG_PATH or ~/.config/finiquito/)
    3. Defaults from the packaged statutory tables

    Run 'finiquito settings show' to see the effective values.
    """
    pass


cli.add_command(calc_command)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
