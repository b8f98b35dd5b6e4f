"""Rol de Pagos CLI - Command-line interface for monthly payroll statements."""

import click

from rolpagos import __version__
from rolpagos.sdk import SettingsError

from .settings_commands import settings as settings_group
from .periodo_commands import periodo as periodo_group
from .empleados_commands import empleados as empleados_group
from .rol_commands import rol as rol_group
from .reglas_commands import reglas as reglas_group


@click.group()
@click.version_option(version=__version__, prog_name="rol-pagos")
def cli():
    """Rol de Pagos - Ecuadorian monthly payroll statements.

    Typical flow:

    \b
    1. rol-pagos periodo set --fecha-corte 2025-03-31 --empresa "Mi Empresa"
    2. rol-pagos empleados add --cedula ... --sueldo 700 --fecha-ingreso ...
    3. rol-pagos rol set <employee-id> --horas-50 4 --bonificacion 20
    4. rol-pagos rol show

    Configuration is loaded from (in order):

    \b
    1. ROL_PAGOS_CONFIG_PATH environment variable
    2. ~/.config/rol-pagos/settings.json (XDG default)
    """
    pass


cli.add_command(settings_group)
cli.add_command(periodo_group)
cli.add_command(empleados_group)
cli.add_command(rol_group)
cli.add_command(reglas_group)


def main():
    """Entry point for the CLI."""
    try:
        cli()
    except SettingsError as e:
        raise SystemExit(f"Error: {e}")


if __name__ == "__main__":
    main()
