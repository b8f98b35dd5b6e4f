"""Legal parameters CLI commands."""

import datetime

import click
from pydantic import ValidationError

from rolpagos.sdk import get_available_years, load_legal_rules


@click.group()
def reglas():
    """Show legal parameters (IESS rate, SBU, hours per day)."""
    pass


@reglas.command("show")
@click.argument("year", required=False, type=int)
def reglas_show(year):
    """Show effective legal rules for YEAR (default: current year).

    Includes any overrides from settings.json 'legal_rules'.
    """
    year = year or datetime.date.today().year
    try:
        rules = load_legal_rules(year)
    except FileNotFoundError as e:
        raise click.ClickException(str(e))
    except ValidationError as e:
        raise click.ClickException(f"Invalid legal rules for {year}:\n{e}")

    click.echo(f"Reglas legales {rules.year}")
    click.echo(f"  Aporte personal IESS:     {rules.aporte_personal_rate}")
    click.echo(f"  Salario básico unificado: {rules.salario_basico_unificado}")
    click.echo(f"  Horas por día:            {rules.horas_por_dia}")
    click.echo(f"  Recargo 50% / 100%:       {rules.recargo_50} / {rules.recargo_100}")
    click.echo(f"\nBundled years: {', '.join(str(y) for y in sorted(get_available_years()))}")
