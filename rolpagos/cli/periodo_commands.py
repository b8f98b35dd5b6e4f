"""Period (datos) CLI commands."""

import click
from pydantic import ValidationError

from rolpagos.sdk import PeriodConfig, records


def _echo_period(period: PeriodConfig) -> None:
    click.echo(f"Periodo:     {period.id}")
    click.echo(f"Empresa:     {period.empresa or '(sin nombre)'}")
    click.echo(f"Mes:         {period.mes}")
    click.echo(f"Fecha corte: {period.fecha_corte.isoformat()}")
    click.echo(f"Días mes:    {period.dias_mes}")


@click.group()
def periodo():
    """Manage pay periods (company, month, cutoff date, days)."""
    pass


@periodo.command("show")
@click.argument("period_id", required=False)
def periodo_show(period_id):
    """Show a period (latest if PERIOD_ID omitted)."""
    try:
        period = records.require_period(period_id)
    except records.RecordNotFoundError as e:
        raise click.ClickException(str(e))
    _echo_period(period)


@periodo.command("list")
def periodo_list():
    """List stored periods, oldest first."""
    periods = records.list_periods()
    if not periods:
        click.echo("No periods stored.")
        return
    for period in periods:
        click.echo(f"{period.id}  {period.fecha_corte.isoformat()}  {period.mes:<10} {period.empresa}")


@periodo.command("set")
@click.option("--fecha-corte", required=True, help="Cutoff date (YYYY-MM-DD)")
@click.option("--empresa", default=None, help="Company name")
@click.option("--mes", default=None, help="Month label (defaults to the cutoff month)")
@click.option("--dias-mes", type=int, default=None, help="Days in the period (default 30)")
@click.option("--id", "period_id", default=None, help="Period id (default YYYY-MM of cutoff)")
def periodo_set(fecha_corte, empresa, mes, dias_mes, period_id):
    """Create or update a period.

    Values not given are kept from the existing period with the same id.

    Example:
        rol-pagos periodo set --fecha-corte 2025-03-31 --empresa "Comercial Andes"
    """
    fields = {"fecha_corte": fecha_corte}
    if period_id:
        fields["id"] = period_id

    try:
        draft = PeriodConfig.model_validate(fields)
    except ValidationError as e:
        raise click.BadParameter(str(e), param_hint="--fecha-corte")

    existing = records.get_period(draft.id)
    merged = existing.model_dump() if existing else {}
    merged.update(id=draft.id, fecha_corte=draft.fecha_corte)
    for key, value in (("empresa", empresa), ("mes", mes), ("dias_mes", dias_mes)):
        if value is not None:
            merged[key] = value

    try:
        period = PeriodConfig.model_validate(merged)
    except ValidationError as e:
        raise click.ClickException(str(e))

    path = records.save_period(period)
    _echo_period(period)
    click.echo(f"Saved to: {path}")


@periodo.command("remove")
@click.argument("period_id")
def periodo_remove(period_id):
    """Delete a period and every payroll input entered for it."""
    if not records.delete_period(period_id):
        raise click.ClickException(f"Period not found: {period_id}")
    click.echo(f"Removed {period_id}")
