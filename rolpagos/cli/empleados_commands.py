"""Employee (nomina) CLI commands."""

import json

import click
from pydantic import ValidationError

from rolpagos.sdk import records


@click.group()
def empleados():
    """Manage employee records."""
    pass


@empleados.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include inactive employees")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def empleados_list(show_all, as_json):
    """List employees (active only unless --all)."""
    employees = records.list_employees(active_only=not show_all)

    if as_json:
        click.echo(json.dumps([e.model_dump(mode="json") for e in employees], indent=2))
        return

    if not employees:
        click.echo("No employees found.")
        return

    for e in employees:
        flags = []
        if e.tiene_fondo_reserva:
            flags.append("FR-acum" if e.acumula_fondo_reserva else "FR")
        if e.mensualiza_decimos:
            flags.append("decimos")
        if not e.activo:
            flags.append("inactivo")
        click.echo(
            f"{e.id}  {e.cedula:<12} {e.nombre_completo:<32} "
            f"{e.sueldo_nominal:>10}  {','.join(flags)}"
        )
    click.echo(f"\n{len(employees)} employee(s)")


@empleados.command("add")
@click.option("--cedula", required=True, help="National id")
@click.option("--apellidos", required=True)
@click.option("--nombres", required=True)
@click.option("--cargo", default="", help="Job title")
@click.option("--asignacion", default="", help="Cost centre")
@click.option("--sueldo", "sueldo_nominal", required=True, help="Monthly base salary")
@click.option("--fecha-ingreso", required=True, help="Hire date (YYYY-MM-DD)")
@click.option("--fecha-salida", default=None, help="Termination date (YYYY-MM-DD)")
@click.option("--inactivo", is_flag=True, help="Mark as no longer active")
@click.option("--fondo-reserva/--sin-fondo-reserva", "tiene_fondo_reserva", default=False)
@click.option("--acumula-fondo", "acumula_fondo_reserva", is_flag=True,
              help="Fondo de reserva accrued at IESS instead of paid monthly")
@click.option("--mensualiza-decimos", is_flag=True, help="Pay decimos monthly")
@click.option("--id", "employee_id", default=None, help="Explicit id (default: hash of cedula)")
def empleados_add(employee_id, inactivo, **fields):
    """Add or update an employee.

    Re-adding the same cedula updates the existing record.
    """
    fields["activo"] = not inactivo
    fields["id"] = employee_id
    try:
        employee = records.new_employee(**fields)
    except ValidationError as e:
        raise click.ClickException(str(e))

    path = records.save_employee(employee)
    click.echo(f"Saved {employee.id}: {employee.nombre_completo}")
    click.echo(f"  {path}")


@empleados.command("remove")
@click.argument("employee_id")
def empleados_remove(employee_id):
    """Delete an employee and their payroll rows."""
    if not records.delete_employee(employee_id):
        raise click.ClickException(f"Employee not found: {employee_id}")
    click.echo(f"Removed {employee_id}")
