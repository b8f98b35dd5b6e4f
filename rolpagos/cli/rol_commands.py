"""Rol de pagos CLI commands.

Thin wrappers over rolpagos.sdk: inputs are stored per employee and
period, rows are recomputed on every show/export.
"""

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from rolpagos.sdk import (
    InvalidInputError,
    PayrollCalculator,
    RolGenerationError,
    compute_employee_row,
    generate_rol,
    load_legal_rules,
    records,
    write_rol_csv,
)
from rolpagos.sdk.rol import resolve_input
from rolpagos.sdk.schemas import INPUT_FIELDS
from .renderers.rol_renderer import render_rol, render_row

# Missing legal rules surface as FileNotFoundError, malformed overrides as ValidationError
SDK_ERRORS = (
    records.RecordNotFoundError,
    InvalidInputError,
    RolGenerationError,
    FileNotFoundError,
    ValidationError,
)
def _decimal(ctx, param, value):
    if value is None:
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"'{value}' is not a number")


def _input_options(func):
    """Attach one --option per PayrollInput field."""
    for name in reversed(INPUT_FIELDS):
        flag = "--" + name.replace("_", "-")
        func = click.option(flag, name, default=None, callback=_decimal)(func)
    return func


@click.group("rol")
def rol():
    """Enter inputs and view the rol de pagos."""
    pass


@rol.command("set")
@click.argument("employee_id")
@click.option("--periodo", "period_id", default=None, help="Period id (default: latest)")
@_input_options
def rol_set(employee_id, period_id, **values):
    """Update payroll inputs for one employee.

    Only the options given are changed; the rest keep their stored value.
    Nothing is saved unless the updated input computes cleanly.

    Example:
        rol-pagos rol set 1a2b3c4d --dias-trabajados 15 --horas-50 4
    """
    try:
        period = records.require_period(period_id)
        employee = records.get_employee(employee_id)
        if employee is None:
            raise records.RecordNotFoundError(f"Employee not found: {employee_id}")

        payroll_input = resolve_input(employee, period)
        for name, value in values.items():
            if value is not None:
                setattr(payroll_input, name, value)

        rules = load_legal_rules(period.fecha_corte.year)
        row = PayrollCalculator(rules).compute(employee, period, payroll_input)
    except SDK_ERRORS as e:
        raise click.ClickException(str(e))

    records.save_payroll_input(period.id, employee.id, payroll_input)
    render_row(Console(), row, employee)


@rol.command("show")
@click.option("--periodo", "period_id", default=None, help="Period id (default: latest)")
@click.option("--empleado", "employee_id", default=None, help="Show a single employee")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def rol_show(period_id, employee_id, as_json):
    """Compute and display the rol de pagos."""
    try:
        if employee_id:
            row = compute_employee_row(employee_id, period_id)
            if as_json:
                click.echo(json.dumps(row.model_dump(mode="json"), indent=2))
            else:
                render_row(Console(), row, records.get_employee(employee_id))
            return
        ledger = generate_rol(period_id)
    except SDK_ERRORS as e:
        raise click.ClickException(str(e))

    if as_json:
        output = {
            "periodo": ledger.period.model_dump(mode="json"),
            "rows": {k: r.model_dump(mode="json") for k, r in ledger.rows.items()},
            "totals": ledger.totals.model_dump(mode="json"),
        }
        click.echo(json.dumps(output, indent=2))
        return

    employees = {e.id: e for e in records.list_employees()}
    render_rol(Console(width=200), ledger, employees)


@rol.command("export")
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--periodo", "period_id", default=None, help="Period id (default: latest)")
def rol_export(output, period_id):
    """Export the rol de pagos to CSV."""
    try:
        ledger = generate_rol(period_id)
    except SDK_ERRORS as e:
        raise click.ClickException(str(e))

    path = write_rol_csv(ledger, Path(output))
    click.echo(f"Wrote {len(ledger)} row(s) to {path}")
