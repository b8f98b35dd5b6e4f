"""Rich renderer for rol de pagos output.

Transforms SDK ledgers and rows into formatted Rich tables. Amounts are
rounded to cents for display only; the SDK keeps full precision.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from rolpagos.sdk.payroll import PayrollLedger
from rolpagos.sdk.schemas import EmployeeRecord, PayrollRow

CENT = Decimal("0.01")

# (field, header) in statement order
ROL_COLUMNS = [
    ("dias_trabajados", "Días"),
    ("sueldo", "Sueldo"),
    ("valor_horas_50", "H. 50%"),
    ("valor_horas_100", "H. 100%"),
    ("bonificacion", "Bonif."),
    ("viaticos", "Viáticos"),
    ("decimo_tercero", "XIII"),
    ("decimo_cuarto", "XIV"),
    ("total_ganado", "Total ganado"),
    ("aporte_personal", "Aporte IESS"),
    ("total_descuentos", "Descuentos"),
    ("subtotal", "Subtotal"),
    ("valor_fondo_reserva", "F. reserva"),
    ("neto_recibir", "Neto a recibir"),
]


def fmt_money(amount: Decimal) -> str:
    """Round half-up to cents with thousands separators."""
    return f"{amount.quantize(CENT, rounding=ROUND_HALF_UP):,}"


def render_rol(
    console: Console,
    ledger: PayrollLedger,
    employees: Optional[Dict[str, EmployeeRecord]] = None,
) -> None:
    """Render a full period as one table with a totals footer.

    Args:
        console: Rich Console instance
        ledger: Ledger from generate_rol()
        employees: Optional id -> EmployeeRecord map for display names
    """
    period = ledger.period
    employees = employees or {}

    title = f"{period.empresa or 'Rol de pagos'} - {period.mes} (corte {period.fecha_corte.isoformat()})"

    if not ledger.rows:
        console.print(Panel("[yellow]No employees in this period.[/yellow]", title=title))
        return

    table = Table(title=title, box=box.SIMPLE_HEAVY, show_footer=True)
    table.add_column("Empleado", footer="TOTAL", style="bold")
    totals = ledger.totals
    for field, header in ROL_COLUMNS:
        footer = fmt_money(getattr(totals, field))
        table.add_column(header, justify="right", footer=footer)

    for employee_id, row in ledger.rows.items():
        employee = employees.get(employee_id)
        name = employee.nombre_completo if employee else employee_id
        cells = [fmt_money(getattr(row, field)) for field, _ in ROL_COLUMNS]
        if row.fondo_reserva_acumulado:
            cells[-2] = f"[dim]{cells[-2]} (acum.)[/dim]"
        if row.neto_recibir < 0:
            cells[-1] = f"[red]{cells[-1]}[/red]"
        table.add_row(name, *cells)

    console.print(table)

    if totals.fondo_reserva_acumulado:
        console.print(
            f"[dim]Fondo de reserva acumulado en IESS: {fmt_money(totals.fondo_reserva_acumulado)}[/dim]"
        )
    if totals.deposito_iess:
        console.print(f"[dim]Depósito IESS: {fmt_money(totals.deposito_iess)}[/dim]")


def render_row(console: Console, row: PayrollRow, employee: Optional[EmployeeRecord] = None) -> None:
    """Render a single employee's statement as a two-column table."""
    table = Table(show_header=False, box=box.SIMPLE, padding=(0, 2))
    table.add_column("concepto", style="dim")
    table.add_column("valor", justify="right")

    table.add_row("Sueldo nominal", fmt_money(row.sueldo_nominal))
    table.add_row("Días trabajados", f"{row.dias_trabajados} / {row.dias_mes}")
    for field, header in ROL_COLUMNS[1:]:
        table.add_row(header, fmt_money(getattr(row, field)))
    if row.fondo_reserva_acumulado:
        table.add_row("Fondo de reserva", "[cyan]acumulado en IESS[/cyan]")

    title = employee.nombre_completo if employee else row.empleado_id
    console.print(Panel(table, title=title, border_style="dim"))
