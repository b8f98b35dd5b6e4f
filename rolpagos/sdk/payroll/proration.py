"""Days-worked proration for mid-period hires and terminations.

The calculator takes dias_trabajados as given. This module is what callers
use to seed that figure from hire/termination dates, keeping the
day-counting policy separate from benefit logic.

Two policies:
    comercial  - 30-day accounting month: every full month counts dias_mes,
                 day 31 counts as day 30, and a termination on the last
                 calendar day counts the full period.
    calendario - actual calendar days between the effective start and end.
"""

import calendar
from datetime import date
from typing import Literal

from ..schemas import EmployeeRecord, PeriodConfig

DiasMetodo = Literal["comercial", "calendario"]
METODOS = ("comercial", "calendario")


def _is_month_end(day: date) -> bool:
    return day.day == calendar.monthrange(day.year, day.month)[1]


def dias_trabajados_en_periodo(
    employee: EmployeeRecord,
    period: PeriodConfig,
    metodo: DiasMetodo = "comercial",
) -> int:
    """Days the employee was on payroll between periodo_inicio and fecha_corte.

    Args:
        employee: Employee with hire/termination dates
        period: Period whose cutoff month is counted
        metodo: 'comercial' or 'calendario'

    Returns:
        Days worked, between 0 and period.dias_mes

    Raises:
        ValueError: If metodo is unknown
    """
    if metodo not in METODOS:
        raise ValueError(f"Unknown day-count method '{metodo}'. Use one of {METODOS}")

    inicio = period.periodo_inicio
    fin = period.fecha_corte

    start = max(employee.fecha_ingreso, inicio)
    end = fin if employee.fecha_salida is None else min(employee.fecha_salida, fin)
    if start > end:
        return 0

    if metodo == "calendario":
        return min((end - start).days + 1, period.dias_mes)

    start_day = 1 if start == inicio else min(start.day, period.dias_mes)
    if end == fin or _is_month_end(end):
        end_day = period.dias_mes
    else:
        end_day = min(end.day, period.dias_mes)

    return max(0, min(end_day - start_day + 1, period.dias_mes))
