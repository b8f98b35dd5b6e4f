"""Rol de pagos generation for a stored period.

Thin orchestration: loads the period, its employees and their inputs from
records, runs the calculator for each and folds the result into a
PayrollLedger. Employees with no saved input get their dias_trabajados
seeded from hire/termination dates.
"""

import logging
from typing import Optional

from . import records
from .config import get_setting
from .payroll import (
    InvalidInputError,
    PayrollCalculator,
    PayrollLedger,
    dias_trabajados_en_periodo,
    is_employed_in_period,
)
from .rules import load_legal_rules
from .schemas import EmployeeRecord, LegalRules, PayrollInput, PayrollRow, PeriodConfig

logger = logging.getLogger(__name__)


class RolGenerationError(Exception):
    """Raised when one employee's row cannot be computed."""

    def __init__(self, employee_id: str, error: InvalidInputError):
        self.employee_id = employee_id
        self.error = error
        super().__init__(f"Employee {employee_id}: {error}")


def default_input(employee: EmployeeRecord, period: PeriodConfig) -> PayrollInput:
    """Empty input with dias_trabajados seeded from the employee's dates."""
    metodo = get_setting("dias_metodo", "comercial")
    return PayrollInput(dias_trabajados=dias_trabajados_en_periodo(employee, period, metodo))


def resolve_input(employee: EmployeeRecord, period: PeriodConfig) -> PayrollInput:
    if records.has_payroll_input(period.id, employee.id):
        return records.get_payroll_input(period.id, employee.id)
    return default_input(employee, period)


def compute_employee_row(
    employee_id: str,
    period_id: Optional[str] = None,
    rules: Optional[LegalRules] = None,
) -> PayrollRow:
    """Compute one stored employee's row for a stored period.

    Raises:
        records.RecordNotFoundError: If the period or employee doesn't exist
        InvalidInputError: If the stored input is invalid
    """
    period = records.require_period(period_id)
    employee = records.get_employee(employee_id)
    if employee is None:
        raise records.RecordNotFoundError(f"Employee not found: {employee_id}")

    if rules is None:
        rules = load_legal_rules(period.fecha_corte.year)
    return PayrollCalculator(rules).compute(employee, period, resolve_input(employee, period))


def generate_rol(
    period_id: Optional[str] = None,
    rules: Optional[LegalRules] = None,
) -> PayrollLedger:
    """Compute every employee's row for a period.

    Args:
        period_id: Stored period id (latest period when None)
        rules: Legal rules (loaded for the cutoff year when None)

    Returns:
        PayrollLedger with one row per employee employed in the period

    Raises:
        records.RecordNotFoundError: If the period doesn't exist
        RolGenerationError: If any employee's input is invalid
    """
    period = records.require_period(period_id)
    if rules is None:
        rules = load_legal_rules(period.fecha_corte.year)

    calculator = PayrollCalculator(rules)
    ledger = PayrollLedger(period=period)

    for employee in records.list_employees():
        if not is_employed_in_period(employee, period):
            logger.debug(f"skipping {employee.id}: not employed in {period.id}")
            continue
        try:
            ledger.add(calculator.compute(employee, period, resolve_input(employee, period)))
        except InvalidInputError as e:
            raise RolGenerationError(employee.id, e) from e

    logger.info(f"rol {period.id}: {len(ledger)} employee(s), rules {rules.year}")
    return ledger
