"""payroll - Rol de pagos calculation and aggregation.

Scope:
- Per-employee derivation of earnings, decimos, IESS contribution,
  fondo de reserva and net pay (calculator.py)
- Days-worked seeding for mid-period hires/terminations (proration.py)
- Period totals and CSV export (ledger.py)

Constraints:
- Pure calculation - no records access, no settings lookup
- Legal constants arrive as an explicit LegalRules argument

Usage:
    from rolpagos.sdk.payroll import PayrollCalculator, aggregate

    calc = PayrollCalculator(load_legal_rules(2025))
    row = calc.compute(employee, period, PayrollInput(dias_trabajados=30))
    totals = aggregate({row.empleado_id: row})
"""

from .calculator import (
    InvalidInputError,
    PayrollCalculator,
    compute_rol,
    is_employed_in_period,
    validate_input,
)

from .proration import METODOS, dias_trabajados_en_periodo

from .ledger import PayrollLedger, aggregate, write_rol_csv

__all__ = [
    # Calculator
    "InvalidInputError",
    "PayrollCalculator",
    "compute_rol",
    "is_employed_in_period",
    "validate_input",
    # Proration
    "METODOS",
    "dias_trabajados_en_periodo",
    # Ledger
    "PayrollLedger",
    "aggregate",
    "write_rol_csv",
]
