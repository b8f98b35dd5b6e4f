"""Rol de pagos derivation engine.

Turns (EmployeeRecord, PeriodConfig, PayrollInput) into a fully resolved
PayrollRow. Pure and deterministic: no I/O, no clock, no shared state, so
rows for different employees can be computed in any order or in parallel.

Derivation, per period:
    sueldo            = sueldo_nominal * dias_trabajados / dias_mes
    hourly rate       = sueldo_nominal / (dias_mes * horas_por_dia)
    valor_horas_50    = hourly rate * recargo_50 * horas_50
    valor_horas_100   = hourly rate * recargo_100 * horas_100
    materia gravada   = sueldo + valor_horas_50 + valor_horas_100 + bonificacion
    decimo_tercero    = materia gravada / 12        (mensualiza_decimos only)
    decimo_cuarto     = salario_basico_unificado / 12 (mensualiza_decimos only)
    total_ganado      = materia gravada + viaticos + both decimos
    aporte_personal   = materia gravada * aporte_personal_rate
    total_descuentos  = manual deductions + aporte_personal
    subtotal          = total_ganado - total_descuentos
    valor_fondo       = sueldo_nominal / 12          (tiene_fondo_reserva only)
    neto_recibir      = subtotal + valor_fondo unless the fondo is accrued

deposito_iess is an employer-side figure carried through untouched.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..schemas import (
    DEDUCTION_FIELDS,
    INPUT_FIELDS,
    ZERO,
    EmployeeRecord,
    LegalRules,
    PayrollInput,
    PayrollRow,
    PeriodConfig,
)

logger = logging.getLogger(__name__)

MESES_POR_ANIO = Decimal("12")

# Upper bound for any single amount; keeps quantized results inside the
# default 28-digit decimal context.
MAX_AMOUNT = Decimal("1e9")


class InvalidInputError(ValueError):
    """Raised when a payroll input violates a precondition.

    Attributes:
        field: Name of the offending field
        value: The rejected value
        reason: Human-readable constraint that was violated
    """

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"{field}={value}: {reason}")


def validate_input(
    employee: EmployeeRecord,
    period: PeriodConfig,
    payroll_input: PayrollInput,
) -> None:
    """Check engine preconditions.

    Raises:
        InvalidInputError: On the first violated precondition
    """
    if employee.sueldo_nominal < 0:
        raise InvalidInputError("sueldo_nominal", employee.sueldo_nominal, "must be >= 0")
    if employee.sueldo_nominal > MAX_AMOUNT:
        raise InvalidInputError("sueldo_nominal", employee.sueldo_nominal, f"must be <= {MAX_AMOUNT}")

    for name in INPUT_FIELDS:
        value = getattr(payroll_input, name)
        if not value.is_finite():
            raise InvalidInputError(name, value, "must be a finite number")
        if value < 0:
            raise InvalidInputError(name, value, "must be >= 0")
        if value > MAX_AMOUNT:
            raise InvalidInputError(name, value, f"must be <= {MAX_AMOUNT}")

    if payroll_input.dias_trabajados > period.dias_mes:
        raise InvalidInputError(
            "dias_trabajados",
            payroll_input.dias_trabajados,
            f"exceeds dias_mes ({period.dias_mes})",
        )


def is_employed_in_period(employee: EmployeeRecord, period: PeriodConfig) -> bool:
    """Whether the employee was on payroll at any point of the period.

    Gates decimos and fondo de reserva. An inactive record without a
    fecha_salida is treated as not employed.
    """
    if employee.fecha_ingreso > period.fecha_corte:
        return False
    if employee.fecha_salida is not None:
        return employee.fecha_salida >= period.periodo_inicio
    return employee.activo


def _q(amount: Decimal, rules: LegalRules) -> Decimal:
    return amount.quantize(rules.precision, rounding=ROUND_HALF_UP)


def compute_rol(
    employee: EmployeeRecord,
    period: PeriodConfig,
    payroll_input: PayrollInput,
    rules: LegalRules,
) -> PayrollRow:
    """Compute the payroll row for one employee in one period.

    decimo_tercero is taken from the IESS contribution base (materia
    gravada), not total_ganado, so viaticos never raise it.

    Args:
        employee: Contractual attributes
        period: Period parameters (dias_mes, fecha_corte)
        payroll_input: Days, hours, bonuses and manual deductions
        rules: Legal constants for the period's year

    Returns:
        PayrollRow with every derived field resolved

    Raises:
        InvalidInputError: If a precondition is violated
    """
    validate_input(employee, period, payroll_input)

    dias_mes = Decimal(period.dias_mes)
    nominal = employee.sueldo_nominal

    sueldo = _q(nominal * payroll_input.dias_trabajados / dias_mes, rules)

    # hourly rate folded in: one division per amount
    horas_mes = dias_mes * rules.horas_por_dia
    valor_horas_50 = _q(nominal * rules.recargo_50 * payroll_input.horas_50 / horas_mes, rules)
    valor_horas_100 = _q(nominal * rules.recargo_100 * payroll_input.horas_100 / horas_mes, rules)

    materia_gravada = sueldo + valor_horas_50 + valor_horas_100 + payroll_input.bonificacion

    elegible = is_employed_in_period(employee, period)

    decimo_tercero = ZERO
    decimo_cuarto = ZERO
    if elegible and employee.mensualiza_decimos:
        decimo_tercero = _q(materia_gravada / MESES_POR_ANIO, rules)
        decimo_cuarto = _q(rules.salario_basico_unificado / MESES_POR_ANIO, rules)

    total_ganado = materia_gravada + payroll_input.viaticos + decimo_tercero + decimo_cuarto

    aporte_personal = _q(materia_gravada * rules.aporte_personal_rate, rules)
    total_descuentos = sum(
        (getattr(payroll_input, name) for name in DEDUCTION_FIELDS), aporte_personal
    )
    subtotal = total_ganado - total_descuentos

    valor_fondo_reserva = ZERO
    acumulado = False
    if elegible and employee.tiene_fondo_reserva:
        valor_fondo_reserva = _q(nominal / MESES_POR_ANIO, rules)
        acumulado = employee.acumula_fondo_reserva

    neto_recibir = subtotal if acumulado else subtotal + valor_fondo_reserva

    logger.debug(
        f"rol {employee.id} {period.id}: ganado={total_ganado} "
        f"descuentos={total_descuentos} neto={neto_recibir}"
    )

    return PayrollRow(
        empleado_id=employee.id,
        dias_mes=period.dias_mes,
        sueldo_nominal=nominal,
        **payroll_input.model_dump(),
        sueldo=sueldo,
        valor_horas_50=valor_horas_50,
        valor_horas_100=valor_horas_100,
        decimo_tercero=decimo_tercero,
        decimo_cuarto=decimo_cuarto,
        total_ganado=total_ganado,
        aporte_personal=aporte_personal,
        total_descuentos=total_descuentos,
        subtotal=subtotal,
        valor_fondo_reserva=valor_fondo_reserva,
        fondo_reserva_acumulado=acumulado,
        neto_recibir=neto_recibir,
    )


class PayrollCalculator:
    """Calculator bound to one set of legal rules.

    Holds no mutable state; a single instance can serve concurrent callers.
    """

    def __init__(self, rules: LegalRules):
        self.rules = rules

    def compute(
        self,
        employee: EmployeeRecord,
        period: PeriodConfig,
        payroll_input: PayrollInput,
    ) -> PayrollRow:
        return compute_rol(employee, period, payroll_input, self.rules)

    def compute_many(
        self,
        period: PeriodConfig,
        entries: list[tuple[EmployeeRecord, PayrollInput]],
    ) -> dict[str, PayrollRow]:
        """Compute rows for several employees of the same period.

        Returns:
            Mapping of employee id to PayrollRow, in input order
        """
        return {
            employee.id: self.compute(employee, period, payroll_input)
            for employee, payroll_input in entries
        }
