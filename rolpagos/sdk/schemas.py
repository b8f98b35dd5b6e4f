"""Pydantic schemas for rol-pagos data.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in stored records cause clear errors rather than silent ignoring.

Money and hours are Decimal throughout. Floats never enter the engine:
values loaded from JSON/YAML arrive as strings or ints and are parsed
exactly.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


ZERO = Decimal("0")

MESES = [
    "Enero", "Febrero", "Marzo", "Abril", "Mayo", "Junio",
    "Julio", "Agosto", "Septiembre", "Octubre", "Noviembre", "Diciembre",
]


# =============================================================================
# Legal parameters
# =============================================================================


class LegalRules(BaseModel):
    """Legally fixed constants for one year.

    Passed explicitly to the calculator; never read from process-wide state.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int = Field(..., description="Year the parameters apply to")
    aporte_personal_rate: Decimal = Field(
        ..., ge=0, le=1, description="Employee IESS contribution rate (e.g. 0.0945)"
    )
    salario_basico_unificado: Decimal = Field(
        ..., ge=0, description="Statutory minimum wage (SBU), reference for decimo cuarto"
    )
    horas_por_dia: int = Field(default=8, gt=0, description="Ordinary hours per working day")
    recargo_50: Decimal = Field(default=Decimal("1.5"), ge=1, le=10, description="Multiplier for 50% overtime")
    recargo_100: Decimal = Field(default=Decimal("2.0"), ge=1, le=10, description="Multiplier for 100% overtime")
    precision: Decimal = Field(
        default=Decimal("0.000001"), ge=Decimal("0.000001"),
        description="Quantum every derived amount is rounded to (ROUND_HALF_UP)",
    )


# =============================================================================
# Inputs
# =============================================================================


class EmployeeRecord(BaseModel):
    """Contractual attributes of an employee, fixed for a pay period."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., min_length=1, description="Opaque unique identifier")
    apellidos: str = Field(..., description="Surnames")
    nombres: str = Field(..., description="Given names")
    cedula: str = Field(..., description="National id number")
    cargo: str = Field(default="", description="Job title")
    asignacion: str = Field(default="", description="Cost centre / allocation")
    fecha_ingreso: date = Field(..., description="Hire date")
    fecha_salida: Optional[date] = Field(default=None, description="Termination date, if any")
    sueldo_nominal: Decimal = Field(
        ..., ge=0, decimal_places=2, description="Fixed monthly base salary"
    )
    activo: bool = Field(default=True)
    tiene_fondo_reserva: bool = Field(
        default=False, description="Entitled to fondo de reserva"
    )
    acumula_fondo_reserva: bool = Field(
        default=False,
        description="Fondo de reserva is accrued at IESS instead of paid monthly",
    )
    mensualiza_decimos: bool = Field(
        default=False, description="Decimo tercero/cuarto paid monthly"
    )

    @model_validator(mode="after")
    def check_dates(self) -> "EmployeeRecord":
        if self.fecha_salida is not None and self.fecha_salida < self.fecha_ingreso:
            raise ValueError(
                f"fecha_salida ({self.fecha_salida}) is before fecha_ingreso ({self.fecha_ingreso})"
            )
        return self

    @property
    def nombre_completo(self) -> str:
        return f"{self.apellidos} {self.nombres}".strip()


class PeriodConfig(BaseModel):
    """Pay-period parameters shared by every employee in one run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(default="", description="Period id (defaults to YYYY-MM of fecha_corte)")
    empresa: str = Field(default="", description="Company name")
    mes: str = Field(default="", description="Month label (e.g. 'Marzo')")
    fecha_corte: date = Field(..., description="Cutoff date")
    dias_mes: int = Field(default=30, gt=0, le=31, description="Days in the period")

    @model_validator(mode="after")
    def fill_defaults(self) -> "PeriodConfig":
        # frozen model: defaults must be written through object.__setattr__
        if not self.id:
            object.__setattr__(self, "id", self.fecha_corte.strftime("%Y-%m"))
        if not self.mes:
            object.__setattr__(self, "mes", MESES[self.fecha_corte.month - 1])
        return self

    @property
    def periodo_inicio(self) -> date:
        """First day of the cutoff month."""
        return self.fecha_corte.replace(day=1)


class PayrollInput(BaseModel):
    """Facts entered for one employee in one period.

    Created empty and filled incrementally. Values are NOT range-checked
    here; the calculator validates them once, at its boundary.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    dias_trabajados: Decimal = ZERO
    horas_50: Decimal = ZERO
    horas_100: Decimal = ZERO
    bonificacion: Decimal = ZERO
    viaticos: Decimal = ZERO
    prestamos_empleado: Decimal = ZERO
    anticipo_sueldo: Decimal = ZERO
    retencion_renta: Decimal = ZERO
    otros_descuentos: Decimal = ZERO
    prestamos_iess: Decimal = ZERO
    deposito_iess: Decimal = ZERO


INPUT_FIELDS = tuple(PayrollInput.model_fields)

DEDUCTION_FIELDS = (
    "prestamos_empleado",
    "anticipo_sueldo",
    "retencion_renta",
    "otros_descuentos",
    "prestamos_iess",
)


# =============================================================================
# Outputs
# =============================================================================


class PayrollRow(BaseModel):
    """Fully resolved payroll line for one employee.

    The input half mirrors PayrollInput; everything else is derived by the
    calculator on every call and is never a source of truth.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    empleado_id: str
    dias_mes: int
    sueldo_nominal: Decimal

    # Input half
    dias_trabajados: Decimal
    horas_50: Decimal
    horas_100: Decimal
    bonificacion: Decimal
    viaticos: Decimal
    prestamos_empleado: Decimal
    anticipo_sueldo: Decimal
    retencion_renta: Decimal
    otros_descuentos: Decimal
    prestamos_iess: Decimal
    deposito_iess: Decimal

    # Derived
    sueldo: Decimal
    valor_horas_50: Decimal
    valor_horas_100: Decimal
    decimo_tercero: Decimal
    decimo_cuarto: Decimal
    total_ganado: Decimal
    aporte_personal: Decimal
    total_descuentos: Decimal
    subtotal: Decimal
    valor_fondo_reserva: Decimal
    fondo_reserva_acumulado: bool = Field(
        default=False,
        description="True when valor_fondo_reserva is held at IESS, not paid",
    )
    neto_recibir: Decimal

    def input_half(self) -> PayrollInput:
        """The persisted part of the row."""
        return PayrollInput(**{name: getattr(self, name) for name in INPUT_FIELDS})


SUMMABLE_FIELDS = tuple(
    name for name, info in PayrollRow.model_fields.items()
    if info.annotation is Decimal and name != "sueldo_nominal"
)


class LedgerTotals(BaseModel):
    """Period-level sums of every numeric PayrollRow field."""

    model_config = ConfigDict(extra="forbid")

    empleados: int = 0
    dias_trabajados: Decimal = ZERO
    horas_50: Decimal = ZERO
    horas_100: Decimal = ZERO
    bonificacion: Decimal = ZERO
    viaticos: Decimal = ZERO
    prestamos_empleado: Decimal = ZERO
    anticipo_sueldo: Decimal = ZERO
    retencion_renta: Decimal = ZERO
    otros_descuentos: Decimal = ZERO
    prestamos_iess: Decimal = ZERO
    deposito_iess: Decimal = ZERO
    sueldo: Decimal = ZERO
    valor_horas_50: Decimal = ZERO
    valor_horas_100: Decimal = ZERO
    decimo_tercero: Decimal = ZERO
    decimo_cuarto: Decimal = ZERO
    total_ganado: Decimal = ZERO
    aporte_personal: Decimal = ZERO
    total_descuentos: Decimal = ZERO
    subtotal: Decimal = ZERO
    valor_fondo_reserva: Decimal = ZERO
    fondo_reserva_pagado: Decimal = ZERO
    fondo_reserva_acumulado: Decimal = ZERO
    neto_recibir: Decimal = ZERO
