"""Rol de Pagos MCP Server - FastMCP implementation for payroll tools."""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from rolpagos.sdk import (
    EmployeeRecord,
    InvalidInputError,
    PayrollCalculator,
    PayrollInput,
    PeriodConfig,
    RolGenerationError,
    generate_rol,
    load_legal_rules,
    records,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("rol-pagos")


# --- Tools ---

@mcp.tool()
async def compute_rol_row(
    employee: dict = Field(description="Employee record: id, apellidos, nombres, cedula, fecha_ingreso, sueldo_nominal, flags"),
    period: dict = Field(description="Period: fecha_corte (YYYY-MM-DD), dias_mes (default 30)"),
    inputs: dict = Field(default_factory=dict, description="Payroll inputs: dias_trabajados, horas_50, horas_100, bonificacion, viaticos, deductions"),
) -> dict[str, Any]:
    """Compute one payroll row from inline values without touching stored data."""
    try:
        emp = EmployeeRecord.model_validate(employee)
        per = PeriodConfig.model_validate(period)
        payroll_input = PayrollInput.model_validate(inputs)
        rules = load_legal_rules(per.fecha_corte.year)
        row = PayrollCalculator(rules).compute(emp, per, payroll_input)
        return {"row": row.model_dump(mode="json"), "rules_year": rules.year}
    except InvalidInputError as e:
        return {"error": str(e), "field": e.field}
    except (ValidationError, FileNotFoundError) as e:
        logger.error(f"Error computing row: {e}")
        return {"error": str(e)}


@mcp.tool()
async def get_rol(
    period_id: str | None = Field(default=None, description="Stored period id (YYYY-MM). Latest period if omitted."),
) -> dict[str, Any]:
    """Compute the stored rol de pagos for a period. Returns every row and the period totals."""
    try:
        ledger = generate_rol(period_id)
    except (records.RecordNotFoundError, RolGenerationError, FileNotFoundError) as e:
        logger.error(f"Error generating rol: {e}")
        return {"error": str(e), "rows": {}, "count": 0}

    return {
        "periodo": ledger.period.model_dump(mode="json"),
        "rows": {k: r.model_dump(mode="json") for k, r in ledger.rows.items()},
        "totals": ledger.totals.model_dump(mode="json"),
        "count": len(ledger),
    }


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
