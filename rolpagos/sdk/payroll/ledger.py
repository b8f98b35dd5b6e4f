"""Period-level aggregation of payroll rows.

The ledger is a derived view: a mapping of employee id to PayrollRow plus
totals folded from it. Totals are plain field-wise sums, so folding order
never changes the result.
"""

import csv
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, Mapping, Union

from ..schemas import SUMMABLE_FIELDS, ZERO, LedgerTotals, PayrollRow, PeriodConfig

CSV_COLUMNS = ("empleado_id", "dias_mes", "sueldo_nominal") + SUMMABLE_FIELDS + (
    "fondo_reserva_acumulado",
)


def aggregate(
    rows: Union[Mapping[str, PayrollRow], Iterable[PayrollRow]],
) -> LedgerTotals:
    """Sum every numeric field across rows.

    Args:
        rows: Mapping of employee id to row, or any iterable of rows

    Returns:
        LedgerTotals; all zeros for empty input
    """
    if isinstance(rows, Mapping):
        rows = rows.values()

    sums: Dict[str, Decimal] = {name: ZERO for name in SUMMABLE_FIELDS}
    pagado = ZERO
    acumulado = ZERO
    count = 0

    for row in rows:
        count += 1
        for name in SUMMABLE_FIELDS:
            sums[name] += getattr(row, name)
        if row.fondo_reserva_acumulado:
            acumulado += row.valor_fondo_reserva
        else:
            pagado += row.valor_fondo_reserva

    return LedgerTotals(
        empleados=count,
        fondo_reserva_pagado=pagado,
        fondo_reserva_acumulado=acumulado,
        **sums,
    )


@dataclass
class PayrollLedger:
    """Resolved rows of one period."""

    period: PeriodConfig
    rows: Dict[str, PayrollRow] = field(default_factory=dict)

    def add(self, row: PayrollRow) -> None:
        self.rows[row.empleado_id] = row

    @property
    def totals(self) -> LedgerTotals:
        return aggregate(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


def write_rol_csv(ledger: PayrollLedger, output_path: Path) -> Path:
    """Write every row plus a TOTAL line to CSV.

    Args:
        ledger: Ledger to export
        output_path: Path to output CSV file

    Returns:
        Path to the written file
    """
    totals = ledger.totals

    with open(output_path, "w", newline="") as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(CSV_COLUMNS)
        for row in ledger.rows.values():
            writer.writerow([str(getattr(row, name)) for name in CSV_COLUMNS])

        total_line = ["TOTAL", "", ""]
        total_line += [str(getattr(totals, name)) for name in SUMMABLE_FIELDS]
        total_line.append(str(totals.fondo_reserva_acumulado))
        writer.writerow(total_line)

    return output_path
