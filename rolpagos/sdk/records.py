"""
Local storage for periods, employees and payroll inputs.

One JSON file per entity under the data directory:

    periods/<period_id>.json
    employees/<employee_id>.json
    rol/<period_id>/<employee_id>.json

Only the input half of a payroll row is stored. Derived amounts are
recomputed on every read, so a stored row can never disagree with the
current legal rules or employee record.

Employee ids are content-based (hash of the cedula) so that re-adding the
same person overwrites instead of duplicating.
"""

import hashlib
import json
import logging
import os
import shutil
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel

from .config import get_data_path
from .schemas import EmployeeRecord, PayrollInput, PeriodConfig

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.INFO),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)
logger = logging.getLogger(__name__)


class RecordNotFoundError(Exception):
    """Raised when a required period or employee does not exist."""
    pass


# =============================================================================
# STORAGE HELPERS
# =============================================================================

def _dir(*parts: str) -> Path:
    path = get_data_path().joinpath(*parts)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _write(path: Path, model: BaseModel) -> Path:
    with open(path, "w") as f:
        json.dump(model.model_dump(mode="json"), f, indent=2)
    return path


def _read(path: Path) -> Optional[dict]:
    if not path.exists():
        return None
    with open(path) as f:
        return json.load(f)


def generate_employee_id(cedula: str) -> str:
    """Content id for an employee: first 8 hex chars of sha256(cedula)."""
    return hashlib.sha256(f"emp|{cedula.strip()}".encode()).hexdigest()[:8]


# =============================================================================
# PERIODS
# =============================================================================

def save_period(period: PeriodConfig) -> Path:
    """Save (or overwrite) a period configuration."""
    path = _write(_dir("periods") / f"{period.id}.json", period)
    logger.debug(f"saved period {period.id} -> {path}")
    return path


def get_period(period_id: str) -> Optional[PeriodConfig]:
    data = _read(_dir("periods") / f"{period_id}.json")
    return PeriodConfig.model_validate(data) if data is not None else None


def list_periods() -> List[PeriodConfig]:
    """All stored periods, oldest cutoff first."""
    periods = []
    for json_file in _dir("periods").glob("*.json"):
        try:
            periods.append(PeriodConfig.model_validate(_read(json_file)))
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"{json_file.name}: skipping unreadable period ({e})")
    periods.sort(key=lambda p: (p.fecha_corte, p.id))
    return periods


def get_latest_period() -> Optional[PeriodConfig]:
    """Period with the most recent cutoff date, or None if none stored."""
    periods = list_periods()
    return periods[-1] if periods else None


def require_period(period_id: Optional[str] = None) -> PeriodConfig:
    """Get a period by id, or the latest one when id is None.

    Raises:
        RecordNotFoundError: If no matching period exists
    """
    period = get_period(period_id) if period_id else get_latest_period()
    if period is None:
        target = f"'{period_id}'" if period_id else "configured"
        raise RecordNotFoundError(f"No period {target}. Create one with: rol-pagos periodo set")
    return period


# =============================================================================
# EMPLOYEES
# =============================================================================

def save_employee(employee: EmployeeRecord) -> Path:
    """Save (or overwrite) an employee record."""
    path = _write(_dir("employees") / f"{employee.id}.json", employee)
    logger.debug(f"saved employee {employee.id} -> {path}")
    return path


def new_employee(**fields) -> EmployeeRecord:
    """Build an EmployeeRecord, assigning a content id when none is given."""
    if not fields.get("id"):
        fields["id"] = generate_employee_id(fields.get("cedula", ""))
    return EmployeeRecord.model_validate(fields)


def get_employee(employee_id: str) -> Optional[EmployeeRecord]:
    data = _read(_dir("employees") / f"{employee_id}.json")
    return EmployeeRecord.model_validate(data) if data is not None else None


def list_employees(active_only: bool = False) -> List[EmployeeRecord]:
    """All stored employees sorted by apellidos, nombres.

    Args:
        active_only: Skip records with activo=False
    """
    employees = []
    for json_file in _dir("employees").glob("*.json"):
        try:
            employee = EmployeeRecord.model_validate(_read(json_file))
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"{json_file.name}: skipping unreadable employee ({e})")
            continue
        if active_only and not employee.activo:
            continue
        employees.append(employee)
    employees.sort(key=lambda e: (e.apellidos.lower(), e.nombres.lower(), e.id))
    return employees


def delete_employee(employee_id: str) -> bool:
    """Delete an employee and every payroll input stored for them.

    Returns:
        True if the employee existed, False otherwise
    """
    path = _dir("employees") / f"{employee_id}.json"
    if not path.exists():
        return False

    path.unlink()
    removed = 0
    for row_file in _dir("rol").glob(f"*/{employee_id}.json"):
        row_file.unlink()
        removed += 1
    logger.info(f"deleted employee {employee_id} ({removed} payroll row(s))")
    return True


# =============================================================================
# PAYROLL INPUTS
# =============================================================================

def save_payroll_input(period_id: str, employee_id: str, payroll_input: PayrollInput) -> Path:
    """Persist the input half of a payroll row."""
    return _write(_dir("rol", period_id) / f"{employee_id}.json", payroll_input)


def get_payroll_input(period_id: str, employee_id: str) -> PayrollInput:
    """Stored input for an employee, or an empty one if none saved."""
    data = _read(_dir("rol", period_id) / f"{employee_id}.json")
    return PayrollInput.model_validate(data) if data is not None else PayrollInput()


def has_payroll_input(period_id: str, employee_id: str) -> bool:
    return (_dir("rol", period_id) / f"{employee_id}.json").exists()


def load_rol_inputs(period_id: str) -> Dict[str, PayrollInput]:
    """All stored inputs of a period keyed by employee id."""
    inputs = {}
    for json_file in sorted(_dir("rol", period_id).glob("*.json")):
        inputs[json_file.stem] = PayrollInput.model_validate(_read(json_file))
    return inputs


def delete_period(period_id: str) -> bool:
    """Delete a period and all of its payroll inputs."""
    path = _dir("periods") / f"{period_id}.json"
    if not path.exists():
        return False
    path.unlink()
    shutil.rmtree(_dir("rol", period_id))
    return True
