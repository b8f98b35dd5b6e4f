"""Rol de Pagos SDK - Core functionality for monthly payroll statements."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_data_path,
    SettingsError,
)

from .schemas import (
    EmployeeRecord,
    PeriodConfig,
    PayrollInput,
    PayrollRow,
    LedgerTotals,
    LegalRules,
    MESES,
)

from .rules import (
    load_legal_rules,
    get_available_years,
)

from .payroll import (
    InvalidInputError,
    PayrollCalculator,
    PayrollLedger,
    compute_rol,
    aggregate,
    dias_trabajados_en_periodo,
    write_rol_csv,
)

from .rol import (
    generate_rol,
    compute_employee_row,
    RolGenerationError,
)

from . import records

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_data_path",
    "SettingsError",
    # Schemas
    "EmployeeRecord",
    "PeriodConfig",
    "PayrollInput",
    "PayrollRow",
    "LedgerTotals",
    "LegalRules",
    "MESES",
    # Legal rules
    "load_legal_rules",
    "get_available_years",
    # Payroll engine
    "InvalidInputError",
    "PayrollCalculator",
    "PayrollLedger",
    "compute_rol",
    "aggregate",
    "dias_trabajados_en_periodo",
    "write_rol_csv",
    # Orchestration
    "generate_rol",
    "compute_employee_row",
    "RolGenerationError",
    # Records module
    "records",
]
