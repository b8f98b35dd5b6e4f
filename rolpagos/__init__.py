"""Rol de Pagos - monthly payroll statements under Ecuadorian labor law."""

__version__ = "0.1.0"
