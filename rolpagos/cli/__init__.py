"""Rol de Pagos CLI."""
