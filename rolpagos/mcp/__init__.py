"""Rol de Pagos MCP server."""
