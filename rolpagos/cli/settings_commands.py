"""Settings CLI commands for Rol de Pagos.

settings.json holds three things: where data lives (data_dir), how days
worked are seeded for mid-month hires and exits (dias_metodo), and
overrides for the bundled legal parameters (legal_rules).
"""

import click
from pathlib import Path
from pydantic import ValidationError

from rolpagos.sdk import (
    LegalRules,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_settings_path,
    get_data_path,
    get_available_years,
    load_legal_rules,
)
from rolpagos.sdk.payroll import METODOS

DEFAULT_METODO = "comercial"
OVERRIDABLE_RULES = [name for name in LegalRules.model_fields if name != "year"]


@click.group()
def settings():
    """Manage settings (settings.json)."""
    pass


@settings.command("show")
def settings_show():
    """Show effective settings, marking the ones left at their default."""
    current = load_settings()

    click.echo(f"Settings file: {get_settings_path()}")
    click.echo()

    data_marker = "" if current.get("data_dir") else " (default)"
    click.echo(f"data_dir:    {get_data_path()}{data_marker}")

    metodo = current.get("dias_metodo")
    click.echo(f"dias_metodo: {metodo or DEFAULT_METODO}{'' if metodo else ' (default)'}")

    overrides = current.get("legal_rules") or {}
    if not overrides:
        click.echo("legal_rules: (bundled values)")
        return
    click.echo("legal_rules:")
    for key, value in sorted(overrides.items()):
        click.echo(f"  {key}: {value}")


@settings.command("data-dir")
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.option("--clear", is_flag=True, help="Revert to the XDG default")
def settings_data_dir(path, clear):
    """Show, set or clear the directory holding periods, employees and rows.

    Examples:
        rol-pagos settings data-dir ~/nomina
        rol-pagos settings data-dir --clear
    """
    if clear:
        current = load_settings()
        current.pop("data_dir", None)
        save_settings(current)
        click.echo(f"data_dir: {get_data_path()} (default)")
        return

    if path:
        set_setting("data_dir", str(Path(path).expanduser().resolve()))

    click.echo(f"data_dir: {get_data_path()}")


@settings.command("dias-metodo")
@click.argument("metodo", type=click.Choice(METODOS))
def settings_dias_metodo(metodo):
    """Set how days worked are seeded for mid-month hires and exits."""
    set_setting("dias_metodo", metodo)
    click.echo(f"dias_metodo: {metodo}")


@settings.command("regla")
@click.argument("key", type=click.Choice(OVERRIDABLE_RULES))
@click.argument("value", required=False)
@click.option("--clear", is_flag=True, help="Drop the override, use the bundled value")
def settings_regla(key, value, clear):
    """Override one legal parameter for every year.

    Example:
        rol-pagos settings regla salario_basico_unificado 475.00
    """
    overrides = dict(get_setting("legal_rules") or {})

    if clear:
        overrides.pop(key, None)
    elif value is None:
        raise click.UsageError("VALUE is required unless --clear is given")
    else:
        overrides[key] = value
        # Validate against the newest bundled year before saving
        try:
            load_legal_rules(max(get_available_years()), overrides=overrides)
        except ValidationError as e:
            raise click.BadParameter(str(e), param_hint="VALUE")

    set_setting("legal_rules", overrides)
    click.echo(f"{key}: {overrides.get(key, '(bundled value)')}")
