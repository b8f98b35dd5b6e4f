"""Tests for the periodo / empleados / rol CLI commands.

Runs the full flow against an isolated data directory.
"""

import csv
import json
from decimal import Decimal

import pytest
from click.testing import CliRunner

from rolpagos.cli.__main__ import cli
from rolpagos.sdk import records


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Set up isolated config and data directories."""
    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    config_dir.mkdir()
    data_dir.mkdir()

    monkeypatch.setenv("ROL_PAGOS_CONFIG_PATH", str(config_dir))
    (config_dir / "settings.json").write_text(json.dumps({"data_dir": str(data_dir)}))

    return {"config_dir": config_dir, "data_dir": data_dir, "tmp_path": tmp_path}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def populated(isolated_env, runner):
    """One March period and one employee."""
    result = runner.invoke(cli, [
        "periodo", "set", "--fecha-corte", "2025-03-31", "--empresa", "Comercial Andes",
    ])
    assert result.exit_code == 0, result.output

    result = runner.invoke(cli, [
        "empleados", "add",
        "--cedula", "1712345678",
        "--apellidos", "Pérez",
        "--nombres", "Ana",
        "--sueldo", "700",
        "--fecha-ingreso", "2021-06-01",
    ])
    assert result.exit_code == 0, result.output

    return records.generate_employee_id("1712345678")


def show_json(runner, *args):
    result = runner.invoke(cli, ["rol", "show", "--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


class TestPeriodo:

    def test_set_defaults_month(self, populated, runner):
        result = runner.invoke(cli, ["periodo", "show"])

        assert result.exit_code == 0
        assert "2025-03" in result.output
        assert "Marzo" in result.output
        assert "Comercial Andes" in result.output

    def test_set_keeps_existing_values(self, populated, runner):
        result = runner.invoke(cli, ["periodo", "set", "--fecha-corte", "2025-03-31", "--dias-mes", "28"])

        assert result.exit_code == 0
        period = records.get_period("2025-03")
        assert period.dias_mes == 28
        assert period.empresa == "Comercial Andes"

    def test_invalid_date(self, isolated_env, runner):
        result = runner.invoke(cli, ["periodo", "set", "--fecha-corte", "31/03/2025"])

        assert result.exit_code != 0

    def test_show_without_periods(self, isolated_env, runner):
        result = runner.invoke(cli, ["periodo", "show"])

        assert result.exit_code != 0
        assert "periodo set" in result.output

    def test_remove(self, populated, runner):
        runner.invoke(cli, ["rol", "set", populated, "--horas-50", "4"])

        result = runner.invoke(cli, ["periodo", "remove", "2025-03"])

        assert result.exit_code == 0
        assert records.get_period("2025-03") is None
        assert not records.has_payroll_input("2025-03", populated)

    def test_remove_missing(self, isolated_env, runner):
        result = runner.invoke(cli, ["periodo", "remove", "1999-01"])

        assert result.exit_code != 0
        assert "1999-01" in result.output


class TestEmpleados:

    def test_list(self, populated, runner):
        result = runner.invoke(cli, ["empleados", "list"])

        assert result.exit_code == 0
        assert populated in result.output
        assert "Pérez Ana" in result.output

    def test_list_json(self, populated, runner):
        result = runner.invoke(cli, ["empleados", "list", "--json"])

        data = json.loads(result.output)
        assert data[0]["id"] == populated
        assert Decimal(data[0]["sueldo_nominal"]) == Decimal("700")

    def test_remove(self, populated, runner):
        result = runner.invoke(cli, ["empleados", "remove", populated])

        assert result.exit_code == 0
        assert records.get_employee(populated) is None

    def test_remove_missing(self, isolated_env, runner):
        result = runner.invoke(cli, ["empleados", "remove", "nope0000"])

        assert result.exit_code != 0


class TestRol:

    def test_show_seeded_row(self, populated, runner):
        data = show_json(runner)

        assert data["periodo"]["id"] == "2025-03"
        row = data["rows"][populated]
        assert Decimal(row["dias_trabajados"]) == 30
        assert Decimal(row["neto_recibir"]) == Decimal("633.85")
        assert data["totals"]["empleados"] == 1

    def test_set_updates_only_given_fields(self, populated, runner):
        result = runner.invoke(cli, ["rol", "set", populated, "--horas-50", "4"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["rol", "set", populated, "--anticipo-sueldo", "50"])
        assert result.exit_code == 0, result.output

        stored = records.get_payroll_input("2025-03", populated)
        assert stored.horas_50 == Decimal("4")
        assert stored.anticipo_sueldo == Decimal("50")
        assert stored.dias_trabajados == Decimal("30")

        row = show_json(runner, "--empleado", populated)
        # 700 * 1.5 * 4 / 240
        assert Decimal(row["valor_horas_50"]) == Decimal("17.5")

    def test_set_rejects_non_number(self, populated, runner):
        result = runner.invoke(cli, ["rol", "set", populated, "--bonificacion", "mucho"])

        assert result.exit_code != 0
        assert not records.has_payroll_input("2025-03", populated)

    def test_set_out_of_range_reports_error(self, populated, runner):
        result = runner.invoke(cli, ["rol", "set", populated, "--dias-trabajados", "31"])

        assert result.exit_code != 0
        assert "dias_trabajados" in result.output
        assert not records.has_payroll_input("2025-03", populated)
        # the period stays computable
        assert show_json(runner)["totals"]["empleados"] == 1

    def test_set_invalid_keeps_previous_input(self, populated, runner):
        runner.invoke(cli, ["rol", "set", populated, "--horas-50", "4"])

        result = runner.invoke(cli, ["rol", "set", populated, "--dias-trabajados", "31"])

        assert result.exit_code != 0
        stored = records.get_payroll_input("2025-03", populated)
        assert stored.dias_trabajados == Decimal("30")
        assert stored.horas_50 == Decimal("4")

    @pytest.mark.parametrize("command", [
        ["rol", "show"],
        ["rol", "show", "--json"],
        ["rol", "export", "out.csv"],
    ])
    def test_period_without_legal_rules(self, populated, runner, command):
        runner.invoke(cli, ["periodo", "set", "--fecha-corte", "2023-03-31"])

        result = runner.invoke(cli, [*command, "--periodo", "2023-03"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "No legal rules for 2023" in result.output

    def test_set_without_legal_rules(self, populated, runner):
        runner.invoke(cli, ["periodo", "set", "--fecha-corte", "2023-03-31"])

        result = runner.invoke(cli, ["rol", "set", populated, "--periodo", "2023-03", "--horas-50", "2"])

        assert result.exit_code == 1
        assert "No legal rules for 2023" in result.output
        assert not records.has_payroll_input("2023-03", populated)

    def test_invalid_override_reported(self, populated, runner, isolated_env):
        settings_path = isolated_env["config_dir"] / "settings.json"
        settings = json.loads(settings_path.read_text())
        settings["legal_rules"] = {"aporte_personal_rate": "2"}
        settings_path.write_text(json.dumps(settings))

        result = runner.invoke(cli, ["rol", "show"])

        assert result.exit_code == 1
        assert "aporte_personal_rate" in result.output

    def test_show_table(self, populated, runner):
        result = runner.invoke(cli, ["rol", "show"])

        assert result.exit_code == 0
        assert "633.85" in result.output

    def test_export_csv(self, populated, runner, isolated_env):
        output = isolated_env["tmp_path"] / "rol.csv"

        result = runner.invoke(cli, ["rol", "export", str(output)])

        assert result.exit_code == 0, result.output
        with open(output, newline="") as f:
            lines = list(csv.DictReader(f))
        assert [line["empleado_id"] for line in lines] == [populated, "TOTAL"]

    def test_show_without_period(self, isolated_env, runner):
        result = runner.invoke(cli, ["rol", "show"])

        assert result.exit_code != 0


def test_reglas_show(isolated_env, runner):
    result = runner.invoke(cli, ["reglas", "show", "2025"])

    assert result.exit_code == 0
    assert "470" in result.output
    assert "0.0945" in result.output


class TestSettings:

    def read_settings(self, isolated_env):
        return json.loads((isolated_env["config_dir"] / "settings.json").read_text())

    def test_dias_metodo(self, isolated_env, runner):
        result = runner.invoke(cli, ["settings", "dias-metodo", "calendario"])

        assert result.exit_code == 0
        settings = self.read_settings(isolated_env)
        assert settings["dias_metodo"] == "calendario"
        assert settings["data_dir"] == str(isolated_env["data_dir"])

    def test_dias_metodo_rejects_unknown(self, isolated_env, runner):
        result = runner.invoke(cli, ["settings", "dias-metodo", "habiles"])

        assert result.exit_code != 0

    def test_data_dir_clear(self, isolated_env, runner, monkeypatch):
        monkeypatch.setenv("XDG_DATA_HOME", str(isolated_env["tmp_path"] / "xdg"))

        result = runner.invoke(cli, ["settings", "data-dir", "--clear"])

        assert result.exit_code == 0
        assert "data_dir" not in self.read_settings(isolated_env)
        assert str(isolated_env["tmp_path"] / "xdg" / "rol-pagos") in result.output

    def test_data_dir_set(self, isolated_env, runner):
        target = isolated_env["tmp_path"] / "nomina"

        result = runner.invoke(cli, ["settings", "data-dir", str(target)])

        assert result.exit_code == 0
        assert self.read_settings(isolated_env)["data_dir"] == str(target.resolve())
        assert target.is_dir()

    def test_show_marks_defaults(self, isolated_env, runner):
        result = runner.invoke(cli, ["settings", "show"])

        assert result.exit_code == 0
        assert str(isolated_env["data_dir"]) in result.output
        assert "comercial (default)" in result.output
        assert "(bundled values)" in result.output

    def test_regla_override_applies(self, isolated_env, runner):
        result = runner.invoke(cli, ["settings", "regla", "salario_basico_unificado", "475.00"])

        assert result.exit_code == 0, result.output
        assert self.read_settings(isolated_env)["legal_rules"] == {"salario_basico_unificado": "475.00"}

        result = runner.invoke(cli, ["reglas", "show", "2025"])
        assert "475.00" in result.output

    def test_regla_rejects_invalid_value(self, isolated_env, runner):
        result = runner.invoke(cli, ["settings", "regla", "aporte_personal_rate", "1.5"])

        assert result.exit_code != 0
        assert "legal_rules" not in self.read_settings(isolated_env)

    def test_regla_rejects_unknown_key(self, isolated_env, runner):
        result = runner.invoke(cli, ["settings", "regla", "tasa_magica", "1"])

        assert result.exit_code != 0

    def test_regla_clear(self, isolated_env, runner):
        runner.invoke(cli, ["settings", "regla", "salario_basico_unificado", "475.00"])

        result = runner.invoke(cli, ["settings", "regla", "salario_basico_unificado", "--clear"])

        assert result.exit_code == 0
        assert self.read_settings(isolated_env)["legal_rules"] == {}
