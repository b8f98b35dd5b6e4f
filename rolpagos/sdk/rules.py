"""Legal parameter loading.

Year-specific constants (IESS contribution rate, salario basico unificado,
hours per day) are shipped as legal_rules/YYYY.yaml and validated by the
LegalRules schema. A year without its own file falls back to the nearest
prior year, since rates only change when a new decree is issued.
"""

from pathlib import Path
from typing import Optional, Union

import yaml

from .config import get_setting
from .schemas import LegalRules


def _get_rules_dir() -> Path:
    """Get the legal_rules directory path."""
    return Path(__file__).parent / "legal_rules"


def get_available_years() -> list[int]:
    """Get sorted list of available rule years (descending)."""
    years = [int(p.stem) for p in _get_rules_dir().glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


def _resolve_year(year: int) -> int:
    available = get_available_years()
    if not available:
        raise FileNotFoundError(f"No legal rules found in {_get_rules_dir()}")

    candidates = [y for y in available if y <= year]
    if not candidates:
        raise FileNotFoundError(
            f"No legal rules for {year} or earlier (available: {sorted(available)})"
        )
    return candidates[0]


def load_rules_file(year: Union[int, str]) -> dict:
    """Load raw rules for a year, falling back to the nearest prior year.

    Raises:
        FileNotFoundError: If no file exists for that year or any earlier one
    """
    resolved = _resolve_year(int(year))
    config_file = _get_rules_dir() / f"{resolved}.yaml"

    with open(config_file, "r") as f:
        return yaml.safe_load(f) or {}


def load_legal_rules(
    year: Union[int, str],
    overrides: Optional[dict] = None,
) -> LegalRules:
    """Load validated legal rules for a year.

    Args:
        year: Calendar year of the pay period
        overrides: Values merged over the year file. When None, the
            'legal_rules' mapping from settings.json is used.

    Returns:
        LegalRules for the requested year

    Raises:
        FileNotFoundError: If no rules exist for the year
        pydantic.ValidationError: If the merged rules are invalid
    """
    raw = load_rules_file(year)
    if overrides is None:
        overrides = get_setting("legal_rules") or {}

    merged = {**raw, **overrides, "year": int(year)}
    return LegalRules.model_validate(merged)
