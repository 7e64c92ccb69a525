from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Literal

logger = logging.getLogger(__name__)

Diet = Literal["low", "average", "high"]
Category = Literal["Low", "Medium", "High"]

# Public list for UI dropdowns
DIETS = ("low", "average", "high")

__all__ = [
    "Diet",
    "Category",
    "DIETS",
    "DietFactors",
    "EmissionFactors",
    "Thresholds",
    "DEFAULT_FACTORS",
    "DEFAULT_THRESHOLDS",
    "factor_table",
    "factors_from_dict",
    "load_factor_table",
]


@dataclass(frozen=True)
class DietFactors:
    """Daily dietary baseline (kg CO2e / day), one value per diet category."""
    low: float = 1.5
    average: float = 3.0
    high: float = 5.0

    def for_diet(self, diet: Diet) -> float:
        if diet == "low":
            return self.low
        if diet == "average":
            return self.average
        if diet == "high":
            return self.high
        raise ValueError(f"Unknown diet '{diet}'. Expected one of {DIETS}.")


@dataclass(frozen=True)
class EmissionFactors:
    """Activity -> kg CO2e multipliers.

    Units follow the form fields: per km, per kWh, per kg LPG, per SCM of PNG,
    per kg of waste and per litre of gasoline.
    """
    transportation: float = 0.21  # kg CO2e / km
    electricity: float = 0.5  # kg CO2e / kWh
    lpg: float = 2.98  # kg CO2e / kg
    png: float = 1.93  # kg CO2e / SCM
    waste: float = 0.25  # kg CO2e / kg
    gas: float = 2.31  # kg CO2e / L gasoline
    diet: DietFactors = field(default_factory=DietFactors)


@dataclass(frozen=True)
class Thresholds:
    """Category ceilings in kg CO2e / year. Values equal to a ceiling stay in the lower category."""
    low: float = 5000.0
    medium: float = 10000.0

    def __post_init__(self) -> None:
        if not (math.isfinite(self.low) and math.isfinite(self.medium)):
            raise ValueError("thresholds must be finite numbers")
        if self.low < 0 or self.medium < 0:
            raise ValueError("thresholds must be >= 0")
        if self.low > self.medium:
            raise ValueError("low threshold must be <= medium threshold")


DEFAULT_FACTORS = EmissionFactors()
DEFAULT_THRESHOLDS = Thresholds()

_SCALAR_KEYS = ("transportation", "electricity", "lpg", "png", "waste", "gas")


def factor_table(factors: EmissionFactors = DEFAULT_FACTORS) -> Dict[str, Any]:
    """Plain dict view of a factor table (for display / JSON export)."""
    table: Dict[str, Any] = {k: float(getattr(factors, k)) for k in _SCALAR_KEYS}
    table["diet"] = {d: float(factors.diet.for_diet(d)) for d in DIETS}
    return table


def _as_factor(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"factor '{name}' must be a number, got {value!r}")
    try:
        value = float(value)
    except OverflowError:
        raise ValueError(f"factor '{name}' is too large")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"factor '{name}' must be a finite number >= 0")
    return value


def factors_from_dict(data: Dict[str, Any], *, base: EmissionFactors = DEFAULT_FACTORS) -> EmissionFactors:
    """Overlay a (partial) factor mapping on top of `base`.

    Missing keys keep the base value; unknown keys are rejected so typos in a
    regional table do not silently fall back to defaults.
    """
    if not isinstance(data, dict):
        raise ValueError("factor table must be a JSON object")

    unknown = set(data) - set(_SCALAR_KEYS) - {"diet"}
    if unknown:
        raise ValueError(f"Unknown factor keys: {sorted(unknown)}")

    updates: Dict[str, Any] = {k: _as_factor(k, data[k]) for k in _SCALAR_KEYS if k in data}

    if "diet" in data:
        diet = data["diet"]
        if not isinstance(diet, dict):
            raise ValueError("factor 'diet' must be an object with low/average/high")
        bad = set(diet) - set(DIETS)
        if bad:
            raise ValueError(f"Unknown diet keys: {sorted(bad)}")
        updates["diet"] = replace(
            base.diet,
            **{d: _as_factor(f"diet.{d}", diet[d]) for d in DIETS if d in diet},
        )

    return replace(base, **updates)


def load_factor_table(path: str, *, base: EmissionFactors = DEFAULT_FACTORS) -> EmissionFactors:
    """Load a regional factor table from a JSON file."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    factors = factors_from_dict(data, base=base)
    logger.info("Loaded emission factor table from %s", path)
    return factors
