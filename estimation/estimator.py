"""Personal carbon footprint estimator.

Maps one set of lifestyle inputs to an annual footprint (kg CO2e / year) and a
severity category. Components:
- Transportation (km/week)
- Electricity (kWh/month)
- LPG (kg/month) and PNG (SCM/month)
- Diet, from a daily baseline per diet category, annualized over 365 days
- Waste (kg/week), annualized over 52 weeks
- Optional gasoline (L/week)

Unit handling: transportation, electricity, LPG, PNG and gasoline enter the
total as entered, without a weeks/months multiplier. Only diet and waste are
annualized. This mixes weekly/monthly quantities into an "annual" figure and is
most likely a latent defect, but the arithmetic is kept as-is so results match
the calculator's published numbers.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict

from .factors import (
    Category,
    Diet,
    DEFAULT_FACTORS,
    DEFAULT_THRESHOLDS,
    EmissionFactors,
    Thresholds,
)

logger = logging.getLogger(__name__)

_DAYS_PER_YEAR = 365
_WEEKS_PER_YEAR = 52
_CENT = Decimal("0.01")


@dataclass(frozen=True)
class FootprintInputs:
    transportation: float = 0.0  # km / week
    electricity: float = 0.0  # kWh / month
    lpg: float = 0.0  # kg / month
    png: float = 0.0  # SCM / month
    waste: float = 0.0  # kg / week
    diet: Diet = "average"

    # Gasoline (L / week). Not shown on the form unless enabled.
    gas: float = 0.0


@dataclass(frozen=True)
class FootprintResult:
    footprint: float  # kg CO2e / year, rounded to 2 decimals
    category: Category
    breakdown: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "footprint_kgco2e": self.footprint,
            "category": self.category,
            "breakdown_kgco2e": dict(self.breakdown),
        }


def default_inputs() -> FootprintInputs:
    """Inputs used when the calculator starts and after a reset."""
    return FootprintInputs()


def classify(footprint: float, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> Category:
    if footprint <= thresholds.low:
        return "Low"
    if footprint <= thresholds.medium:
        return "Medium"
    return "High"


def breakdown_kgco2e(inputs: FootprintInputs, factors: EmissionFactors = DEFAULT_FACTORS) -> Dict[str, float]:
    """Per-component contributions (kg CO2e), unrounded."""
    return {
        "transportation": float(inputs.transportation * factors.transportation),
        "electricity": float(inputs.electricity * factors.electricity),
        "gas": float(inputs.gas * factors.gas) if inputs.gas else 0.0,
        "lpg": float(inputs.lpg * factors.lpg),
        "png": float(inputs.png * factors.png),
        "diet": float(factors.diet.for_diet(inputs.diet) * _DAYS_PER_YEAR),
        "waste": float(inputs.waste * factors.waste * _WEEKS_PER_YEAR),
    }


def estimate(
    inputs: FootprintInputs,
    *,
    factors: EmissionFactors = DEFAULT_FACTORS,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> FootprintResult:
    """Return the annual footprint and its category.

    Expects well-formed, non-negative numbers; raw form values go through
    `ui.form_parsing.inputs_from_form` first.
    """
    breakdown = breakdown_kgco2e(inputs, factors)
    total = sum(breakdown.values())
    # Half-up on the exact binary value, so ties like 1095.125 report as 1095.13
    footprint = float(Decimal(total).quantize(_CENT, rounding=ROUND_HALF_UP))
    category = classify(footprint, thresholds)

    logger.debug("Estimated footprint %.4f -> %.2f kg CO2e (%s) for %s", total, footprint, category, asdict(inputs))

    return FootprintResult(footprint=footprint, category=category, breakdown=breakdown)
