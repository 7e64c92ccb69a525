from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from estimation.estimator import FootprintInputs, default_inputs
from estimation.factors import DIETS, Diet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    unit: str


# Numeric form fields, in display order
FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("transportation", "Transportation (km/week)", "km/week"),
    FieldSpec("electricity", "Electricity Usage (kWh/month)", "kWh/month"),
    FieldSpec("lpg", "LPG Usage (kg/month)", "kg/month"),
    FieldSpec("png", "PNG Usage (SCM/month)", "SCM/month"),
    FieldSpec("waste", "Waste Generated (kg/week)", "kg/week"),
)

GAS_FIELD = FieldSpec("gas", "Gasoline Usage (liters/week)", "L/week")

DIET_LABELS = {
    "low": "Low-Impact (Vegetarian)",
    "average": "Average (Balanced Diet)",
    "high": "High-Impact (Meat Heavy)",
}


def parse_quantity(raw: Any) -> float:
    """Coerce a raw field value to a non-negative float.

    Empty, non-numeric, non-finite and negative values count as 0 so the
    calculator always has something to compute.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Non-numeric quantity %r treated as 0", raw)
        return 0.0
    if not math.isfinite(value) or value < 0:
        logger.warning("Out-of-range quantity %r treated as 0", raw)
        return 0.0
    return value


def parse_diet(raw: Any) -> Diet:
    key = str(raw).strip().lower() if raw is not None else ""
    if key in DIETS:
        return key  # type: ignore[return-value]
    logger.warning("Unknown diet %r, using 'average'", raw)
    return "average"


def inputs_from_form(values: Mapping[str, Any]) -> FootprintInputs:
    """Build estimator inputs from raw form values keyed by field name.

    Missing fields keep their defaults.
    """
    defaults = default_inputs()
    quantities = {}
    for spec in FIELDS + (GAS_FIELD,):
        if spec.name in values:
            quantities[spec.name] = parse_quantity(values[spec.name])
        else:
            quantities[spec.name] = getattr(defaults, spec.name)
    diet = parse_diet(values["diet"]) if "diet" in values else defaults.diet
    return FootprintInputs(diet=diet, **quantities)
