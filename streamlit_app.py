from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict
from typing import Optional, Tuple

import streamlit as st

from estimation.estimator import FootprintInputs
from estimation.factors import (
    DEFAULT_FACTORS,
    DEFAULT_THRESHOLDS,
    DIETS,
    EmissionFactors,
    factor_table,
    load_factor_table,
)
from ui.form_parsing import DIET_LABELS, FIELDS, GAS_FIELD, inputs_from_form
from ui.session import EditingState, ResultState, calculate, initial_state, reset

LOG_LEVEL = os.environ.get("FOOTPRINT_LOG_LEVEL", "INFO")
FACTORS_FILE = os.environ.get("FOOTPRINT_FACTORS_FILE")

logging.basicConfig(level=LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

STATE_KEY = "calculator"
INCLUDE_GAS_KEY = "include_gas"

st.set_page_config(page_title="Carbon Footprint Calculator", layout="centered")
st.title("Carbon Footprint Calculator")


# --------- Helpers ---------
def _widget_key(name: str) -> str:
    return f"field_{name}"


def load_factors(path: Optional[str]) -> Tuple[EmissionFactors, Optional[str]]:
    """Return the factor table to use and an error message if `path` could not be used."""
    if not path:
        return DEFAULT_FACTORS, None
    try:
        return load_factor_table(path), None
    except (OSError, ValueError) as e:
        logger.error("Could not load factor table %s: %s", path, e)
        return DEFAULT_FACTORS, f"Could not load factor table '{path}': {e}. Using default factors."


def _load_widgets(draft: FootprintInputs) -> None:
    for spec in FIELDS + (GAS_FIELD,):
        st.session_state[_widget_key(spec.name)] = float(getattr(draft, spec.name))
    st.session_state[_widget_key("diet")] = draft.diet
    st.session_state[INCLUDE_GAS_KEY] = draft.gas > 0


def _ensure_widgets(draft: FootprintInputs) -> None:
    # Widgets are dropped from session state while the result card is shown
    if any(_widget_key(spec.name) not in st.session_state for spec in FIELDS):
        _load_widgets(draft)


def _on_calculate() -> None:
    values = {spec.name: st.session_state.get(_widget_key(spec.name)) for spec in FIELDS}
    if st.session_state.get(INCLUDE_GAS_KEY):
        values[GAS_FIELD.name] = st.session_state.get(_widget_key(GAS_FIELD.name))
    values["diet"] = st.session_state.get(_widget_key("diet"))
    st.session_state[STATE_KEY] = calculate(
        st.session_state[STATE_KEY],
        inputs_from_form(values),
        factors=factors,
        thresholds=DEFAULT_THRESHOLDS,
    )


def _on_reset() -> None:
    st.session_state[STATE_KEY] = reset(st.session_state[STATE_KEY])
    _load_widgets(st.session_state[STATE_KEY].draft)


factors, factors_error = load_factors(FACTORS_FILE)
if factors_error:
    st.error(factors_error)

if STATE_KEY not in st.session_state:
    st.session_state[STATE_KEY] = initial_state()

state = st.session_state[STATE_KEY]

# --------- Sidebar ---------
with st.sidebar:
    st.header("Emission factors")
    st.caption("kg CO2e per unit of activity. Diet values are per day.")
    st.json(factor_table(factors))
    st.header("Footprint levels")
    st.write(f"Low: up to **{DEFAULT_THRESHOLDS.low:,.0f}** kg CO2e/year")
    st.write(f"Medium: up to **{DEFAULT_THRESHOLDS.medium:,.0f}** kg CO2e/year")
    st.write(f"High: above **{DEFAULT_THRESHOLDS.medium:,.0f}** kg CO2e/year")

# --------- Editing ---------
if isinstance(state, EditingState):
    _ensure_widgets(state.draft)
    st.subheader("Calculate Your Carbon Footprint")

    for spec in FIELDS:
        st.number_input(spec.label, min_value=0.0, step=1.0, help=f"Unit: {spec.unit}", key=_widget_key(spec.name))

    st.selectbox(
        "Dietary Habits",
        DIETS,
        format_func=lambda d: DIET_LABELS[d],
        key=_widget_key("diet"),
    )

    include_gas = st.checkbox(
        "Include gasoline",
        key=INCLUDE_GAS_KEY,
        help=f"Adds weekly gasoline use ({factors.gas} kg CO2e per liter).",
    )
    if include_gas:
        st.number_input(
            GAS_FIELD.label, min_value=0.0, step=1.0, help=f"Unit: {GAS_FIELD.unit}", key=_widget_key(GAS_FIELD.name)
        )

    st.button("Calculate footprint", type="primary", key="calculate", on_click=_on_calculate)

# --------- Result ---------
elif isinstance(state, ResultState):
    result = state.result
    st.subheader("Your Annual Carbon Footprint")
    st.metric("Annual footprint", f"{result.footprint:,.2f} kg CO₂e")

    level = f"Carbon Footprint Level: **{result.category}**"
    if result.category == "Low":
        st.success(level)
    elif result.category == "Medium":
        st.warning(level)
    else:
        st.error(level)

    st.subheader("Breakdown")
    rows = []
    for k, v in result.breakdown.items():
        rows.append({"component": k, "kgCO2e": f"{float(v):,.2f}"})
    st.table(rows)

    with st.expander("Inputs used"):
        st.json(asdict(state.inputs))

    st.download_button(
        "Download result JSON",
        data=json.dumps(result.to_dict(), indent=2),
        file_name="footprint_result.json",
        mime="application/json",
    )
    st.button("Back to Calculator", key="reset", on_click=_on_reset)

st.divider()
st.caption("© 2024 Carbon Calculator | Designed for a Sustainable Future")
