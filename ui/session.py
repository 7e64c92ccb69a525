"""Calculator session: Editing <-> Result.

Editing holds the draft inputs; Result holds the inputs that were submitted
together with their computed result. `calculate` moves Editing -> Result and
`reset` moves back to Editing with default inputs, dropping the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from estimation.estimator import FootprintInputs, FootprintResult, default_inputs, estimate
from estimation.factors import DEFAULT_FACTORS, DEFAULT_THRESHOLDS, EmissionFactors, Thresholds

logger = logging.getLogger(__name__)


class InvalidTransition(RuntimeError):
    pass


@dataclass(frozen=True)
class EditingState:
    draft: FootprintInputs


@dataclass(frozen=True)
class ResultState:
    inputs: FootprintInputs
    result: FootprintResult


CalculatorState = Union[EditingState, ResultState]


def initial_state() -> EditingState:
    return EditingState(draft=default_inputs())


def calculate(
    state: CalculatorState,
    draft: Optional[FootprintInputs] = None,
    *,
    factors: EmissionFactors = DEFAULT_FACTORS,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> ResultState:
    """Compute the result for `draft` (or the state's own draft)."""
    if not isinstance(state, EditingState):
        raise InvalidTransition("calculate is only valid while editing; reset first")
    inputs = draft if draft is not None else state.draft
    result = estimate(inputs, factors=factors, thresholds=thresholds)
    logger.info("Calculated footprint %.2f kg CO2e (%s)", result.footprint, result.category)
    return ResultState(inputs=inputs, result=result)


def reset(state: CalculatorState) -> EditingState:
    if isinstance(state, ResultState):
        logger.info("Calculator reset")
    return initial_state()
