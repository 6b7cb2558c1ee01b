"""Extent-of-reaction helpers.

The extent ξ measures how far the reaction has proceeded, in moles of
reaction events. For a species with signed stoichiometric number ν_i and
initial amount n_i0 the amount at any extent is

    n_i(ξ) = n_i0 + ξ * ν_i

The feasible range of ξ is bounded above by reactant depletion and below by
products, which cannot go negative when the reaction runs backwards.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from reactionprogress.constants import PRODUCT_SLOTS, REACTANT_SLOTS, SLOT_COUNT
from reactionprogress.errors import InfeasibleReaction


def extent_range(
    coefficients: Sequence[float], initial_amounts: Sequence[float]
) -> tuple[float, float]:
    """Return the feasible ``(min_extent, max_extent)`` interval.

    Species with a zero coefficient do not take part in the reaction and do
    not bound the range. A product with no initial amount gives a lower bound
    of 0, so the reaction cannot run backwards past its starting point.

    Raises:
        InfeasibleReaction: if the interval is empty or a single point.
    """
    _check_length(coefficients, "coefficients")
    _check_length(initial_amounts, "initial_amounts")

    max_extent = math.inf
    min_extent = -math.inf
    for slot in REACTANT_SLOTS:
        if coefficients[slot] != 0:
            max_extent = min(max_extent, -initial_amounts[slot] / coefficients[slot])
    for slot in PRODUCT_SLOTS:
        if coefficients[slot] != 0:
            min_extent = max(min_extent, -initial_amounts[slot] / coefficients[slot])

    if not max_extent > min_extent:
        raise InfeasibleReaction(min_extent, max_extent)
    # a product with no initial amount gives -0.0
    return min_extent + 0.0, max_extent + 0.0


def percent_to_extent(percent: float, min_extent: float, max_extent: float) -> float:
    return min_extent + percent / 100.0 * _span(min_extent, max_extent)


def extent_to_percent(extent: float, min_extent: float, max_extent: float) -> float:
    return (extent - min_extent) / _span(min_extent, max_extent) * 100.0


def amounts_at(
    extent: float, coefficients: Sequence[float], initial_amounts: Sequence[float]
) -> np.ndarray:
    """Amount of every species (moles) once the reaction reaches ``extent``."""
    return np.asarray(initial_amounts, dtype=float) + extent * np.asarray(
        coefficients, dtype=float
    )


def amount_at(
    extent: float, slot: int, coefficients: Sequence[float], initial_amounts: Sequence[float]
) -> float:
    return initial_amounts[slot] + extent * coefficients[slot]


def _span(min_extent: float, max_extent: float) -> float:
    span = max_extent - min_extent
    if not math.isfinite(span) or span <= 0:
        raise InfeasibleReaction(min_extent, max_extent)
    return span


def _check_length(values: Sequence[float], label: str) -> None:
    if len(values) != SLOT_COUNT:
        raise ValueError(f"Expected {SLOT_COUNT} {label}, got {len(values)}")
