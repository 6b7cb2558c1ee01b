"""Conversions between stored moles and displayed amounts."""

from __future__ import annotations

from typing import Union

import numpy as np

from reactionprogress.constants import DECIMALS, SIGNIFICANT_FIGURES
from reactionprogress.models import DisplayMode

Amount = Union[float, np.ndarray]


def to_display(moles: Amount, molar_mass: Amount, mode: DisplayMode | str) -> Amount:
    """Scale a molar amount for display: grams in mass mode, moles otherwise."""
    if DisplayMode(mode) is DisplayMode.MASS:
        return moles * molar_mass
    return moles


def from_display(value: Amount, molar_mass: Amount, mode: DisplayMode | str) -> Amount:
    """Inverse of :func:`to_display`, giving moles."""
    if DisplayMode(mode) is DisplayMode.MASS:
        return value / molar_mass
    return value


def unit_label(mode: DisplayMode | str) -> str:
    return "grams" if DisplayMode(mode) is DisplayMode.MASS else "moles"


def round_sig(
    value: float, sigfigs: int = SIGNIFICANT_FIGURES, decimals: int | None = DECIMALS
) -> float:
    """Round to ``sigfigs`` significant figures, then to ``decimals`` places.

    The second rounding hides floating-point noise such as ``1e-17`` left
    over from subtracting nearly equal amounts.
    """
    rounded = float(f"{value:.{sigfigs}g}")
    if decimals is None:
        return rounded
    # adding 0.0 turns -0.0 into 0.0
    return round(rounded, decimals) + 0.0
