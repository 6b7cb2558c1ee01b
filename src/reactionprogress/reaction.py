"""Mutable reaction state with validate-then-commit setters.

A :class:`Reaction` holds the six species slots of a single reaction and the
current extent. Every setter builds the candidate inputs, validates them and
only then commits, so a rejected edit leaves the previous state untouched.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from reactionprogress.config import Settings
from reactionprogress.constants import (
    DEFAULT_COEFFICIENTS,
    DEFAULT_INITIAL_AMOUNTS,
    DEFAULT_MOLAR_MASSES,
    MAX_MOLES,
    PRODUCT_SLOTS,
    REACTANT_SLOTS,
    SLOT_COUNT,
    SPECIES_NAMES,
)
from reactionprogress.display import from_display, to_display
from reactionprogress.errors import (
    AmountOutOfBounds,
    DegenerateReaction,
    InvalidCoefficientSign,
    InvalidMolarMass,
    OutOfRangeExtent,
)
from reactionprogress.extent import (
    amounts_at,
    extent_range,
    extent_to_percent,
    percent_to_extent,
)
from reactionprogress.models import (
    AmountRow,
    DisplayMode,
    ReactionSnapshot,
    SpeciesSnapshot,
)

logger = logging.getLogger(__name__)


def validate_coefficients(coefficients: Sequence[float]) -> None:
    """Check sign conventions and that both sides of the reaction take part."""
    for slot in REACTANT_SLOTS:
        if not (math.isfinite(coefficients[slot]) and coefficients[slot] <= 0):
            raise InvalidCoefficientSign(
                f"Coefficient of reactant {SPECIES_NAMES[slot]} must be less than "
                "or equal to 0."
            )
    for slot in PRODUCT_SLOTS:
        if not (math.isfinite(coefficients[slot]) and coefficients[slot] >= 0):
            raise InvalidCoefficientSign(
                f"Coefficient of product {SPECIES_NAMES[slot]} must be greater than "
                "or equal to 0."
            )
    if all(coefficients[slot] == 0 for slot in REACTANT_SLOTS):
        raise DegenerateReaction(
            "At least one of the coefficients on the reactants must be nonzero, "
            "or else no reaction can take place."
        )
    if all(coefficients[slot] == 0 for slot in PRODUCT_SLOTS):
        raise DegenerateReaction(
            "At least one of the coefficients on the products must be nonzero, "
            "or else no reaction can take place."
        )


def validate_initial_amount(moles: float, max_moles: float = MAX_MOLES) -> None:
    if not 0 <= moles <= max_moles:
        raise AmountOutOfBounds(
            f"The number of moles must be between 0 and {max_moles:g}, inclusive."
        )


def validate_molar_mass(molar_mass: float) -> None:
    if not (math.isfinite(molar_mass) and molar_mass > 0):
        raise InvalidMolarMass("Molar masses must be greater than 0.")


class Reaction:
    """A single reaction ``aA + bB + cC -> xX + yY + zZ`` and its progress.

    Amounts are stored in moles whatever the display mode. Coefficients are
    signed: negative for reactants, positive for products, 0 for species
    that do not take part.
    """

    def __init__(
        self,
        coefficients: Sequence[float] = DEFAULT_COEFFICIENTS,
        initial_amounts: Sequence[float] = DEFAULT_INITIAL_AMOUNTS,
        molar_masses: Sequence[float] = DEFAULT_MOLAR_MASSES,
        mode: DisplayMode | str = DisplayMode.MOLE,
        max_moles: float = MAX_MOLES,
    ) -> None:
        coefficients = _as_slots(coefficients, "coefficients")
        initial_amounts = _as_slots(initial_amounts, "initial_amounts")
        molar_masses = _as_slots(molar_masses, "molar_masses")

        validate_coefficients(coefficients)
        for moles in initial_amounts:
            validate_initial_amount(moles, max_moles)
        for molar_mass in molar_masses:
            validate_molar_mass(molar_mass)
        extent_range(coefficients, initial_amounts)

        self._coefficients = coefficients
        self._initial_amounts = initial_amounts
        self._molar_masses = molar_masses
        self._mode = DisplayMode(mode)
        self._max_moles = float(max_moles)
        self._extent = 0.0
        self.recompute(inputs_changed=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> Reaction:
        return cls(
            coefficients=settings.coefficients,
            initial_amounts=settings.initial_amounts,
            molar_masses=settings.molar_masses,
            mode=settings.mode,
            max_moles=settings.max_moles,
        )

    @property
    def coefficients(self) -> tuple[float, ...]:
        return tuple(float(c) for c in self._coefficients)

    @property
    def initial_amounts(self) -> tuple[float, ...]:
        return tuple(float(n) for n in self._initial_amounts)

    @property
    def molar_masses(self) -> tuple[float, ...]:
        return tuple(float(m) for m in self._molar_masses)

    @property
    def mode(self) -> DisplayMode:
        return self._mode

    @property
    def max_moles(self) -> float:
        return self._max_moles

    @property
    def extent(self) -> float:
        return self._extent

    @property
    def min_extent(self) -> float:
        return self._min_extent

    @property
    def max_extent(self) -> float:
        return self._max_extent

    @property
    def percent_complete(self) -> float:
        return extent_to_percent(self._extent, self._min_extent, self._max_extent)

    def set_coefficient(self, slot: int, value: float) -> None:
        slot = _check_slot(slot)
        coefficients = self._coefficients.copy()
        coefficients[slot] = float(value)
        validate_coefficients(coefficients)
        self._commit(coefficients=coefficients)

    def set_initial_amount(
        self, slot: int, value: float, mode: DisplayMode | str | None = None
    ) -> None:
        """Set an initial amount given in moles, or in grams when in mass mode."""
        slot = _check_slot(slot)
        mode = self._mode if mode is None else DisplayMode(mode)
        moles = float(from_display(float(value), self._molar_masses[slot], mode))
        validate_initial_amount(moles, self._max_moles)
        initial_amounts = self._initial_amounts.copy()
        initial_amounts[slot] = moles
        self._commit(initial_amounts=initial_amounts)

    def set_molar_mass(self, slot: int, value: float) -> None:
        """Change a molar mass, rescaling the stored moles so the mass is kept."""
        slot = _check_slot(slot)
        value = float(value)
        validate_molar_mass(value)
        moles = self._initial_amounts[slot] * self._molar_masses[slot] / value
        validate_initial_amount(moles, self._max_moles)

        molar_masses = self._molar_masses.copy()
        molar_masses[slot] = value
        initial_amounts = self._initial_amounts.copy()
        initial_amounts[slot] = moles
        self._commit(initial_amounts=initial_amounts, molar_masses=molar_masses)

    def set_mode(self, mode: DisplayMode | str) -> None:
        self._mode = DisplayMode(mode)
        logger.debug("Display mode set to %s", self._mode.value)

    def set_extent_by_percent(self, percent: float) -> None:
        percent = float(percent)
        if math.isnan(percent):
            raise ValueError("Percent complete must be a number")
        percent = float(np.clip(percent, 0.0, 100.0))
        extent = percent_to_extent(percent, self._min_extent, self._max_extent)
        self._extent = min(max(extent, self._min_extent), self._max_extent)

    def set_extent_direct(self, value: float) -> None:
        value = float(value)
        if not self._min_extent <= value <= self._max_extent:
            raise OutOfRangeExtent(value, self._min_extent, self._max_extent)
        self._extent = value

    def amounts_at(self, extent: float) -> np.ndarray:
        """Moles of every species at an arbitrary extent."""
        return amounts_at(extent, self._coefficients, self._initial_amounts)

    def recompute(self, inputs_changed: bool = False) -> ReactionSnapshot:
        """Derive change and end amounts, and the extent range when inputs changed.

        A full recomputation resets the extent to 0, which lies in every
        feasible range because initial amounts are never negative.
        """
        if inputs_changed:
            self._min_extent, self._max_extent = extent_range(
                self._coefficients, self._initial_amounts
            )
            self._extent = 0.0
            self._at_min_extent = self.amounts_at(self._min_extent)
            self._at_max_extent = self.amounts_at(self._max_extent)
            logger.debug(
                "Extent range recomputed: [%g, %g]", self._min_extent, self._max_extent
            )

        change = self._extent * self._coefficients
        end = self._initial_amounts + change
        molar = np.vstack(
            [self._initial_amounts, change, end, self._at_min_extent, self._at_max_extent]
        )
        mass = to_display(molar, self._molar_masses, DisplayMode.MASS)

        species = tuple(
            SpeciesSnapshot(
                name=name,
                coefficient=float(self._coefficients[slot]),
                molar_mass=float(self._molar_masses[slot]),
                moles=AmountRow(*(float(v) for v in molar[:, slot])),
                mass=AmountRow(*(float(v) for v in mass[:, slot])),
            )
            for slot, name in enumerate(SPECIES_NAMES)
        )
        return ReactionSnapshot(
            min_extent=self._min_extent,
            max_extent=self._max_extent,
            extent=self._extent,
            percent_complete=self.percent_complete,
            mode=self._mode,
            species=species,
        )

    def _commit(
        self,
        coefficients: np.ndarray | None = None,
        initial_amounts: np.ndarray | None = None,
        molar_masses: np.ndarray | None = None,
    ) -> None:
        if coefficients is None:
            coefficients = self._coefficients
        if initial_amounts is None:
            initial_amounts = self._initial_amounts
        if molar_masses is None:
            molar_masses = self._molar_masses

        # Raises InfeasibleReaction before anything is replaced.
        extent_range(coefficients, initial_amounts)

        self._coefficients = coefficients
        self._initial_amounts = initial_amounts
        self._molar_masses = molar_masses
        logger.debug(
            "Committed coefficients=%s initial=%s molar_masses=%s",
            coefficients.tolist(),
            initial_amounts.tolist(),
            molar_masses.tolist(),
        )
        self.recompute(inputs_changed=True)


def _as_slots(values: Sequence[float], label: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.shape != (SLOT_COUNT,):
        raise ValueError(f"Expected {SLOT_COUNT} {label}, got {array.size}")
    return array.copy()


def _check_slot(slot: int) -> int:
    if not 0 <= slot < SLOT_COUNT:
        raise IndexError(f"Species slot must be between 0 and {SLOT_COUNT - 1}, got {slot}")
    return int(slot)
