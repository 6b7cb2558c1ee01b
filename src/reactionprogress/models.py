"""Data structures for reaction snapshots and display modes."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class DisplayMode(str, Enum):
    MOLE = "mole"
    MASS = "mass"


@dataclass(frozen=True)
class AmountRow:
    initial: float
    change: float
    end: float
    at_min_extent: float
    at_max_extent: float


@dataclass(frozen=True)
class SpeciesSnapshot:
    name: str
    coefficient: float
    molar_mass: float
    moles: AmountRow
    mass: AmountRow

    def amounts(self, mode: DisplayMode) -> AmountRow:
        return self.mass if DisplayMode(mode) is DisplayMode.MASS else self.moles


@dataclass(frozen=True)
class ReactionSnapshot:
    """Render-ready state of a reaction at its current extent."""

    min_extent: float
    max_extent: float
    extent: float
    percent_complete: float
    mode: DisplayMode
    species: tuple[SpeciesSnapshot, ...]

    def as_dict(self) -> dict[str, object]:
        payload = asdict(self)
        payload["mode"] = self.mode.value
        return payload
