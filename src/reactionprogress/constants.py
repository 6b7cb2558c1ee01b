"""Fixed species slots, limits and default values."""

from __future__ import annotations

SPECIES_NAMES: tuple[str, ...] = ("A", "B", "C", "X", "Y", "Z")
SLOT_COUNT = len(SPECIES_NAMES)

REACTANT_SLOTS: tuple[int, ...] = (0, 1, 2)
PRODUCT_SLOTS: tuple[int, ...] = (3, 4, 5)

MAX_MOLES = 10_000_000.0

# Stoichiometric numbers are negative for reactants.
DEFAULT_COEFFICIENTS: tuple[float, ...] = (-2.0, -1.0, 0.0, 2.0, 0.0, 0.0)
DEFAULT_INITIAL_AMOUNTS: tuple[float, ...] = (1.0, 1.0, 0.0, 0.0, 0.0, 0.0)
DEFAULT_MOLAR_MASSES: tuple[float, ...] = (1.0,) * SLOT_COUNT

SIGNIFICANT_FIGURES = 4
DECIMALS = 6
GRAPH_POINTS = 101

COLORS = {
    "initial": "#aa0000",
    "end": "#0000aa",
    "A": "#111111",
    "B": "#00aa00",
    "C": "#00aaaa",
    "X": "#aa00aa",
    "Y": "#ff8800",
    "Z": "#eecc33",
    "indicator": "#aa0000",
    "grid": "#999999",
}
