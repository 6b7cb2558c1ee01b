"""Chart data and matplotlib drawing for reaction snapshots.

Two views are drawn from a :class:`ReactionSnapshot`:

- a bar chart comparing the initial and current amount of every species;
- a line graph of every species' amount across the feasible extent range,
  with a vertical indicator at the current extent.

Amounts vary linearly with extent, so each species is a straight line from
its amount at ``min_extent`` to its amount at ``max_extent``.
"""

from __future__ import annotations

from typing import Dict

import numpy as np
from matplotlib.axes import Axes

from reactionprogress.constants import COLORS, GRAPH_POINTS
from reactionprogress.display import unit_label
from reactionprogress.models import DisplayMode, ReactionSnapshot


def axis_maximum(snapshot: ReactionSnapshot, mode: DisplayMode | None = None) -> float:
    """Largest amount either extreme of the range reaches, used to scale both charts."""
    mode = snapshot.mode if mode is None else mode
    values = [
        value
        for species in snapshot.species
        for value in (
            species.amounts(mode).at_min_extent,
            species.amounts(mode).at_max_extent,
        )
    ]
    maximum = max(values)
    return maximum if maximum > 0 else 1.0


def bar_chart_data(
    snapshot: ReactionSnapshot, mode: DisplayMode | None = None
) -> tuple[list[str], np.ndarray, np.ndarray]:
    """Return species names with their initial and current amounts."""
    mode = snapshot.mode if mode is None else mode
    names = [species.name for species in snapshot.species]
    initial = np.array([species.amounts(mode).initial for species in snapshot.species])
    current = np.array([species.amounts(mode).end for species in snapshot.species])
    return names, initial, current


def extent_series(
    snapshot: ReactionSnapshot,
    mode: DisplayMode | None = None,
    points: int = GRAPH_POINTS,
) -> tuple[np.ndarray, Dict[str, np.ndarray]]:
    """Sample every species' amount on ``points`` extents across the range."""
    mode = snapshot.mode if mode is None else mode
    extents = np.linspace(snapshot.min_extent, snapshot.max_extent, points)
    fraction = np.linspace(0.0, 1.0, points)
    series = {}
    for species in snapshot.species:
        amounts = species.amounts(mode)
        series[species.name] = amounts.at_min_extent + fraction * (
            amounts.at_max_extent - amounts.at_min_extent
        )
    return extents, series


def draw_bar_chart(axes: Axes, snapshot: ReactionSnapshot) -> None:
    names, initial, current = bar_chart_data(snapshot)
    positions = np.arange(len(names))
    width = 0.38

    axes.clear()
    axes.bar(positions - width / 2, initial, width, label="Initial", color=COLORS["initial"])
    axes.bar(positions + width / 2, current, width, label="Current", color=COLORS["end"])
    axes.set_xticks(positions)
    axes.set_xticklabels(names)
    axes.set_ylim(0.0, axis_maximum(snapshot) * 1.05)
    axes.set_ylabel(f"Amount ({unit_label(snapshot.mode)})")
    axes.set_title("Initial and Current Amounts")
    axes.grid(axis="y", color=COLORS["grid"], linewidth=0.5)
    axes.legend()


def draw_extent_graph(
    axes: Axes, snapshot: ReactionSnapshot, points: int = GRAPH_POINTS
) -> None:
    extents, series = extent_series(snapshot, points=points)

    axes.clear()
    for name, amounts in series.items():
        axes.plot(extents, amounts, label=name, color=COLORS[name])
    axes.axvline(snapshot.extent, color=COLORS["indicator"], linestyle="--", label="Current")
    axes.set_xlim(snapshot.min_extent, snapshot.max_extent)
    axes.set_ylim(0.0, axis_maximum(snapshot) * 1.05)
    axes.set_xlabel("Extent of reaction (mol)")
    axes.set_ylabel(f"Amount ({unit_label(snapshot.mode)})")
    axes.set_title("Amount vs. Extent")
    axes.grid(color=COLORS["grid"], linewidth=0.5)
    axes.legend()
