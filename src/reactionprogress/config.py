"""Session settings, optionally loaded from a JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Sequence

from reactionprogress.constants import (
    DECIMALS,
    DEFAULT_COEFFICIENTS,
    DEFAULT_INITIAL_AMOUNTS,
    DEFAULT_MOLAR_MASSES,
    GRAPH_POINTS,
    MAX_MOLES,
    SIGNIFICANT_FIGURES,
    SLOT_COUNT,
)
from reactionprogress.models import DisplayMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Defaults and limits for a reaction session.

    Attributes:
        max_moles: Upper bound accepted for any initial amount (mol).
        coefficients: Signed stoichiometric numbers for A, B, C, X, Y, Z.
        initial_amounts: Initial amounts (mol).
        molar_masses: Molar masses (g/mol).
        mode: Display mode the session starts in.
        significant_figures: Significant figures for displayed numbers.
        decimals: Decimal places displayed numbers are truncated to.
        graph_points: Samples per species in the amount-vs-extent series.
    """

    max_moles: float = MAX_MOLES
    coefficients: tuple[float, ...] = DEFAULT_COEFFICIENTS
    initial_amounts: tuple[float, ...] = DEFAULT_INITIAL_AMOUNTS
    molar_masses: tuple[float, ...] = DEFAULT_MOLAR_MASSES
    mode: DisplayMode = DisplayMode.MOLE
    significant_figures: int = SIGNIFICANT_FIGURES
    decimals: int = DECIMALS
    graph_points: int = GRAPH_POINTS


def parse_settings(data: Dict[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    if "max_moles" in data:
        values["max_moles"] = float(data["max_moles"])
        if values["max_moles"] <= 0:
            raise ValueError("max_moles must be greater than 0")
    for key in ("coefficients", "initial_amounts", "molar_masses"):
        if key in data:
            values[key] = _parse_slots(data[key], key)
    if "mode" in data:
        values["mode"] = DisplayMode(str(data["mode"]).lower())
    for key in ("significant_figures", "decimals", "graph_points"):
        if key in data:
            values[key] = int(data[key])
    if values.get("significant_figures", 1) < 1:
        raise ValueError("significant_figures must be at least 1")
    if values.get("graph_points", 2) < 2:
        raise ValueError("graph_points must be at least 2")
    return Settings(**values)


def load_settings(path: str | Path | None = None) -> Settings:
    """Read settings from a JSON file, or return the defaults."""
    if path is None:
        return Settings()
    with open(path, "r") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a JSON object")
    settings = parse_settings(data)
    logger.debug("Loaded settings from %s: %s", path, settings)
    return settings


def _parse_slots(values: Sequence[Any], key: str) -> tuple[float, ...]:
    if isinstance(values, (str, bytes)) or len(values) != SLOT_COUNT:
        raise ValueError(f"{key} must list exactly {SLOT_COUNT} numbers")
    return tuple(float(v) for v in values)
