"""Table formatting helpers for the GUI layer."""

from __future__ import annotations

from dataclasses import dataclass

from reactionprogress.constants import DECIMALS, SIGNIFICANT_FIGURES
from reactionprogress.display import round_sig, unit_label
from reactionprogress.models import ReactionSnapshot


@dataclass(frozen=True)
class TableRow:
    name: str
    initial: str
    change: str
    end: str


def column_headers(snapshot: ReactionSnapshot) -> list[str]:
    unit = unit_label(snapshot.mode)
    return [f"Initial ({unit})", f"Change ({unit})", f"End ({unit})"]


def format_number(
    value: float, sigfigs: int = SIGNIFICANT_FIGURES, decimals: int = DECIMALS
) -> str:
    return f"{round_sig(value, sigfigs, decimals):g}"


def table_rows(
    snapshot: ReactionSnapshot,
    sigfigs: int = SIGNIFICANT_FIGURES,
    decimals: int = DECIMALS,
) -> list[TableRow]:
    rows = []
    for species in snapshot.species:
        amounts = species.amounts(snapshot.mode)
        rows.append(
            TableRow(
                name=species.name,
                initial=format_number(amounts.initial, sigfigs, decimals),
                change=format_number(amounts.change, sigfigs, decimals),
                end=format_number(amounts.end, sigfigs, decimals),
            )
        )
    return rows


def extent_text_edited(
    text: str,
    extent: float,
    sigfigs: int = SIGNIFICANT_FIGURES,
    decimals: int = DECIMALS,
) -> bool:
    """True when ``text`` differs from the rounded extent the field was filled with."""
    return text.strip() != format_number(extent, sigfigs, decimals)
