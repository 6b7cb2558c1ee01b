"""Reaction Progress core package."""

from reactionprogress.errors import (
    AmountOutOfBounds,
    DegenerateReaction,
    InfeasibleReaction,
    InvalidCoefficientSign,
    InvalidMolarMass,
    OutOfRangeExtent,
    ReactionError,
)
from reactionprogress.extent import extent_range, extent_to_percent, percent_to_extent
from reactionprogress.models import DisplayMode, ReactionSnapshot, SpeciesSnapshot
from reactionprogress.reaction import Reaction

__all__ = [
    "AmountOutOfBounds",
    "DegenerateReaction",
    "InfeasibleReaction",
    "InvalidCoefficientSign",
    "InvalidMolarMass",
    "OutOfRangeExtent",
    "ReactionError",
    "extent_range",
    "extent_to_percent",
    "percent_to_extent",
    "DisplayMode",
    "ReactionSnapshot",
    "SpeciesSnapshot",
    "Reaction",
]
