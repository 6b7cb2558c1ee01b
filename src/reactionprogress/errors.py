"""Validation errors raised by the reaction model.

Every error leaves the :class:`~reactionprogress.reaction.Reaction` in its
last valid state. The message is suitable for showing to the user as-is.
"""

from __future__ import annotations


class ReactionError(ValueError):
    """Base class for rejected reaction edits."""


class InvalidCoefficientSign(ReactionError):
    pass


class DegenerateReaction(ReactionError):
    pass


class AmountOutOfBounds(ReactionError):
    pass


class InvalidMolarMass(ReactionError):
    pass


class OutOfRangeExtent(ReactionError):
    def __init__(self, value: float, min_extent: float, max_extent: float) -> None:
        self.value = value
        self.min_extent = min_extent
        self.max_extent = max_extent
        super().__init__(
            f"The extent must be a number between {min_extent:g} and {max_extent:g} inclusive."
        )


class InfeasibleReaction(ReactionError):
    def __init__(self, min_extent: float, max_extent: float) -> None:
        self.min_extent = min_extent
        self.max_extent = max_extent
        super().__init__(
            "The reaction cannot progress, as at least one of the products and at "
            "least one of the reactants that are taking part in the reaction have "
            "no initial amount."
        )
