import math
import unittest

import numpy as np

from reactionprogress.config import Settings
from reactionprogress.errors import (
    AmountOutOfBounds,
    DegenerateReaction,
    InfeasibleReaction,
    InvalidCoefficientSign,
    InvalidMolarMass,
    OutOfRangeExtent,
)
from reactionprogress.models import DisplayMode
from reactionprogress.reaction import Reaction


class TestReactionDefaults(unittest.TestCase):
    def setUp(self):
        # 2A + B -> 2X with 1 mol each of A and B
        self.reaction = Reaction()

    def test_initial_state(self):
        self.assertEqual(self.reaction.min_extent, 0.0)
        self.assertEqual(self.reaction.max_extent, 0.5)
        self.assertEqual(self.reaction.extent, 0.0)
        self.assertEqual(self.reaction.percent_complete, 0.0)
        self.assertIs(self.reaction.mode, DisplayMode.MOLE)

    def test_full_conversion(self):
        self.reaction.set_extent_by_percent(100)
        snapshot = self.reaction.recompute()

        self.assertEqual(snapshot.extent, 0.5)
        self.assertEqual(snapshot.percent_complete, 100.0)
        ends = [species.moles.end for species in snapshot.species]
        np.testing.assert_allclose(ends, [0.0, 0.5, 0.0, 1.0, 0.0, 0.0])
        changes = [species.moles.change for species in snapshot.species]
        np.testing.assert_allclose(changes, [-1.0, -0.5, 0.0, 1.0, 0.0, 0.0])

    def test_extremes(self):
        snapshot = self.reaction.recompute()
        at_min = [species.moles.at_min_extent for species in snapshot.species]
        at_max = [species.moles.at_max_extent for species in snapshot.species]
        np.testing.assert_allclose(at_min, [1.0, 1.0, 0.0, 0.0, 0.0, 0.0])
        np.testing.assert_allclose(at_max, [0.0, 0.5, 0.0, 1.0, 0.0, 0.0])

    def test_percent_is_clipped(self):
        self.reaction.set_extent_by_percent(150)
        self.assertEqual(self.reaction.extent, 0.5)
        self.reaction.set_extent_by_percent(-5)
        self.assertEqual(self.reaction.extent, 0.0)

    def test_percent_must_be_a_number(self):
        with self.assertRaises(ValueError):
            self.reaction.set_extent_by_percent(float("nan"))

    def test_direct_extent(self):
        self.reaction.set_extent_direct(0.25)
        self.assertEqual(self.reaction.extent, 0.25)
        self.assertEqual(self.reaction.percent_complete, 50.0)

    def test_direct_extent_out_of_range(self):
        self.reaction.set_extent_direct(0.25)
        with self.assertRaises(OutOfRangeExtent) as ctx:
            self.reaction.set_extent_direct(0.6)
        self.assertEqual(ctx.exception.max_extent, 0.5)
        self.assertEqual(self.reaction.extent, 0.25)

        with self.assertRaises(OutOfRangeExtent):
            self.reaction.set_extent_direct(-0.1)
        self.assertEqual(self.reaction.extent, 0.25)

    def test_amounts_at(self):
        np.testing.assert_allclose(
            self.reaction.amounts_at(0.25), [0.5, 0.75, 0.0, 0.5, 0.0, 0.0]
        )

    def test_extent_only_update_keeps_range(self):
        self.reaction.set_extent_direct(0.1)
        snapshot = self.reaction.recompute(inputs_changed=False)
        self.assertEqual(snapshot.extent, 0.1)
        self.assertEqual((snapshot.min_extent, snapshot.max_extent), (0.0, 0.5))

    def test_full_recompute_resets_extent(self):
        self.reaction.set_extent_direct(0.1)
        snapshot = self.reaction.recompute(inputs_changed=True)
        self.assertEqual(snapshot.extent, 0.0)

    def test_snapshot_as_dict(self):
        payload = self.reaction.recompute().as_dict()
        self.assertEqual(payload["mode"], "mole")
        self.assertEqual(len(payload["species"]), 6)
        self.assertEqual(payload["species"][0]["name"], "A")
        self.assertEqual(payload["species"][0]["moles"]["initial"], 1.0)
        self.assertEqual(payload["species"][3]["mass"]["at_max_extent"], 1.0)


class TestReactionEdits(unittest.TestCase):
    def setUp(self):
        self.reaction = Reaction()

    def test_coefficient_edit_recomputes_range(self):
        self.reaction.set_extent_by_percent(100)
        # A + B -> 2X, now limited by either reactant
        self.reaction.set_coefficient(0, -1)
        self.assertEqual(self.reaction.coefficients, (-1.0, -1.0, 0.0, 2.0, 0.0, 0.0))
        self.assertEqual(self.reaction.max_extent, 1.0)
        self.assertEqual(self.reaction.extent, 0.0)

    def test_reactant_coefficient_sign(self):
        with self.assertRaises(InvalidCoefficientSign):
            self.reaction.set_coefficient(0, 1)
        self.assertEqual(self.reaction.coefficients[0], -2.0)

    def test_product_coefficient_sign(self):
        with self.assertRaises(InvalidCoefficientSign):
            self.reaction.set_coefficient(3, -1)
        self.assertEqual(self.reaction.coefficients[3], 2.0)

    def test_coefficient_must_be_finite(self):
        with self.assertRaises(InvalidCoefficientSign):
            self.reaction.set_coefficient(1, float("nan"))

    def test_all_reactants_zero(self):
        self.reaction.set_coefficient(0, 0)
        with self.assertRaises(DegenerateReaction):
            self.reaction.set_coefficient(1, 0)
        self.assertEqual(self.reaction.coefficients[:3], (0.0, -1.0, 0.0))

    def test_all_products_zero(self):
        with self.assertRaises(DegenerateReaction):
            self.reaction.set_coefficient(3, 0)

    def test_degenerate_constructor(self):
        with self.assertRaises(DegenerateReaction):
            Reaction(coefficients=[0, 0, 0, 1, 0, 0])

    def test_slot_out_of_range(self):
        with self.assertRaises(IndexError):
            self.reaction.set_coefficient(6, 1)
        with self.assertRaises(IndexError):
            self.reaction.set_initial_amount(-1, 1)

    def test_initial_amount_bounds(self):
        with self.assertRaises(AmountOutOfBounds):
            self.reaction.set_initial_amount(0, -1)
        with self.assertRaises(AmountOutOfBounds):
            self.reaction.set_initial_amount(0, 1e8)
        self.assertEqual(self.reaction.initial_amounts[0], 1.0)

        self.reaction.set_initial_amount(0, 1e7)
        self.assertEqual(self.reaction.initial_amounts[0], 1e7)

    def test_configurable_max_moles(self):
        reaction = Reaction(max_moles=10)
        with self.assertRaises(AmountOutOfBounds):
            reaction.set_initial_amount(1, 11)
        reaction.set_initial_amount(1, 10)
        self.assertEqual(reaction.max_extent, 0.5)

    def test_infeasible_edit_is_rejected(self):
        self.reaction.set_extent_direct(0.2)
        # No A and no X leaves nothing to react in either direction
        with self.assertRaises(InfeasibleReaction):
            self.reaction.set_initial_amount(0, 0)
        self.assertEqual(self.reaction.initial_amounts[0], 1.0)
        self.assertEqual(self.reaction.extent, 0.2)
        self.assertEqual(self.reaction.max_extent, 0.5)

    def test_infeasible_constructor(self):
        with self.assertRaises(InfeasibleReaction):
            Reaction(initial_amounts=[0, 0, 0, 0, 0, 0])

    def test_initial_amount_edit_resets_extent(self):
        self.reaction.set_extent_by_percent(100)
        self.reaction.set_initial_amount(3, 1)
        self.assertEqual(self.reaction.extent, 0.0)
        self.assertEqual(self.reaction.min_extent, -0.5)
        self.assertEqual(self.reaction.max_extent, 0.5)
        self.assertEqual(self.reaction.percent_complete, 50.0)


class TestMolarMass(unittest.TestCase):
    def test_mass_is_preserved(self):
        reaction = Reaction(initial_amounts=[4, 1, 0, 0, 0, 0])
        reaction.set_molar_mass(0, 2)

        self.assertEqual(reaction.initial_amounts[0], 2.0)
        self.assertEqual(reaction.molar_masses[0], 2.0)
        snapshot = reaction.recompute()
        self.assertEqual(snapshot.species[0].mass.initial, 4.0)
        # A now limits at 2 mol / 2
        self.assertEqual(reaction.max_extent, 1.0)

    def test_invalid_molar_mass(self):
        reaction = Reaction()
        for value in (0, -1, float("nan"), float("inf")):
            with self.assertRaises(InvalidMolarMass):
                reaction.set_molar_mass(0, value)
        self.assertEqual(reaction.molar_masses[0], 1.0)
        self.assertEqual(reaction.initial_amounts[0], 1.0)

    def test_rescaled_moles_are_bounded(self):
        reaction = Reaction(max_moles=10)
        with self.assertRaises(AmountOutOfBounds):
            reaction.set_molar_mass(0, 0.05)
        self.assertEqual(reaction.molar_masses[0], 1.0)

    def test_mass_snapshot(self):
        reaction = Reaction(molar_masses=[2, 1, 1, 3, 1, 1])
        reaction.set_extent_by_percent(100)
        snapshot = reaction.recompute()

        self.assertEqual(snapshot.species[0].mass.initial, 2.0)
        self.assertEqual(snapshot.species[0].mass.change, -2.0)
        self.assertEqual(snapshot.species[3].mass.end, 3.0)
        self.assertEqual(snapshot.species[3].amounts(DisplayMode.MASS).at_max_extent, 3.0)
        self.assertEqual(snapshot.species[3].amounts(DisplayMode.MOLE).at_max_extent, 1.0)


class TestDisplayMode(unittest.TestCase):
    def test_mass_mode_entry(self):
        reaction = Reaction()
        reaction.set_molar_mass(1, 4)
        self.assertEqual(reaction.initial_amounts[1], 0.25)

        reaction.set_mode("mass")
        self.assertIs(reaction.mode, DisplayMode.MASS)
        reaction.set_initial_amount(1, 8)
        self.assertEqual(reaction.initial_amounts[1], 2.0)

        # An explicit mode overrides the reaction's own
        reaction.set_initial_amount(1, 3, mode=DisplayMode.MOLE)
        self.assertEqual(reaction.initial_amounts[1], 3.0)

    def test_mode_switch_keeps_moles_and_extent(self):
        reaction = Reaction()
        reaction.set_extent_direct(0.3)
        reaction.set_mode(DisplayMode.MASS)
        self.assertEqual(reaction.extent, 0.3)
        self.assertEqual(reaction.initial_amounts, (1.0, 1.0, 0.0, 0.0, 0.0, 0.0))
        self.assertIs(reaction.recompute().mode, DisplayMode.MASS)

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            Reaction().set_mode("volume")


class TestFromSettings(unittest.TestCase):
    def test_settings_are_applied(self):
        settings = Settings(
            max_moles=100.0,
            coefficients=(-1.0, 0.0, 0.0, 1.0, 0.0, 0.0),
            initial_amounts=(2.0, 0.0, 0.0, 1.0, 0.0, 0.0),
            mode=DisplayMode.MASS,
        )
        reaction = Reaction.from_settings(settings)
        self.assertEqual((reaction.min_extent, reaction.max_extent), (-1.0, 2.0))
        self.assertAlmostEqual(reaction.percent_complete, 100.0 / 3.0)
        self.assertEqual(reaction.max_moles, 100.0)
        self.assertIs(reaction.mode, DisplayMode.MASS)
        self.assertTrue(math.isfinite(reaction.max_extent))


if __name__ == '__main__':
    unittest.main()
