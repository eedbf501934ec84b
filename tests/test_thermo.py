import unittest

import numpy as np

from zerod import IdealGasPhase, SurfacePhase
from zerod.constants import GAS_CONSTANT, IDEAL_GAS_TYPE

from mechanisms import H2O2_SPECIES, h2o2_gas


class TestIdealGasPhase(unittest.TestCase):

    def setUp(self):
        self.gas = h2o2_gas(T=900.0, P=2e5)

    def test_type(self):
        self.assertEqual(self.gas.type, IDEAL_GAS_TYPE)
        self.assertEqual(self.gas.species_names, H2O2_SPECIES)

    def test_equation_of_state(self):
        """
        Check that the state set from T, P, X is consistent with the ideal gas law
        """
        gas = self.gas
        self.assertAlmostEqual(gas.pressure / 2e5, 1.0, places=12)
        self.assertAlmostEqual(np.sum(gas.mass_fractions), 1.0, places=14)
        self.assertAlmostEqual(np.sum(gas.mole_fractions), 1.0, places=14)
        rho = 2e5 * gas.mean_molecular_weight / (GAS_CONSTANT * 900.0)
        self.assertAlmostEqual(gas.density / rho, 1.0, places=12)

    def test_mixture_properties(self):
        """
        Check the relations between the mixture and the species properties
        """
        gas = self.gas
        y_w = gas.mass_fractions / gas.molecular_weights
        self.assertAlmostEqual(
            gas.cv_mass, gas.cp_mass - GAS_CONSTANT / gas.mean_molecular_weight, places=8
        )
        u_mix = np.dot(y_w, gas.partial_molar_int_energies())
        self.assertAlmostEqual(u_mix / gas.int_energy_mass, 1.0, places=10)
        self.assertAlmostEqual(
            gas.enthalpy_mass - gas.int_energy_mass, gas.pressure / gas.density, places=6
        )

    def test_heat_capacity_derivative(self):
        """
        Check the analytic dCp/dT against central finite differences
        """
        gas, h = self.gas, 1e-3
        dcp = gas.dcp_R_dT()
        state = gas.save_state()
        gas.set_state_TR(900.0 + h, gas.density)
        cp_plus = gas.cp_R()
        gas.set_state_TR(900.0 - h, gas.density)
        cp_minus = gas.cp_R()
        gas.restore_state(state)
        np.testing.assert_allclose(dcp, (cp_plus - cp_minus) / (2 * h), rtol=1e-6, atol=1e-12)

    def test_save_restore(self):
        state = self.gas.save_state()
        rho, T, Y = self.gas.density, self.gas.temperature, self.gas.mass_fractions.copy()
        self.gas.set_state_TPX(1500.0, 1e5, {"N2": 1.0})
        self.assertNotEqual(self.gas.temperature, T)
        self.gas.restore_state(state)
        self.assertEqual(self.gas.density, rho)
        self.assertEqual(self.gas.temperature, T)
        self.assertTrue(np.array_equal(self.gas.mass_fractions, Y))

    def test_unnormalized_mass_fractions(self):
        y = self.gas.mass_fractions * 1.01
        self.gas.set_mass_fractions_no_norm(y)
        self.assertTrue(np.array_equal(self.gas.mass_fractions, y))
        self.gas.set_mass_fractions(y)
        self.assertAlmostEqual(np.sum(self.gas.mass_fractions), 1.0, places=14)

    def test_invalid_composition(self):
        with self.assertRaises(ValueError):
            self.gas.set_state_TPX(300.0, 1e5, {"CH4": 1.0})
        with self.assertRaises(ValueError):
            self.gas.set_mass_fractions(np.ones(3))
        with self.assertRaises(ValueError):
            IdealGasPhase(["H2", "XYZ"])


class TestSurfacePhase(unittest.TestCase):

    def test_coverages(self):
        surf = SurfacePhase(["PT(S)", "H(S)", "O(S)"])
        self.assertTrue(np.array_equal(surf.coverages, [1.0, 0.0, 0.0]))
        surf.set_coverages({"PT(S)": 1.0, "H(S)": 3.0})
        self.assertTrue(np.allclose(surf.coverages, [0.25, 0.75, 0.0]))
        self.assertTrue(np.allclose(surf.concentrations, surf.coverages * surf.site_density))
        surf.set_coverages_no_norm(np.array([0.5, 0.6, 0.1]))
        self.assertTrue(np.array_equal(surf.coverages, [0.5, 0.6, 0.1]))
        self.assertEqual(surf.species_index("O(S)"), 2)
        self.assertEqual(surf.species_index("C(S)"), -1)


if __name__ == "__main__":
    unittest.main()
