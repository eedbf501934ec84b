import unittest

import numpy as np

from zerod import Arrhenius, GasKinetics, InterfaceKinetics, Reaction, SurfacePhase

from mechanisms import h2o2_gas, h2o2_kinetics


class TestReaction(unittest.TestCase):

    def test_from_equation(self):
        rxn = Reaction.from_equation("2 H2 + O2 <=> 2 H2O", Arrhenius(A=1.0))
        self.assertEqual(rxn.reactants, {"H2": 2.0, "O2": 1.0})
        self.assertEqual(rxn.products, {"H2O": 2.0})
        self.assertTrue(rxn.reversible)
        self.assertEqual(rxn.equation, "2 H2 + O2 <=> 2 H2O")

        rxn = Reaction.from_equation("H + H => H2", Arrhenius(A=1.0))
        self.assertEqual(rxn.reactants, {"H": 2.0})
        self.assertFalse(rxn.reversible)

    def test_invalid_equation(self):
        with self.assertRaises(ValueError):
            Reaction.from_equation("H2 + O2 = 2 OH", Arrhenius(A=1.0))
        with self.assertRaises(ValueError):
            Reaction.from_equation("2 big H2 => H2", Arrhenius(A=1.0))

    def test_arrhenius(self):
        rate, T, h = Arrhenius(A=2.0e5, b=1.5, Ea=5e7), 1000.0, 1e-3
        fd = (np.log(rate(T + h)) - np.log(rate(T - h))) / (2 * h)
        self.assertAlmostEqual(rate.dlnk_dT(T) / fd, 1.0, places=6)


class TestGasKinetics(unittest.TestCase):

    def setUp(self):
        self.gas = h2o2_gas(T=1500.0)
        self.kin = h2o2_kinetics(self.gas)

    def test_undefined_species(self):
        rxn = Reaction.from_equation("CH4 + O2 => CO2 + 2 H2", Arrhenius(A=1.0))
        with self.assertRaises(ValueError):
            GasKinetics(self.gas, [rxn])

    def test_mass_conservation(self):
        """
        Check that the reactions neither create nor destroy mass
        """
        wdot = self.kin.net_production_rates()
        self.assertGreater(np.max(np.abs(wdot)), 0.0)
        mass_rate = np.dot(wdot, self.gas.molecular_weights)
        self.assertLess(abs(mass_rate), 1e-10 * np.max(np.abs(wdot * self.gas.molecular_weights)))

    def test_equilibrium(self):
        """
        Check that the reverse rate constants follow from the equilibrium constants
        """
        kf = self.kin.forward_rate_constants()
        kr = self.kin.reverse_rate_constants(kf)
        np.testing.assert_allclose(kf / kr, self.kin.equilibrium_constants(), rtol=1e-12)

    def test_multipliers(self):
        wdot = self.kin.net_production_rates()
        for i in range(self.kin.n_reactions):
            self.kin.set_multiplier(i, 2.0)
        np.testing.assert_allclose(self.kin.net_production_rates(), 2 * wdot, rtol=1e-12)
        for i in range(self.kin.n_reactions):
            self.kin.set_multiplier(i, 0.0)
        self.assertTrue(np.all(self.kin.net_production_rates() == 0.0))

    def test_production_rates_ddT(self):
        """
        Compare the analytic temperature derivatives against central finite
        differences at constant pressure and mole fractions
        """
        gas, h = self.gas, 1e-2
        T, P, X = gas.temperature, gas.pressure, gas.mole_fractions.copy()
        ddT = self.kin.net_production_rates_ddT()
        gas.set_state_TPX(T + h, P, X)
        w_plus = self.kin.net_production_rates()
        gas.set_state_TPX(T - h, P, X)
        w_minus = self.kin.net_production_rates()
        fd = (w_plus - w_minus) / (2 * h)
        np.testing.assert_allclose(ddT, fd, rtol=1e-5, atol=1e-8 * np.max(np.abs(fd)))

    def test_explicit_reverse_rate(self):
        rxn = Reaction.from_equation(
            "H2 + O <=> H + OH", Arrhenius(A=50.8, b=2.67, Ea=2.632e7), reverse_rate=Arrhenius(A=20.0)
        )
        kin = GasKinetics(self.gas, [rxn])
        kr = kin.reverse_rate_constants(kin.forward_rate_constants())
        self.assertAlmostEqual(kr[0], 20.0)


class TestInterfaceKinetics(unittest.TestCase):

    def setUp(self):
        self.gas = h2o2_gas(T=600.0, X={"H2": 0.5, "N2": 0.5})
        self.surf = SurfacePhase(["PT(S)", "H(S)"], temperature=600.0)

    def test_reverse_rate_required(self):
        rxn = Reaction.from_equation("H2 + 2 PT(S) <=> 2 H(S)", Arrhenius(A=1e13))
        with self.assertRaises(ValueError):
            InterfaceKinetics(self.gas, self.surf, [rxn])

    def test_adsorption_rates(self):
        rxn = Reaction.from_equation("H2 + 2 PT(S) => 2 H(S)", Arrhenius(A=1e13))
        kin = InterfaceKinetics(self.gas, self.surf, [rxn])
        self.assertEqual(kin.n_total_species, self.gas.n_species + 2)
        rates = kin.net_production_rates()
        gas_rates = rates[kin.gas_slice]
        surf_rates = rates[kin.surface_slice]
        self.assertLess(gas_rates[self.gas.species_index("H2")], 0.0)
        self.assertAlmostEqual(surf_rates[0], -surf_rates[1])
        self.assertAlmostEqual(surf_rates[1], -2 * gas_rates[0])
        with self.assertRaises(NotImplementedError):
            kin.net_production_rates_ddT()


if __name__ == "__main__":
    unittest.main()
