import unittest

import numpy as np
from scipy.sparse import csr_matrix

from zerod import IdealGasReactor, MassFlowController, ReactorNet, Reservoir, Valve, Wall
from zerod.constants import SPECIES_OFFSET, TEMPERATURE_OFFSET
from zerod.errors import StateError

from mechanisms import h2o2_gas, h2o2_kinetics


class TestReactorNet(unittest.TestCase):

    def test_empty_network(self):
        with self.assertRaises(StateError):
            ReactorNet().initialize()
        with self.assertRaises(TypeError):
            ReactorNet([Reservoir(h2o2_gas())])

    def test_state_and_names(self):
        r1 = IdealGasReactor(h2o2_gas(), name="r1")
        r2 = IdealGasReactor(h2o2_gas(T=500.0), name="r2")
        net = ReactorNet([r1, r2])
        self.assertEqual(net.n_eqs, 0)
        y = net.state
        self.assertEqual(net.n_eqs, r1.n_eqs + r2.n_eqs)
        self.assertEqual(y[r1.n_eqs + TEMPERATURE_OFFSET], 500.0)
        self.assertEqual(net.component_name(0), "r1: mass")
        self.assertEqual(net.component_name(r1.n_eqs + 2), "r2: temperature")
        self.assertEqual(net.component_name(r1.n_eqs + SPECIES_OFFSET), "r2: H2")
        with self.assertRaises(IndexError):
            net.component_name(net.n_eqs)

    def test_closed_adiabatic(self):
        """
        Check that a closed, rigid, adiabatic reactor conserves mass and internal energy
        """
        gas = h2o2_gas(T=1200.0)
        reactor = IdealGasReactor(gas, h2o2_kinetics(gas))
        net = ReactorNet([reactor], rtol=1e-8, atol=1e-14)
        net.initialize()
        m0, u0 = reactor.mass, gas.int_energy_mass
        T0 = gas.temperature

        results = net.integrate(1e-4)
        self.assertTrue(results.success)
        self.assertIn("time", results)
        self.assertEqual(net.time, 1e-4)
        self.assertGreater(net.n_rhs, 0)

        y = net.state
        self.assertAlmostEqual(y[0] / m0, 1.0, places=10)
        self.assertAlmostEqual(np.sum(y[SPECIES_OFFSET:]), 1.0, places=6)
        self.assertAlmostEqual(gas.int_energy_mass / u0, 1.0, places=5)
        self.assertNotEqual(gas.temperature, T0)

    def test_advance(self):
        gas = h2o2_gas(T=1200.0)
        reactor = IdealGasReactor(gas, h2o2_kinetics(gas))
        net = ReactorNet([reactor], rtol=1e-8, atol=1e-14)
        y = net.advance(2e-5)
        self.assertEqual(net.time, 2e-5)
        self.assertTrue(np.array_equal(y, net.state))
        self.assertEqual(reactor.temperature, y[TEMPERATURE_OFFSET])

    def test_heat_exchange(self):
        """
        Check that two reactors sharing a diathermal wall approach the same temperature
        """
        X = {"N2": 1.0}
        hot = IdealGasReactor(h2o2_gas(T=1000.0, X=X), name="hot")
        cold = IdealGasReactor(h2o2_gas(T=300.0, X=X), name="cold")
        Wall(hot, cold, A=1.0, U=500.0)
        net = ReactorNet([hot, cold], rtol=1e-8, atol=1e-12)
        net.initialize()
        u_total = hot.mass * hot.int_energy_mass + cold.mass * cold.int_energy_mass

        net.integrate(100.0)
        self.assertAlmostEqual(hot.temperature, cold.temperature, places=2)
        u_end = hot.mass * hot.int_energy_mass + cold.mass * cold.int_energy_mass
        self.assertAlmostEqual(u_end / u_total, 1.0, places=5)

    def test_flushing(self):
        """
        Check that a flow-through reactor is flushed by the inlet composition
        """
        reactor = IdealGasReactor(h2o2_gas(T=300.0, X={"N2": 1.0}), volume=1.0)
        inlet = Reservoir(h2o2_gas(T=300.0, X={"O2": 1.0}))
        outlet = Reservoir(h2o2_gas(T=300.0, X={"N2": 1.0}))
        MassFlowController(inlet, reactor, mdot=0.5)
        Valve(reactor, outlet, K=1e-4)
        net = ReactorNet([reactor], rtol=1e-7, atol=1e-10)
        results = net.integrate(60.0, t_eval=np.linspace(0.0, 60.0, 7))

        self.assertEqual(results.y.shape, (reactor.n_eqs, 7))
        i_o2 = reactor.component_index("O2")
        self.assertTrue(np.all(np.diff(results.y[i_o2, :3]) > 0.0))
        self.assertGreater(results.y[i_o2, -1], 0.99)
        self.assertAlmostEqual(reactor.temperature, 300.0, places=3)

    def test_sensitivity_parameter(self):
        gas = h2o2_gas(T=1500.0)
        reactor = IdealGasReactor(gas, h2o2_kinetics(gas))
        net = ReactorNet([reactor])
        param = net.add_sensitivity_reaction(reactor, 2)
        self.assertEqual(param.global_index, 0)
        self.assertTrue(np.array_equal(net.params, [1.0]))

        y = net.state
        ydot_ref = net.rhs(0.0, y)
        net.params[0] = 0.0
        ydot = net.rhs(0.0, y)
        self.assertFalse(np.allclose(ydot, ydot_ref))
        self.assertEqual(reactor.kinetics.multiplier(2), 1.0)

    def test_jacobian(self):
        gas = h2o2_gas(T=1500.0)
        r1 = IdealGasReactor(gas, h2o2_kinetics(gas))
        r2 = IdealGasReactor(h2o2_gas(T=300.0, X={"N2": 1.0}))
        net = ReactorNet([r2, r1])
        jac = net.jacobian()
        self.assertIsInstance(jac, csr_matrix)
        self.assertEqual(jac.shape, (net.n_eqs, net.n_eqs))
        dense = jac.toarray()
        t_ind = r2.n_eqs + TEMPERATURE_OFFSET
        self.assertNotEqual(dense[t_ind, t_ind], 0.0)
        self.assertTrue(np.all(dense[: r2.n_eqs] == 0.0))
        self.assertTrue(np.all(dense[:, :t_ind] == 0.0))

    def test_jacobian_at_trial_state(self):
        gas = h2o2_gas(T=1500.0)
        reactor = IdealGasReactor(gas, h2o2_kinetics(gas))
        net = ReactorNet([reactor])
        y = net.state
        trial = y.copy()
        trial[TEMPERATURE_OFFSET] += 100.0
        net.jacobian(0.0, trial)
        self.assertEqual(reactor.temperature, y[TEMPERATURE_OFFSET])
        self.assertEqual(gas.temperature, y[TEMPERATURE_OFFSET])
        self.assertTrue(np.array_equal(net.state, y))


if __name__ == "__main__":
    unittest.main()
