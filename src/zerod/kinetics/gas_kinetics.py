import numpy as np

from zerod.constants import GAS_CONSTANT, P_REF
from zerod.kinetics.kinetics import Kinetics, Reaction
from zerod.thermo.phase import ThermoPhase


class GasKinetics(Kinetics):
    """
    Homogeneous mass-action kinetics of a gas phase.

    Reversible reactions without an explicit reverse rate use the equilibrium
    constant in concentration units, Kc = exp(-dG/RT) * (P0/RT)**dn.
    Production rates are given in kmol m-3 s-1.
    """

    def __init__(self, phase: ThermoPhase, reactions: list[Reaction]):
        super().__init__(phase.species_names, reactions)
        self.phase = phase
        self.delta_n = self.v_matrix.sum(axis=0)
        self._explicit_reverse = np.array(
            [rxn.reverse_rate is not None for rxn in self.reactions], dtype=bool
        )

    def __repr__(self) -> str:
        return f"GasKinetics({self.phase.species_names}, {self.n_reactions} reactions)"

    def temperature(self) -> float:
        return self.phase.temperature

    def concentrations(self) -> np.ndarray:
        phase = self.phase
        return phase.density * phase.mass_fractions / phase.molecular_weights

    def equilibrium_constants(self) -> np.ndarray:
        t = self.temperature()
        delta_g = self.v_matrix.T @ self.phase.standard_gibbs_RT()
        return np.exp(-delta_g) * (P_REF / (GAS_CONSTANT * t)) ** self.delta_n

    def reverse_rate_constants(self, kf: np.ndarray) -> np.ndarray:
        t = self.temperature()
        kr = np.zeros_like(kf)
        thermo = self.reversible & ~self._explicit_reverse
        if np.any(thermo):
            kr[thermo] = kf[thermo] / self.equilibrium_constants()[thermo]
        for i in np.flatnonzero(self._explicit_reverse & self.reversible):
            kr[i] = self.reactions[i].reverse_rate(t) * self._multipliers[i]
        return kr

    def net_production_rates_ddT(self) -> np.ndarray:
        """
        Temperature derivatives of the net production rates at constant
        pressure and mole fractions [kmol m-3 s-1 K-1].

        Along this path the concentrations scale as 1/T, so each rate of
        progress changes both through its rate constant and through the
        dilution of its reactants (products for the reverse direction).
        """
        t = self.temperature()
        fwd, rev = self.rates_of_progress()
        dlnkf = np.array([rxn.rate.dlnk_dT(t) for rxn in self.reactions], dtype=np.float64)
        dlnkc = (self.v_matrix.T @ self.phase.standard_enthalpies_RT() - self.delta_n) / t
        dlnkr = dlnkf - dlnkc
        for i in np.flatnonzero(self._explicit_reverse):
            dlnkr[i] = self.reactions[i].reverse_rate.dlnk_dT(t)
        n_fwd = self.orders_f.sum(axis=1)
        n_rev = self.orders_r.sum(axis=1)
        drop = fwd * (dlnkf - n_fwd / t) - rev * (dlnkr - n_rev / t)
        return self.v_matrix @ drop
