import numpy as np

from zerod.kinetics.kinetics import Kinetics, Reaction
from zerod.thermo.phase import ThermoPhase
from zerod.thermo.surface import SurfacePhase


class InterfaceKinetics(Kinetics):
    """
    Heterogeneous mass-action kinetics between a gas and a surface phase.

    Gas species enter the rate laws through their molar concentrations
    [kmol m-3] and adsorbed species through theta * site_density [kmol m-2].
    Rates are per unit area [kmol m-2 s-1]. Kinetic species are ordered as
    the gas species followed by the surface species.
    """

    def __init__(self, gas: ThermoPhase, surface: SurfacePhase, reactions: list[Reaction]):
        super().__init__(gas.species_names + surface.species_names, reactions)
        self.gas = gas
        self.surface = surface
        for rxn in self.reactions:
            if rxn.reversible and rxn.reverse_rate is None:
                raise ValueError(
                    f"Reversible surface reaction '{rxn.equation}' requires an explicit reverse rate"
                )

    def __repr__(self) -> str:
        return f"InterfaceKinetics({self.surface.name}, {self.n_reactions} reactions)"

    @property
    def gas_slice(self) -> slice:
        return slice(0, self.gas.n_species)

    @property
    def surface_slice(self) -> slice:
        return slice(self.gas.n_species, self.n_total_species)

    def temperature(self) -> float:
        return self.surface.temperature

    def concentrations(self) -> np.ndarray:
        gas = self.gas
        c_gas = gas.density * gas.mass_fractions / gas.molecular_weights
        return np.concatenate((c_gas, self.surface.concentrations))

    def reverse_rate_constants(self, kf: np.ndarray) -> np.ndarray:
        t = self.temperature()
        kr = np.zeros_like(kf)
        for i, rxn in enumerate(self.reactions):
            if rxn.reversible:
                kr[i] = rxn.reverse_rate(t) * self._multipliers[i]
        return kr

    def net_production_rates_ddT(self) -> np.ndarray:
        raise NotImplementedError("Temperature derivatives of surface rates are not available")
