import logging
from typing import Optional

import numpy as np

from zerod.constants import (
    GAS_CONSTANT,
    IDEAL_GAS_TYPE,
    MASS_OFFSET,
    NPOS,
    SPECIES_OFFSET,
    TEMPERATURE_OFFSET,
    VOLUME_OFFSET,
)
from zerod.errors import ConfigurationError, StateError
from zerod.reactors.reactor import Reactor
from zerod.thermo.phase import ThermoPhase

logger = logging.getLogger(__name__)


class IdealGasReactor(Reactor):
    """
    Zero-dimensional, well-mixed reactor filled with an ideal gas, solved
    for temperature instead of internal energy.

    Main assumptions:
        - Perfect mixing (zero transport phenomena)
        - Ideal-gas equation of state
        - Variable volume through moving walls, open to inlets and outlets

    State vector:
        [m, V, T, Y_1 .. Y_K, theta_1 .. theta_S]
        with the surface coverages of each wall in registration order.
    """

    # Jacobian blocks filled by eval_jac_eqs, as (row block, column block)
    jacobian_blocks = (("temperature", "temperature"), ("species", "temperature"))

    def set_thermo(self, thermo: ThermoPhase) -> None:
        if thermo.type != IDEAL_GAS_TYPE:
            raise ConfigurationError(
                f"{self.name}: incompatible phase type '{thermo.type}' provided, "
                f"expected '{IDEAL_GAS_TYPE}'"
            )
        super().set_thermo(thermo)

    def get_state(self, y: np.ndarray) -> None:
        if self.thermo is None:
            raise StateError(f"{self.name}: reactor is empty.")
        thermo = self.thermo
        thermo.restore_state(self._state)
        k = self.n_species

        self._mass = thermo.density * self._volume
        y[MASS_OFFSET] = self._mass
        y[VOLUME_OFFSET] = self._volume
        y[TEMPERATURE_OFFSET] = thermo.temperature
        y[SPECIES_OFFSET : SPECIES_OFFSET + k] = thermo.mass_fractions
        self.get_surface_initial_conditions(y[SPECIES_OFFSET + k :])

    def update_state(self, y: np.ndarray) -> None:
        thermo = self.thermo
        k = self.n_species
        self._mass = y[MASS_OFFSET]
        self._volume = y[VOLUME_OFFSET]
        thermo.set_mass_fractions_no_norm(y[SPECIES_OFFSET : SPECIES_OFFSET + k])
        thermo.set_state_TR(y[TEMPERATURE_OFFSET], self._mass / self._volume)
        self.update_surface_state(y[SPECIES_OFFSET + k :])

        # save parameters needed by other connected reactors
        self._temperature = thermo.temperature
        self._enthalpy = thermo.enthalpy_mass
        self._pressure = thermo.pressure
        self._int_energy = thermo.int_energy_mass
        self._state = thermo.save_state()

    def eval_eqs(
        self, time: float, y: np.ndarray, ydot: np.ndarray, params: Optional[np.ndarray] = None
    ) -> None:
        """
        Right-hand side of the mass, volume, energy, species and coverage
        equations. Relies on the state pushed by the last update_state call.

        Args:
            time(float): Current time [s].
            y(ndarray): State vector of the reactor.
            ydot(ndarray): Time derivatives, written in place.
            params(ndarray): Multipliers of the sensitivity parameters.
        """
        thermo = self.thermo
        k = self.n_species
        mass, volume = self._mass, self._volume
        dmdt = 0.0  # dm/dt (gas phase)
        mcvdTdt = 0.0  # m * c_v * dT/dt
        dYdt = ydot[SPECIES_OFFSET : SPECIES_OFFSET + k]

        thermo.restore_state(self._state)
        with self.apply_sensitivity(params):
            self.uk[:] = thermo.partial_molar_int_energies()
            mw = thermo.molecular_weights
            Y = thermo.mass_fractions

            if self.chemistry_enabled and self.kinetics is not None:
                self.wdot[:] = self.kinetics.net_production_rates()
            else:
                self.wdot[:] = 0.0

            self.eval_walls(time)
            mdot_surf = self.eval_surfaces(time, ydot[SPECIES_OFFSET + k :])
            dmdt += mdot_surf

            # compression work and external heat transfer
            mcvdTdt += -self._pressure * self.vdot - self.Q

            # heat release from gas phase and surface reactions
            mcvdTdt -= np.dot(self.wdot, self.uk) * volume
            mcvdTdt -= np.dot(self.sdot, self.uk)
            # production in gas phase and from surfaces, dilution by net surface mass flux
            dYdt[:] = (self.wdot * volume + self.sdot) * mw / mass
            dYdt -= Y * mdot_surf / mass

            for outlet in self.outlets:
                mdot_out = outlet.mass_flow_rate(time)
                dmdt -= mdot_out
                mcvdTdt -= mdot_out * self._pressure * volume / mass  # flow work

            for inlet in self.inlets:
                mdot_in = inlet.mass_flow_rate(time)
                dmdt += mdot_in
                mcvdTdt += inlet.enthalpy_mass * mdot_in
                self.work[:] = inlet.outlet_species_mass_flow_rates()
                # flow of species into system and dilution by other species
                dYdt += (self.work - mdot_in * Y) / mass
                # with h_in * mdot_in: flow work plus thermal energy carried by the species
                mcvdTdt -= np.dot(self.uk / mw, self.work)

            ydot[MASS_OFFSET] = dmdt
            ydot[VOLUME_OFFSET] = self.vdot
            if self.energy_enabled:
                ydot[TEMPERATURE_OFFSET] = mcvdTdt / (mass * thermo.cv_mass)
            else:
                ydot[TEMPERATURE_OFFSET] = 0.0

    def eval_jac_eqs(self, time: float, y: np.ndarray, jac, start: int = 0) -> None:
        """
        Temperature derivatives of the energy and species equations.

        Fills J(T, T) and J(Y_k, T) at offset start of jac, which can be any
        matrix supporting item assignment (ndarray, scipy.sparse.lil_matrix).
        The production rate derivatives are taken at constant pressure and
        composition, the surface production rates are the ones cached by the
        last eval_eqs call and are treated as temperature independent.

        Notes:
            The d(Tdot)/dY_k and d(Y_j)/dY_k blocks are not computed and the
            corresponding entries of jac are left untouched, see jacobian_blocks.
        """
        thermo = self.thermo
        thermo.restore_state(self._state)
        mass, volume = self._mass, self._volume
        mw = thermo.molecular_weights
        Y = thermo.mass_fractions
        T = thermo.temperature
        RT = GAS_CONSTANT * T
        cv = thermo.cv_mass

        # dC_p/R/dT = dC_v/R/dT for an ideal gas, mixture value per unit mass
        dcvRdT = np.sum(thermo.dcp_R_dT() / mw * Y)
        inv_mcv = 1.0 / (mass * cv)

        self.work[:] = thermo.cp_R()
        self.uk[:] = thermo.partial_molar_int_energies()
        if self.chemistry_enabled and self.kinetics is not None:
            self.wdot[:] = self.kinetics.net_production_rates()
            dwdotdT = self.kinetics.net_production_rates_ddT()
        else:
            self.wdot[:] = 0.0
            dwdotdT = np.zeros(self.n_species)
        prod_rate = self.wdot * volume + self.sdot

        # J(T, T) = d Tdot / d T
        CvR = self.work - 1.0
        CvR -= self.uk * dcvRdT / cv
        CvR -= self.uk / RT
        df1dT = np.dot(CvR, prod_rate) * inv_mcv * GAS_CONSTANT
        df1dT_2t = np.dot(self.uk, volume * dwdotdT) * inv_mcv

        T_ind = start + TEMPERATURE_OFFSET
        jac[T_ind, T_ind] = df1dT - df1dT_2t if self.energy_enabled else 0.0
        logger.debug("%s: dTdot/dT = %g", self.name, jac[T_ind, T_ind])

        # J(Y_k, T) = d Ydot_k / d T
        y_ind = start + SPECIES_OFFSET
        dYdT = mw / mass * (prod_rate / T + dwdotdT)
        for i in range(self.n_species):
            jac[y_ind + i, T_ind] = dYdT[i]

    def component_index(self, name: str) -> Optional[int]:
        k = self.species_index(name)
        if k is not NPOS:
            return k + SPECIES_OFFSET
        elif name == "mass":
            return MASS_OFFSET
        elif name == "volume":
            return VOLUME_OFFSET
        elif name == "temperature":
            return TEMPERATURE_OFFSET
        else:
            return NPOS

    def component_name(self, k: int) -> str:
        if k == TEMPERATURE_OFFSET:
            return "temperature"
        return super().component_name(k)
