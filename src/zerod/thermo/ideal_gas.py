from typing import Optional, Union

import numpy as np

from zerod.constants import GAS_CONSTANT, IDEAL_GAS_TYPE, ONE_ATM
from zerod.thermo.phase import ThermoPhase
from zerod.thermo.species_data import Species, get_species


class IdealGasPhase(ThermoPhase):
    """Ideal gas mixture with NASA7 species thermochemistry.

    Attributes:
        species (list[Species]): Species of the mixture.
        name (str): Label of the phase.
    """

    def __init__(
        self,
        species: Union[list[str], list[Species]],
        temperature: float = 300.0,
        pressure: float = ONE_ATM,
        X: Optional[Union[dict[str, float], np.ndarray]] = None,
        name: str = "gas",
    ):
        """
        Args:
            species(list): Species names from the built-in database or Species objects.
            temperature(float): Initial temperature [K].
            pressure(float): Initial pressure [Pa].
            X(dict or ndarray): Initial mole fractions. Defaults to pure first species.
            name(str): Label of the phase.
        """
        if len(species) == 0:
            raise ValueError("At least one species is required")
        if all(isinstance(sp, str) for sp in species):
            species = get_species(list(species))
        self.species = list(species)
        self.name = name
        self._names = [sp.name for sp in self.species]
        self._mw = np.array([sp.molecular_weight for sp in self.species], dtype=np.float64)
        self._t_mid = np.array([sp.t_mid for sp in self.species], dtype=np.float64)
        self._low = np.array([sp.low for sp in self.species], dtype=np.float64)
        self._high = np.array([sp.high for sp in self.species], dtype=np.float64)

        self._T = temperature
        self._rho = 1.0
        self._y = np.zeros(len(self.species), dtype=np.float64)
        self._y[0] = 1.0
        if X is None:
            X = self._y.copy()
        self.set_state_TPX(temperature, pressure, X)

    def __repr__(self) -> str:
        return f"IdealGasPhase({self.name}: {self.n_species} species, T={self._T:.2f} K, P={self.pressure:.1f} Pa)"

    @property
    def type(self) -> str:
        return IDEAL_GAS_TYPE

    @property
    def species_names(self) -> list[str]:
        return self._names

    def save_state(self) -> np.ndarray:
        return np.concatenate(([self._T, self._rho], self._y))

    def restore_state(self, state: np.ndarray) -> None:
        self._T = float(state[0])
        self._rho = float(state[1])
        self._y[:] = state[2:]

    # --- state ---

    @property
    def temperature(self) -> float:
        return self._T

    @property
    def density(self) -> float:
        return self._rho

    @property
    def mass_fractions(self) -> np.ndarray:
        return self._y

    @property
    def molecular_weights(self) -> np.ndarray:
        return self._mw

    @property
    def mean_molecular_weight(self) -> float:
        return 1.0 / np.sum(self._y / self._mw)

    @property
    def mole_fractions(self) -> np.ndarray:
        return self._y / self._mw * self.mean_molecular_weight

    @property
    def concentrations(self) -> np.ndarray:
        """
        Molar concentrations [kmol m-3].
        """
        return self._rho * self._y / self._mw

    @property
    def pressure(self) -> float:
        return self._rho * GAS_CONSTANT * self._T / self.mean_molecular_weight

    # --- species properties ---

    def _coeffs(self) -> np.ndarray:
        return np.where((self._T < self._t_mid)[:, None], self._low, self._high)

    def cp_R(self) -> np.ndarray:
        a, t = self._coeffs(), self._T
        return a[:, 0] + t * (a[:, 1] + t * (a[:, 2] + t * (a[:, 3] + t * a[:, 4])))

    def dcp_R_dT(self) -> np.ndarray:
        a, t = self._coeffs(), self._T
        return a[:, 1] + t * (2 * a[:, 2] + t * (3 * a[:, 3] + t * 4 * a[:, 4]))

    def standard_enthalpies_RT(self) -> np.ndarray:
        a, t = self._coeffs(), self._T
        return (
            a[:, 0]
            + t * (a[:, 1] / 2 + t * (a[:, 2] / 3 + t * (a[:, 3] / 4 + t * a[:, 4] / 5)))
            + a[:, 5] / t
        )

    def standard_entropies_R(self) -> np.ndarray:
        a, t = self._coeffs(), self._T
        return (
            a[:, 0] * np.log(t)
            + t * (a[:, 1] + t * (a[:, 2] / 2 + t * (a[:, 3] / 3 + t * a[:, 4] / 4)))
            + a[:, 6]
        )

    def standard_gibbs_RT(self) -> np.ndarray:
        return self.standard_enthalpies_RT() - self.standard_entropies_R()

    def partial_molar_int_energies(self) -> np.ndarray:
        # ideal gas: u_k = h_k - RT
        return GAS_CONSTANT * self._T * (self.standard_enthalpies_RT() - 1.0)

    # --- mixture properties, per unit mass ---

    @property
    def enthalpy_mass(self) -> float:
        return GAS_CONSTANT * self._T * np.dot(self._y / self._mw, self.standard_enthalpies_RT())

    @property
    def int_energy_mass(self) -> float:
        return self.enthalpy_mass - GAS_CONSTANT * self._T / self.mean_molecular_weight

    @property
    def cp_mass(self) -> float:
        return GAS_CONSTANT * np.dot(self._y / self._mw, self.cp_R())

    @property
    def cv_mass(self) -> float:
        return self.cp_mass - GAS_CONSTANT / self.mean_molecular_weight

    # --- setters ---

    def _composition(self, comp: Union[dict[str, float], np.ndarray]) -> np.ndarray:
        if isinstance(comp, dict):
            values = np.zeros(self.n_species, dtype=np.float64)
            for name, value in comp.items():
                k = self.species_index(name)
                if k < 0:
                    raise ValueError(f"Unknown species {name} in phase {self.name}")
                values[k] = value
            return values
        values = np.asarray(comp, dtype=np.float64)
        if values.shape != (self.n_species,):
            raise ValueError(
                f"Composition must have {self.n_species} entries, got {values.shape}"
            )
        return values

    def set_mass_fractions_no_norm(self, y: np.ndarray) -> None:
        self._y[:] = y[: self.n_species]

    def set_mass_fractions(self, y) -> None:
        y = np.clip(self._composition(y), 0.0, None)
        total = np.sum(y)
        if total <= 0.0:
            raise ValueError("Mass fractions must have a positive sum")
        self._y[:] = y / total

    def set_mole_fractions(self, x) -> None:
        x = np.clip(self._composition(x), 0.0, None)
        if np.sum(x) <= 0.0:
            raise ValueError("Mole fractions must have a positive sum")
        self.set_mass_fractions(x * self._mw)

    def set_state_TR(self, temperature: float, density: float) -> None:
        self._T = temperature
        self._rho = density

    def set_state_TPY(self, temperature: float, pressure: float, y) -> None:
        self.set_mass_fractions(y)
        self._T = temperature
        self._rho = pressure * self.mean_molecular_weight / (GAS_CONSTANT * temperature)

    def set_state_TPX(self, temperature: float, pressure: float, x) -> None:
        self.set_mole_fractions(x)
        self._T = temperature
        self._rho = pressure * self.mean_molecular_weight / (GAS_CONSTANT * temperature)
