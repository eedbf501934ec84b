"""Module providing the interface for the property evaluators used by the reactors."""

from abc import ABC, abstractmethod

import numpy as np


class ThermoPhase(ABC):
    """
    Abstract class for equation-of-state and thermodynamic property evaluators.

    A phase holds a single thermodynamic state (temperature, density and
    composition). Reactors push trial states into it and read properties
    back. Amounts are in kmol, energies in J.
    """

    @property
    @abstractmethod
    def type(self) -> str:
        """
        Tag identifying the equation of state, used by reactors to check
        compatibility.
        """
        ...

    @property
    @abstractmethod
    def species_names(self) -> list[str]:
        ...

    @property
    def n_species(self) -> int:
        return len(self.species_names)

    def species_index(self, name: str) -> int:
        """
        Index of a species in the phase, -1 if the phase does not contain it.
        """
        try:
            return self.species_names.index(name)
        except ValueError:
            return -1

    @abstractmethod
    def save_state(self) -> np.ndarray:
        """
        Returns an opaque snapshot of the current state, to be passed back
        to restore_state.
        """
        ...

    @abstractmethod
    def restore_state(self, state: np.ndarray) -> None:
        ...

    @property
    @abstractmethod
    def temperature(self) -> float:
        ...

    @property
    @abstractmethod
    def density(self) -> float:
        ...

    @property
    @abstractmethod
    def pressure(self) -> float:
        ...

    @property
    @abstractmethod
    def mass_fractions(self) -> np.ndarray:
        ...

    @property
    @abstractmethod
    def molecular_weights(self) -> np.ndarray:
        ...

    @property
    @abstractmethod
    def enthalpy_mass(self) -> float:
        ...

    @property
    @abstractmethod
    def int_energy_mass(self) -> float:
        ...

    @property
    @abstractmethod
    def cv_mass(self) -> float:
        ...

    @abstractmethod
    def cp_R(self) -> np.ndarray:
        """
        Dimensionless standard-state heat capacities at constant pressure.
        """
        ...

    @abstractmethod
    def dcp_R_dT(self) -> np.ndarray:
        """
        Temperature derivatives of the dimensionless heat capacities [K-1].
        """
        ...

    @abstractmethod
    def standard_enthalpies_RT(self) -> np.ndarray:
        ...

    @abstractmethod
    def standard_gibbs_RT(self) -> np.ndarray:
        ...

    @abstractmethod
    def partial_molar_int_energies(self) -> np.ndarray:
        ...

    @abstractmethod
    def set_state_TR(self, temperature: float, density: float) -> None:
        """
        Sets temperature and density together, keeping the composition.
        """
        ...

    @abstractmethod
    def set_mass_fractions_no_norm(self, y: np.ndarray) -> None:
        """
        Sets the mass fractions as given, without normalization.
        """
        ...

    @abstractmethod
    def set_mass_fractions(self, y: np.ndarray) -> None:
        ...

    @abstractmethod
    def set_state_TPY(self, temperature: float, pressure: float, y) -> None:
        ...
