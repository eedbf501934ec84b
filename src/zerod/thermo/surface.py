from typing import Optional, Union

import numpy as np


class SurfacePhase:
    """
    Class for representing a catalytic surface as a lattice of adsorption sites.
    The first species is conventionally the empty site "*".

    Attributes:
        species_names (list[str]): Surface species names.
        site_density (float): Density of adsorption sites [kmol m-2].
        coverages (ndarray): Fractional site coverages.
        temperature (float): Surface temperature [K].
    """

    def __init__(
        self,
        species: list[str],
        site_density: float = 2.7e-8,
        coverages: Optional[Union[dict[str, float], np.ndarray]] = None,
        temperature: float = 300.0,
        name: str = "surface",
    ):
        if len(species) == 0:
            raise ValueError("At least one surface species is required")
        assert site_density > 0, "Site density must be positive"
        self.species_names = list(species)
        self.site_density = site_density
        self.temperature = temperature
        self.name = name
        self._theta = np.zeros(len(species), dtype=np.float64)
        self._theta[0] = 1.0  # empty surface
        if coverages is not None:
            self.set_coverages(coverages)

    def __repr__(self) -> str:
        return f"SurfacePhase({self.name}: {self.n_species} species)"

    @property
    def n_species(self) -> int:
        return len(self.species_names)

    def species_index(self, name: str) -> int:
        try:
            return self.species_names.index(name)
        except ValueError:
            return -1

    @property
    def coverages(self) -> np.ndarray:
        return self._theta

    @property
    def concentrations(self) -> np.ndarray:
        """
        Surface concentrations [kmol m-2].
        """
        return self._theta * self.site_density

    def set_coverages(self, theta: Union[dict[str, float], np.ndarray]) -> None:
        """
        Sets the coverages, normalized to sum to one.
        """
        if isinstance(theta, dict):
            values = np.zeros(self.n_species, dtype=np.float64)
            for name, value in theta.items():
                k = self.species_index(name)
                if k < 0:
                    raise ValueError(f"Unknown surface species {name}")
                values[k] = value
        else:
            values = np.asarray(theta, dtype=np.float64)
        values = np.clip(values, 0.0, None)
        total = np.sum(values)
        if total <= 0.0:
            raise ValueError("Coverages must have a positive sum")
        self._theta[:] = values / total

    def set_coverages_no_norm(self, theta: np.ndarray) -> None:
        self._theta[:] = theta[: self.n_species]
