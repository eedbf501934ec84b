"""Walls between reactors and the surfaces they carry."""

from typing import Callable, Optional, Union

import numpy as np

from zerod.flow_devices import _as_function
from zerod.kinetics.surface_kinetics import InterfaceKinetics
from zerod.thermo.surface import SurfacePhase

SIDES = {"left": 0, "right": 1, 0: 0, 1: 1}


class ReactorSurface:
    """
    Catalytic surface exposed to the gas of a reactor through a wall.

    Attributes:
        phase (SurfacePhase): Surface phase holding the coverages.
        kinetics (InterfaceKinetics): Heterogeneous reactions on the surface.
    """

    def __init__(self, phase: SurfacePhase, kinetics: InterfaceKinetics):
        if kinetics.surface is not phase:
            raise ValueError("Surface kinetics must be defined on the given surface phase")
        self.phase = phase
        self.kinetics = kinetics

    def __repr__(self) -> str:
        return f"ReactorSurface({self.phase.name})"

    @property
    def name(self) -> str:
        return self.phase.name

    @property
    def n_species(self) -> int:
        return self.phase.n_species

    @property
    def species_names(self) -> list[str]:
        return self.phase.species_names

    def species_index(self, name: str) -> int:
        return self.phase.species_index(name)

    @property
    def coverages(self) -> np.ndarray:
        return self.phase.coverages.copy()

    def sync_state(self, theta: np.ndarray) -> None:
        self.phase.set_coverages_no_norm(theta)

    def eval(self, temperature: float, ydot_surf: np.ndarray) -> np.ndarray:
        """
        Evaluate the surface reactions at the gas temperature.

        Args:
            temperature(float): Temperature of the gas in contact [K].
            ydot_surf(ndarray): Coverage derivatives [s-1], written in place.
                The first (empty site) entry closes the site balance.
        Returns:
            (ndarray): Production rates of the gas species [kmol m-2 s-1].
        """
        self.phase.temperature = temperature
        rates = self.kinetics.net_production_rates()
        rs0 = 1.0 / self.phase.site_density
        ydot_surf[1:] = rates[self.kinetics.surface_slice][1:] * rs0
        ydot_surf[0] = -np.sum(ydot_surf[1:])
        return rates[self.kinetics.gas_slice]


class Wall:
    """
    Interface between two reactors (or a reactor and a reservoir).

    The wall exchanges heat, q = U A (T_left - T_right) + A q''(t), and moves
    with velocity v = K (P_left - P_right) + v(t). Positive values go from
    left to right, i.e. the left reactor expands and loses heat.

    Attributes:
        area (float): Wall area [m2].
        expansion_rate_coeff (float): K [m s-1 Pa-1].
        heat_transfer_coeff (float): U [W m-2 K-1].
    """

    def __init__(
        self,
        left,
        right,
        A: float = 1.0,
        K: float = 0.0,
        U: float = 0.0,
        Q: Union[float, Callable, None] = None,
        velocity: Union[float, Callable, None] = None,
        name: str = None,
    ):
        self.left = left
        self.right = right
        self.area = A
        self.expansion_rate_coeff = K
        self.heat_transfer_coeff = U
        self.heat_flux = _as_function(Q)
        self.velocity = _as_function(velocity)
        self.name = name or f"Wall({left.name} | {right.name})"
        self._surfaces: list[Optional[ReactorSurface]] = [None, None]
        left.add_wall(self, 0)
        right.add_wall(self, 1)

    def __repr__(self) -> str:
        return self.name

    def set_surface(self, surface: ReactorSurface, side: Union[str, int] = "left") -> None:
        self._surfaces[SIDES[side]] = surface

    def surface(self, side: Union[str, int]) -> Optional[ReactorSurface]:
        return self._surfaces[SIDES[side]]

    def vdot(self, time: float) -> float:
        """
        Rate of volume change of the left reactor [m3 s-1].
        """
        rate = self.expansion_rate_coeff * (self.left.pressure - self.right.pressure)
        return self.area * (rate + self.velocity(time))

    def heat_rate(self, time: float) -> float:
        """
        Heat flow from the left to the right reactor [W].
        """
        dT = self.left.temperature - self.right.temperature
        return self.area * (self.heat_transfer_coeff * dT + self.heat_flux(time))
