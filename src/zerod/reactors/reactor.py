"""Module providing the interface and the shared machinery of the reactor models."""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from itertools import count
from typing import Iterator, Optional

import numpy as np

from zerod.constants import NPOS, SPECIES_OFFSET
from zerod.errors import ConfigurationError, StateError
from zerod.kinetics.kinetics import Kinetics
from zerod.thermo.phase import ThermoPhase

logger = logging.getLogger(__name__)


class ReactorModel(ABC):
    def __init__(self):
        """
        Abstract class for the implementation of reactor models integrated
        within a reactor network.
        """
        pass

    @abstractmethod
    def initialize(self, t0: float = 0.0) -> None:
        """
        Sizes the internal buffers and the state vector of the reactor.
        Called by the network before the integration starts.
        """
        ...

    @abstractmethod
    def get_state(self, y: np.ndarray) -> None:
        """
        Writes the current state of the reactor into the packed vector y.
        """
        ...

    @abstractmethod
    def update_state(self, y: np.ndarray) -> None:
        """
        Pushes the packed vector y into the property evaluator and refreshes
        the cached intensive properties read by connected reactors.
        """
        ...

    @abstractmethod
    def eval_eqs(
        self, time: float, y: np.ndarray, ydot: np.ndarray, params: Optional[np.ndarray] = None
    ) -> None:
        """
        Provides the right-hand side of the ODE system of the reactor, based
        on species, mass and energy balances. ydot is written in place.
        """
        ...

    @abstractmethod
    def eval_jac_eqs(self, time: float, y: np.ndarray, jac, start: int = 0) -> None:
        """
        Provides (part of) the Jacobian matrix of the ODE system, written into
        jac at row/column offset start.
        """
        ...

    @abstractmethod
    def component_index(self, name: str) -> Optional[int]:
        ...

    @abstractmethod
    def component_name(self, k: int) -> str:
        ...


@dataclass
class SensitivityParameter:
    """
    Reaction rate multiplier perturbed during sensitivity analysis.

    Attributes:
        local (int): Reaction index in the kinetics object of the reactor.
        global_index (int): Position of the multiplier in the params vector.
        name (str): Label of the parameter.
    """

    local: int
    global_index: int
    name: str


class ReactorBase:
    """
    Common base of reactors and reservoirs: holds the property evaluator,
    the connections to flow devices and walls and the cached properties
    that connected objects read.
    """

    _ids = count()

    def __init__(self, thermo: Optional[ThermoPhase] = None, volume: float = 1.0, name: str = None):
        self.name = name if name is not None else f"{type(self).__name__}_{next(self._ids)}"
        self.thermo: Optional[ThermoPhase] = None
        self.n_species = 0
        self._volume = volume
        self._mass = 0.0
        self.inlets = []
        self.outlets = []
        self.walls = []  # (wall, side) with side 0 = left, 1 = right

        # cached properties
        self._state: Optional[np.ndarray] = None
        self._temperature = 0.0
        self._pressure = 0.0
        self._enthalpy = 0.0
        self._int_energy = 0.0

        if thermo is not None:
            self.set_thermo(thermo)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"

    def set_thermo(self, thermo: ThermoPhase) -> None:
        """
        Attach the property evaluator. The reactor takes its initial
        contents from the current state of the phase.
        """
        self.thermo = thermo
        self.n_species = thermo.n_species
        self.sync_state()

    def sync_state(self) -> None:
        """
        Refresh the cached properties from the current state of the phase.
        """
        if self.thermo is None:
            raise StateError(f"{self.name}: reactor is empty.")
        thermo = self.thermo
        self._state = thermo.save_state()
        self._temperature = thermo.temperature
        self._pressure = thermo.pressure
        self._enthalpy = thermo.enthalpy_mass
        self._int_energy = thermo.int_energy_mass
        self._mass = thermo.density * self._volume

    def add_inlet(self, device) -> None:
        self.inlets.append(device)

    def add_outlet(self, device) -> None:
        self.outlets.append(device)

    def add_wall(self, wall, side: int) -> None:
        self.walls.append((wall, side))

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = value
        if self.thermo is not None:
            self._mass = self.thermo.density * value

    @property
    def mass(self) -> float:
        return self._mass

    @property
    def temperature(self) -> float:
        return self._temperature

    @property
    def pressure(self) -> float:
        return self._pressure

    @property
    def enthalpy_mass(self) -> float:
        return self._enthalpy

    @property
    def int_energy_mass(self) -> float:
        return self._int_energy

    @property
    def density(self) -> float:
        return self._mass / self._volume

    @property
    def mass_fractions(self) -> np.ndarray:
        return self.thermo.mass_fractions


class Reactor(ReactorBase, ReactorModel):
    """
    Shared machinery of the zero-dimensional reactors whose state is
    [mass, volume, energy variable, mass fractions, surface coverages].

    Attributes:
        kinetics (Kinetics): Homogeneous kinetics evaluator, None for a non-reacting gas.
        energy_enabled (bool): Solve the energy equation.
        chemistry_enabled (bool): Include homogeneous reactions.
        n_eqs (int): Length of the state vector.
    """

    def __init__(
        self,
        thermo: Optional[ThermoPhase] = None,
        kinetics: Optional[Kinetics] = None,
        volume: float = 1.0,
        energy: bool = True,
        chemistry: bool = True,
        name: str = None,
    ):
        ReactorModel.__init__(self)
        ReactorBase.__init__(self, thermo=thermo, volume=volume, name=name)
        self.kinetics: Optional[Kinetics] = kinetics
        self.energy_enabled = energy
        self.chemistry_enabled = chemistry
        self.sens_params: list[SensitivityParameter] = []
        self.n_eqs = 0
        self.n_surface_species = 0

        # wall contributions, set by eval_walls
        self.vdot = 0.0
        self.Q = 0.0

        # scratch buffers, sized in initialize
        self.wdot = np.zeros(0)
        self.sdot = np.zeros(0)
        self.uk = np.zeros(0)
        self.work = np.zeros(0)

    def set_kinetics(self, kinetics: Kinetics) -> None:
        self.kinetics = kinetics

    def initialize(self, t0: float = 0.0) -> None:
        if self.thermo is None:
            raise StateError(f"{self.name}: reactor is empty.")
        # rates must be evaluated on the phase the trial states are pushed into
        if self.kinetics is not None and self.kinetics.phase is not self.thermo:
            raise ConfigurationError(
                f"{self.name}: kinetics is not defined on the reactor phase"
            )
        self.n_surface_species = 0
        for surface in self.surfaces:
            if surface.kinetics.gas is not self.thermo:
                raise ConfigurationError(
                    f"{self.name}: surface {surface.name} is not defined on the reactor gas"
                )
            self.n_surface_species += surface.n_species
        self.n_eqs = SPECIES_OFFSET + self.n_species + self.n_surface_species

        # fixed-size per-instance buffers
        self.wdot = np.zeros(self.n_species, dtype=np.float64)
        self.sdot = np.zeros(self.n_species, dtype=np.float64)
        self.uk = np.zeros(self.n_species, dtype=np.float64)
        self.work = np.zeros(self.n_species, dtype=np.float64)
        self.sync_state()
        logger.debug("%s initialized at t=%g with %d equations", self.name, t0, self.n_eqs)

    @property
    def surfaces(self) -> list:
        """
        Surfaces in contact with the reactor, in wall registration order.
        """
        surfaces = []
        for wall, side in self.walls:
            surface = wall.surface(side)
            if surface is not None:
                surfaces.append(surface)
        return surfaces

    # --- walls and surfaces ---

    def eval_walls(self, time: float) -> None:
        """
        Sum the volume change rate and heat loss over the walls. Walls are
        oriented left to right, so the right-hand reactor sees them with
        opposite sign.
        """
        self.vdot = 0.0
        self.Q = 0.0
        for wall, side in self.walls:
            sign = 1 - 2 * side
            self.vdot += sign * wall.vdot(time)
            self.Q += sign * wall.heat_rate(time)

    def eval_surfaces(self, time: float, ydot_surf: np.ndarray) -> float:
        """
        Evaluates the surface chemistry of every wall.

        Args:
            time(float): Current time [s].
            ydot_surf(ndarray): Coverage derivatives, written in place.
        Returns:
            (float): Net mass flux from the surfaces into the gas [kg s-1].
        """
        self.sdot[:] = 0.0
        loc = 0
        for wall, side in self.walls:
            surface = wall.surface(side)
            if surface is None:
                continue
            n = surface.n_species
            rates = surface.eval(self.thermo.temperature, ydot_surf[loc : loc + n])
            self.sdot += rates * wall.area
            loc += n
        return float(np.dot(self.sdot, self.thermo.molecular_weights))

    def get_surface_initial_conditions(self, y_surf: np.ndarray) -> None:
        loc = 0
        for surface in self.surfaces:
            y_surf[loc : loc + surface.n_species] = surface.coverages
            loc += surface.n_species

    def update_surface_state(self, y_surf: np.ndarray) -> None:
        loc = 0
        for surface in self.surfaces:
            surface.sync_state(y_surf[loc : loc + surface.n_species])
            loc += surface.n_species

    # --- sensitivity analysis ---

    def add_sensitivity_reaction(self, reaction: int, name: str = None) -> SensitivityParameter:
        """
        Register the rate multiplier of a homogeneous reaction as a
        sensitivity parameter.
        """
        if self.kinetics is None:
            raise ConfigurationError(f"{self.name}: no kinetics to take sensitivities from")
        if not 0 <= reaction < self.kinetics.n_reactions:
            raise IndexError(f"Reaction index {reaction} out of range")
        param = SensitivityParameter(
            local=reaction,
            global_index=len(self.sens_params),
            name=name or f"{self.name}: {self.kinetics.reaction_equation(reaction)}",
        )
        self.sens_params.append(param)
        return param

    @contextmanager
    def apply_sensitivity(self, params: Optional[np.ndarray]) -> Iterator[None]:
        """
        Scale the registered reaction multipliers by params for the duration
        of the block. The original multipliers are restored on exit, also
        when the block raises.
        """
        applied = []
        try:
            if params is not None and self.kinetics is not None:
                for p in self.sens_params:
                    original = self.kinetics.multiplier(p.local)
                    self.kinetics.set_multiplier(p.local, original * params[p.global_index])
                    applied.append((p.local, original))
            yield
        finally:
            for local, original in reversed(applied):
                self.kinetics.set_multiplier(local, original)

    # --- component naming ---

    def species_index(self, name: str) -> Optional[int]:
        """
        Index of a gas or surface species among the species unknowns of the
        reactor, NPOS if the reactor does not contain it.
        """
        k = self.thermo.species_index(name) if self.thermo is not None else -1
        if k >= 0:
            return k
        offset = self.n_species
        for surface in self.surfaces:
            k = surface.species_index(name)
            if k >= 0:
                return offset + k
            offset += surface.n_species
        return NPOS

    def component_name(self, k: int) -> str:
        if k == 0:
            return "mass"
        elif k == 1:
            return "volume"
        elif k == 2:
            return "int_energy"
        elif k >= SPECIES_OFFSET:
            i = k - SPECIES_OFFSET
            if i < self.n_species:
                return self.thermo.species_names[i]
            i -= self.n_species
            for surface in self.surfaces:
                if i < surface.n_species:
                    return surface.species_names[i]
                i -= surface.n_species
        raise IndexError(f"{self.name}: component index {k} is out of bounds.")
