"""Flow devices connecting the outlet of a reactor to the inlet of another."""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)


def _as_function(value: Union[float, Callable, None], default: float = 0.0) -> Callable:
    if value is None:
        return lambda _: default
    if callable(value):
        return value
    return lambda _: value


class FlowDevice(ABC):
    """
    Abstract class for devices moving mass from an upstream to a downstream
    reactor. The carried composition and enthalpy are the ones cached by
    the upstream reactor.

    Attributes:
        upstream (ReactorBase): Reactor the mass is taken from.
        downstream (ReactorBase): Reactor the mass flows into.
    """

    def __init__(self, upstream, downstream, name: str = None):
        self.upstream = upstream
        self.downstream = downstream
        self.name = name or f"{type(self).__name__}({upstream.name} -> {downstream.name})"
        self._mdot = 0.0
        self._species_map: Optional[np.ndarray] = None
        upstream.add_outlet(self)
        downstream.add_inlet(self)

    def __repr__(self) -> str:
        return self.name

    @abstractmethod
    def _compute_mass_flow_rate(self, time: float) -> float:
        ...

    def mass_flow_rate(self, time: float) -> float:
        """
        Instantaneous mass flow rate [kg s-1]. Reverse flow is not allowed.
        """
        self._mdot = max(self._compute_mass_flow_rate(time), 0.0)
        return self._mdot

    @property
    def enthalpy_mass(self) -> float:
        return self.upstream.enthalpy_mass

    @property
    def species_map(self) -> np.ndarray:
        """
        Index of each downstream species in the upstream phase, -1 when absent.
        """
        if self._species_map is None:
            up = self.upstream.thermo
            down = self.downstream.thermo
            self._species_map = np.array(
                [up.species_index(name) for name in down.species_names], dtype=np.int64
            )
            missing = [n for n in up.species_names if down.species_index(n) < 0]
            if missing:
                logger.warning("%s: species %s are not transported downstream", self.name, missing)
        return self._species_map

    def outlet_species_mass_flow_rates(self) -> np.ndarray:
        """
        Mass flow rates of the downstream species [kg s-1], from the last
        mass_flow_rate evaluation.
        """
        mapping = self.species_map
        y_up = self.upstream.mass_fractions
        rates = np.zeros(mapping.shape[0], dtype=np.float64)
        present = mapping >= 0
        rates[present] = self._mdot * y_up[mapping[present]]
        return rates

    def outlet_species_mass_flow_rate(self, k: int) -> float:
        i = self.species_map[k]
        return 0.0 if i < 0 else self._mdot * self.upstream.mass_fractions[i]


class MassFlowController(FlowDevice):
    """
    Imposes a mass flow rate, constant or given as a function of time.
    """

    def __init__(self, upstream, downstream, mdot: Union[float, Callable] = 1.0, name: str = None):
        super().__init__(upstream, downstream, name=name)
        self.mdot = mdot

    @property
    def mdot(self) -> Callable:
        return self._mdot_func

    @mdot.setter
    def mdot(self, value: Union[float, Callable]) -> None:
        self._mdot_func = _as_function(value)

    def _compute_mass_flow_rate(self, time: float) -> float:
        return self._mdot_func(time)


class Valve(FlowDevice):
    """
    Flow proportional to the pressure drop, mdot = K * (P_up - P_down).
    K can also be a function of the pressure drop.
    """

    def __init__(self, upstream, downstream, K: Union[float, Callable] = 1.0, name: str = None):
        super().__init__(upstream, downstream, name=name)
        if callable(K):
            self.flow_function = K
        else:
            self.flow_function = lambda dp: K * dp

    def _compute_mass_flow_rate(self, time: float) -> float:
        dp = self.upstream.pressure - self.downstream.pressure
        return self.flow_function(dp) if dp > 0.0 else 0.0


class PressureController(FlowDevice):
    """
    Follows the flow of a master device, corrected by the pressure drop:
    mdot = mdot_master + K * (P_up - P_down).
    """

    def __init__(self, upstream, downstream, master: FlowDevice, K: float = 1e-5, name: str = None):
        super().__init__(upstream, downstream, name=name)
        self.master = master
        self.K = K

    def _compute_mass_flow_rate(self, time: float) -> float:
        dp = self.upstream.pressure - self.downstream.pressure
        return self.master.mass_flow_rate(time) + self.K * dp
