from zerod.constants import *
from zerod.errors import ConfigurationError, StateError, ZerodError
from zerod.thermo import IdealGasPhase, SurfacePhase, ThermoPhase, Species
from zerod.kinetics import Arrhenius, Reaction, GasKinetics, InterfaceKinetics
from zerod.reactors import IdealGasReactor, Reactor, Reservoir
from zerod.flow_devices import MassFlowController, PressureController, Valve
from zerod.walls import ReactorSurface, Wall
from zerod.reactor_net import ReactorNet

__all__ = [
    "ConfigurationError",
    "StateError",
    "ZerodError",
    "IdealGasPhase",
    "SurfacePhase",
    "ThermoPhase",
    "Species",
    "Arrhenius",
    "Reaction",
    "GasKinetics",
    "InterfaceKinetics",
    "IdealGasReactor",
    "Reactor",
    "Reservoir",
    "MassFlowController",
    "PressureController",
    "Valve",
    "ReactorSurface",
    "Wall",
    "ReactorNet",
]
__version__ = "0.1.0"
