from zerod.reactors.reactor import ReactorBase, ReactorModel, Reactor, SensitivityParameter
from zerod.reactors.ideal_gas_reactor import IdealGasReactor
from zerod.reactors.reservoir import Reservoir

__all__ = [
    "ReactorBase",
    "ReactorModel",
    "Reactor",
    "SensitivityParameter",
    "IdealGasReactor",
    "Reservoir",
]
