from zerod.kinetics.kinetics import Arrhenius, Kinetics, Reaction, rates_of_progress
from zerod.kinetics.gas_kinetics import GasKinetics
from zerod.kinetics.surface_kinetics import InterfaceKinetics

__all__ = [
    "Arrhenius",
    "Kinetics",
    "Reaction",
    "rates_of_progress",
    "GasKinetics",
    "InterfaceKinetics",
]
