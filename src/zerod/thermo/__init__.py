from zerod.thermo.phase import ThermoPhase
from zerod.thermo.ideal_gas import IdealGasPhase
from zerod.thermo.surface import SurfacePhase
from zerod.thermo.species_data import Species, SPECIES_DB, get_species

__all__ = [
    "ThermoPhase",
    "IdealGasPhase",
    "SurfacePhase",
    "Species",
    "SPECIES_DB",
    "get_species",
]
