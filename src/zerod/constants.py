"""Physical constants and shared sentinels. SI units with kmol as amount unit."""

GAS_CONSTANT = 8314.462618  # J kmol-1 K-1
ONE_ATM = 101325.0  # Pa
P_REF = ONE_ATM  # Reference pressure of the standard state [Pa]

# Offsets of the bulk unknowns in the reactor state vector
MASS_OFFSET = 0
VOLUME_OFFSET = 1
TEMPERATURE_OFFSET = 2
SPECIES_OFFSET = 3

IDEAL_GAS_TYPE = "IdealGas"

NPOS = None  # returned by component lookups when the name is unknown
