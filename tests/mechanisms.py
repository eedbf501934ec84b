"""Small mechanisms shared by the test modules."""

from zerod import (
    Arrhenius,
    GasKinetics,
    IdealGasPhase,
    InterfaceKinetics,
    Reaction,
    ReactorSurface,
    SurfacePhase,
)

H2O2_SPECIES = ["H2", "O2", "H2O", "H", "O", "OH", "N2"]

# Rate parameters in kmol, m3, s and J/kmol
H2O2_REACTIONS = [
    ("H + O2 <=> O + OH", 3.547e12, -0.406, 6.945e7),
    ("O + H2 <=> H + OH", 50.8, 2.67, 2.632e7),
    ("H2 + OH <=> H2O + H", 2.16e5, 1.51, 1.435e7),
    ("O + H2O <=> 2 OH", 2.97e3, 2.02, 5.607e7),
]


def h2o2_gas(T: float = 1200.0, P: float = 101325.0, X: dict = None) -> IdealGasPhase:
    if X is None:
        X = {"H2": 2.0, "O2": 1.0, "N2": 3.76, "H": 1e-3}
    return IdealGasPhase(H2O2_SPECIES, temperature=T, pressure=P, X=X)


def h2o2_kinetics(gas: IdealGasPhase) -> GasKinetics:
    reactions = [
        Reaction.from_equation(eq, Arrhenius(A=A, b=b, Ea=Ea)) for eq, A, b, Ea in H2O2_REACTIONS
    ]
    return GasKinetics(gas, reactions)


def h2_surface(gas: IdealGasPhase, coverages: dict = None) -> ReactorSurface:
    """
    Dissociative adsorption and recombinative desorption of H2 on platinum.
    """
    phase = SurfacePhase(["PT(S)", "H(S)"], site_density=2.7e-8, coverages=coverages)
    reactions = [
        Reaction.from_equation("H2 + 2 PT(S) => 2 H(S)", Arrhenius(A=1e13)),
        Reaction.from_equation("2 H(S) => H2 + 2 PT(S)", Arrhenius(A=3.7e13, Ea=6.7e7)),
    ]
    return ReactorSurface(phase, InterfaceKinetics(gas, phase, reactions))
