"""Module providing the interface for the kinetics evaluators used by the reactors."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import numpy as np
from numba import njit

from zerod.constants import GAS_CONSTANT


@dataclass(frozen=True)
class Arrhenius:
    """Modified Arrhenius rate expression k = A * T**b * exp(-Ea / RT).

    Attributes:
        A (float): Pre-exponential factor (kmol, m, s units depending on order).
        b (float): Temperature exponent.
        Ea (float): Activation energy [J kmol-1].
    """

    A: float
    b: float = 0.0
    Ea: float = 0.0

    def __call__(self, temperature: float) -> float:
        return self.A * temperature**self.b * np.exp(-self.Ea / (GAS_CONSTANT * temperature))

    def dlnk_dT(self, temperature: float) -> float:
        return self.b / temperature + self.Ea / (GAS_CONSTANT * temperature**2)


@dataclass
class Reaction:
    """Elementary reaction with mass-action (or power-law) rate.

    Attributes:
        reactants (dict[str, float]): Stoichiometric coefficients of the reactants.
        products (dict[str, float]): Stoichiometric coefficients of the products.
        rate (Arrhenius): Forward rate expression.
        reversible (bool): Whether the reverse direction is active.
        orders (dict[str, float]): Forward reaction orders overriding the
            reactant coefficients.
        reverse_rate (Arrhenius): Explicit reverse rate expression. If None,
            the reverse rate follows from the equilibrium constant when supported.
    """

    reactants: dict[str, float]
    products: dict[str, float]
    rate: Arrhenius
    reversible: bool = True
    orders: Optional[dict[str, float]] = None
    reverse_rate: Optional[Arrhenius] = None
    id: str = field(default="")

    def __repr__(self) -> str:
        return self.equation

    @property
    def equation(self) -> str:
        def side(stoic: dict[str, float]) -> str:
            terms = []
            for name, nu in stoic.items():
                terms.append(name if nu == 1 else f"{nu:g} {name}")
            return " + ".join(terms)

        arrow = " <=> " if self.reversible else " => "
        return side(self.reactants) + arrow + side(self.products)

    @classmethod
    def from_equation(
        cls,
        equation: str,
        rate: Arrhenius,
        orders: Optional[dict[str, float]] = None,
        reverse_rate: Optional[Arrhenius] = None,
    ) -> "Reaction":
        """
        Build a reaction from a string such as "2 H2 + O2 <=> 2 H2O".
        "<=>" denotes a reversible and "=>" an irreversible reaction.
        """
        if "<=>" in equation:
            lhs, rhs = equation.split("<=>")
            reversible = True
        elif "=>" in equation:
            lhs, rhs = equation.split("=>")
            reversible = False
        else:
            raise ValueError(f"Missing reaction arrow in '{equation}'")
        return cls(
            reactants=_parse_side(lhs),
            products=_parse_side(rhs),
            rate=rate,
            reversible=reversible,
            orders=orders,
            reverse_rate=reverse_rate,
        )


def _parse_side(side: str) -> dict[str, float]:
    stoic = {}
    for term in side.split(" + "):
        parts = term.split()
        if len(parts) == 1:
            nu, name = 1.0, parts[0]
        elif len(parts) == 2:
            nu, name = float(parts[0]), parts[1]
        else:
            raise ValueError(f"Cannot parse reaction term '{term.strip()}'")
        stoic[name] = stoic.get(name, 0.0) + nu
    return stoic


@njit
def rates_of_progress(conc, kf, kr, orders_f, orders_r):
    fwd = np.empty_like(kf)
    rev = np.empty_like(kr)
    for i in range(kf.shape[0]):
        forward_product = 1.0
        backward_product = 1.0
        for j in range(conc.shape[0]):
            if orders_f[i, j] != 0.0:
                forward_product *= conc[j] ** orders_f[i, j]
            if orders_r[i, j] != 0.0:
                backward_product *= conc[j] ** orders_r[i, j]
        fwd[i] = kf[i] * forward_product
        rev[i] = kr[i] * backward_product
    return fwd, rev


class Kinetics(ABC):
    """
    Abstract class for homogeneous and heterogeneous rate-law evaluators.

    Species of the kinetics object are the concatenation of the species of
    its phases, reaction multipliers scale the rates of progress and are the
    handle used for sensitivity analysis.
    """

    def __init__(self, species_names: list[str], reactions: list[Reaction]):
        self.kinetics_species = list(species_names)
        self.reactions = list(reactions)
        nr, nk = len(self.reactions), len(self.kinetics_species)
        self.nu_reac = np.zeros((nr, nk), dtype=np.float64)
        self.nu_prod = np.zeros((nr, nk), dtype=np.float64)
        self.orders_f = np.zeros((nr, nk), dtype=np.float64)
        for i, rxn in enumerate(self.reactions):
            for name, nu in rxn.reactants.items():
                self.nu_reac[i, self._kinetics_index(name, rxn)] += nu
            for name, nu in rxn.products.items():
                self.nu_prod[i, self._kinetics_index(name, rxn)] += nu
            self.orders_f[i] = self.nu_reac[i]
            if rxn.orders:
                for name, order in rxn.orders.items():
                    self.orders_f[i, self._kinetics_index(name, rxn)] = order
        self.orders_r = self.nu_prod.copy()
        self.v_matrix = (self.nu_prod - self.nu_reac).T  # (species, reactions)
        self.reversible = np.array([rxn.reversible for rxn in self.reactions], dtype=bool)
        self._multipliers = np.ones(nr, dtype=np.float64)

    def _kinetics_index(self, name: str, rxn: Reaction) -> int:
        try:
            return self.kinetics_species.index(name)
        except ValueError:
            raise ValueError(f"Species {name} in reaction '{rxn.equation}' is not defined")

    @property
    def n_reactions(self) -> int:
        return len(self.reactions)

    @property
    def n_total_species(self) -> int:
        return len(self.kinetics_species)

    def reaction_equation(self, i: int) -> str:
        return self.reactions[i].equation

    def multiplier(self, i: int) -> float:
        return self._multipliers[i]

    def set_multiplier(self, i: int, value: float) -> None:
        self._multipliers[i] = value

    def forward_rate_constants(self) -> np.ndarray:
        t = self.temperature()
        return np.array([rxn.rate(t) for rxn in self.reactions], dtype=np.float64)

    def rates_of_progress(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Returns:
            (tuple[ndarray, ndarray]): Forward and reverse rates of progress,
                including the reaction multipliers.
        """
        kf = self.forward_rate_constants() * self._multipliers
        kr = self.reverse_rate_constants(kf)
        return rates_of_progress(self.concentrations(), kf, kr, self.orders_f, self.orders_r)

    def net_rates_of_progress(self) -> np.ndarray:
        fwd, rev = self.rates_of_progress()
        return fwd - rev

    def net_production_rates(self) -> np.ndarray:
        return self.v_matrix @ self.net_rates_of_progress()

    @abstractmethod
    def temperature(self) -> float:
        ...

    @abstractmethod
    def concentrations(self) -> np.ndarray:
        ...

    @abstractmethod
    def reverse_rate_constants(self, kf: np.ndarray) -> np.ndarray:
        ...

    @abstractmethod
    def net_production_rates_ddT(self) -> np.ndarray:
        ...
