"""Network of reactors integrated together as one ODE system."""

import logging
from time import time as wall_clock
from typing import Optional

import numpy as np
from scipy.integrate import solve_ivp
from scipy.sparse import csr_matrix, lil_matrix

from zerod.errors import StateError
from zerod.reactors.reactor import Reactor, SensitivityParameter

logger = logging.getLogger(__name__)


class ReactorNet:
    """
    Network of reactors coupled through flow devices and walls.

    The state vector of the network is the concatenation of the state
    vectors of its reactors. Each right-hand side evaluation first updates
    every reactor, as connected reactors read each other's cached pressure,
    temperature, enthalpy and composition, then evaluates the equations.

    Attributes:
        reactors (list[Reactor]): Reactors of the network.
        time (float): Current time of the network [s].
        rtol, atol (float): Tolerances of the integrator.
        method (str): scipy.integrate.solve_ivp method. Stiff methods (BDF,
            Radau, LSODA) are strongly recommended.
    """

    def __init__(
        self,
        reactors: Optional[list[Reactor]] = None,
        rtol: float = 1e-9,
        atol: float = 1e-15,
        method: str = "BDF",
    ):
        self.reactors: list[Reactor] = []
        self.rtol = rtol
        self.atol = atol
        self.method = method
        self.time = 0.0
        self.n_rhs = 0
        self.sens_params: list[SensitivityParameter] = []
        self.params = np.ones(0, dtype=np.float64)
        self._offsets: list[int] = []
        self._y = np.zeros(0, dtype=np.float64)
        self._initialized = False
        for reactor in reactors or []:
            self.add_reactor(reactor)

    def __str__(self) -> str:
        y = f"Reactor network with {len(self.reactors)} reactors and {self.n_eqs} equations\n"
        y += f"Time: {self.time} s, method: {self.method}\n"
        return y

    def add_reactor(self, reactor: Reactor) -> None:
        if not isinstance(reactor, Reactor):
            raise TypeError(f"Only reactors with equations can be added, got {type(reactor).__name__}")
        self.reactors.append(reactor)
        self._initialized = False

    @property
    def n_eqs(self) -> int:
        return int(self._y.shape[0])

    @property
    def state(self) -> np.ndarray:
        if not self._initialized:
            self.initialize()
        return self._y.copy()

    def initialize(self) -> None:
        if not self.reactors:
            raise StateError("No reactors in the network.")
        self._offsets = []
        n = 0
        for reactor in self.reactors:
            reactor.initialize(self.time)
            self._offsets.append(n)
            n += reactor.n_eqs
        self._y = np.zeros(n, dtype=np.float64)
        for reactor, offset in zip(self.reactors, self._offsets):
            reactor.get_state(self._y[offset : offset + reactor.n_eqs])
        if self.params.shape[0] != len(self.sens_params):
            self.params = np.ones(len(self.sens_params), dtype=np.float64)
        self._initialized = True
        logger.info(
            "Initialized network of %d reactors with %d equations at t=%g",
            len(self.reactors), n, self.time,
        )

    def add_sensitivity_reaction(self, reactor: Reactor, reaction: int) -> SensitivityParameter:
        """
        Register a reaction multiplier of one of the reactors as a global
        sensitivity parameter. Its value is read from self.params.
        """
        param = reactor.add_sensitivity_reaction(reaction)
        param.global_index = len(self.sens_params)
        self.sens_params.append(param)
        self.params = np.ones(len(self.sens_params), dtype=np.float64)
        return param

    def update_state(self, y: np.ndarray) -> None:
        for reactor, offset in zip(self.reactors, self._offsets):
            reactor.update_state(y[offset : offset + reactor.n_eqs])

    def rhs(self, t: float, y: np.ndarray) -> np.ndarray:
        """
        Right-hand side of the network, with the signature expected by
        scipy.integrate.solve_ivp.
        """
        ydot = np.zeros_like(y)
        self.update_state(y)
        params = self.params if self.sens_params else None
        for reactor, offset in zip(self.reactors, self._offsets):
            sl = slice(offset, offset + reactor.n_eqs)
            reactor.eval_eqs(t, y[sl], ydot[sl], params)
        self.n_rhs += 1
        logger.debug("RHS evaluation %d at t=%g", self.n_rhs, t)
        return ydot

    def jacobian(self, t: Optional[float] = None, y: Optional[np.ndarray] = None) -> csr_matrix:
        """
        Partial analytic Jacobian of the network. Only the blocks listed in
        the jacobian_blocks attribute of each reactor are filled, the matrix
        is meant for diagnostics and is not passed to the integrator.
        """
        if not self._initialized:
            self.initialize()
        t = self.time if t is None else t
        y = self._y if y is None else np.asarray(y, dtype=np.float64)
        self.rhs(t, y)  # refresh the surface rates cached by the reactors
        jac = lil_matrix((self.n_eqs, self.n_eqs), dtype=np.float64)
        for reactor, offset in zip(self.reactors, self._offsets):
            reactor.eval_jac_eqs(t, y, jac, offset)
        # put the reactors back at the network state
        self.update_state(self._y)
        return jac.tocsr()

    def integrate(self, tfin: float, t_eval: Optional[np.ndarray] = None) -> dict:
        """
        Integrate the network from the current time up to tfin.

        Args:
            tfin(float): Final time [s].
            t_eval(ndarray): Times at which the solution is stored. If None,
                the integrator steps are stored.

        Returns:
            (dict): Dictionary containing the solution of the ODE system
                ("t", "y", "status", "message", "nfev", "time").
        """
        if not self._initialized:
            self.initialize()
        time0 = wall_clock()
        logger.info("Integrating from t=%g to t=%g with %s", self.time, tfin, self.method)
        results = solve_ivp(
            self.rhs,
            (self.time, tfin),
            self._y,
            method=self.method,
            t_eval=t_eval,
            rtol=self.rtol,
            atol=self.atol,
        )
        results["time"] = wall_clock() - time0
        if not results.success:
            logger.warning("Integration from t=%g failed: %s", self.time, results.message)
        if results.t.shape[0] > 0:
            self.time = float(results.t[-1])
            self._y = results.y[:, -1].copy()
        self.update_state(self._y)
        logger.info(
            "Reached t=%g after %d RHS evaluations in %.2fs",
            self.time, results.nfev, results["time"],
        )
        return results

    def advance(self, t: float) -> np.ndarray:
        """
        Advance the network to time t and return its state vector.
        """
        self.integrate(t)
        return self._y.copy()

    def reinitialize(self) -> None:
        """
        Re-read the reactor states after they were modified outside the network.
        """
        self._initialized = False
        self.initialize()

    def component_name(self, i: int) -> str:
        if not self._initialized:
            self.initialize()
        for reactor, offset in zip(self.reactors, self._offsets):
            if offset <= i < offset + reactor.n_eqs:
                return f"{reactor.name}: {reactor.component_name(i - offset)}"
        raise IndexError(f"Component index {i} is out of bounds.")
