"""
Run a zero-dimensional ideal-gas reactor simulation defined in a .toml file.
"""

import argparse
import logging
import tomllib

import numpy as np
from prettytable import PrettyTable

from zerod import (
    Arrhenius,
    GasKinetics,
    IdealGasPhase,
    IdealGasReactor,
    MassFlowController,
    Reaction,
    ReactorNet,
    Reservoir,
    Valve,
)
from zerod.constants import ONE_ATM
from zerod.errors import ConfigurationError

logger = logging.getLogger(__name__)


class MissingInputError(Exception):
    pass


def _section(config: dict, key: str) -> dict:
    if key not in config:
        raise ConfigurationError(f"Missing [{key}] section in the configuration")
    return config[key]


def _composition(entry: dict, where: str) -> dict:
    if "X" in entry:
        return {"X": entry["X"]}
    if "Y" in entry:
        return {"Y": entry["Y"]}
    raise ConfigurationError(f"[{where}] requires a composition X or Y")


def _make_gas(species: list[str], entry: dict, where: str, name: str) -> IdealGasPhase:
    comp = _composition(entry, where)
    T = entry.get("T", 300.0)
    P = entry.get("P", ONE_ATM)
    try:
        gas = IdealGasPhase(species, temperature=T, pressure=P, name=name)
        if "X" in comp:
            gas.set_state_TPX(T, P, comp["X"])
        else:
            gas.set_state_TPY(T, P, comp["Y"])
    except ValueError as e:
        raise ConfigurationError(f"[{where}] {e}") from e
    return gas


def build_network(config: dict) -> ReactorNet:
    """
    Assemble the reactor network described by a parsed .toml configuration.

    Args:
        config(dict): Configuration with [mechanism], [reactor] and optional
            [[inlets]], [[outlets]] and [integration] sections.
    Returns:
        (ReactorNet): Network containing a single IdealGasReactor.
    """
    mechanism = _section(config, "mechanism")
    reactor_cfg = _section(config, "reactor")
    species = mechanism.get("species")
    if not species:
        raise ConfigurationError("[mechanism] requires a non-empty species list")

    gas = _make_gas(species, reactor_cfg, "reactor", "gas")
    reactions = []
    for rxn in mechanism.get("reactions", []):
        try:
            rate = Arrhenius(A=rxn["A"], b=rxn.get("b", 0.0), Ea=rxn.get("Ea", 0.0))
            reactions.append(Reaction.from_equation(rxn["equation"], rate))
        except KeyError as e:
            raise ConfigurationError(f"Reaction entry {rxn} is missing {e}") from e
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
    try:
        kinetics = GasKinetics(gas, reactions) if reactions else None
    except ValueError as e:
        raise ConfigurationError(f"[mechanism] {e}") from e

    integration = config.get("integration", {})
    net = ReactorNet(
        rtol=integration.get("rtol", 1e-9),
        atol=integration.get("atol", 1e-15),
        method=integration.get("method", "BDF"),
    )
    reactor = IdealGasReactor(
        gas,
        kinetics=kinetics,
        volume=reactor_cfg.get("volume", 1.0),
        energy=reactor_cfg.get("energy", True),
        chemistry=reactor_cfg.get("chemistry", True),
        name=reactor_cfg.get("name", "reactor"),
    )

    for i, inlet in enumerate(config.get("inlets", [])):
        upstream = Reservoir(_make_gas(species, inlet, "inlets", f"inlet_{i}"), name=f"inlet_{i}")
        MassFlowController(upstream, reactor, mdot=inlet.get("mdot", 0.0))
    for i, outlet in enumerate(config.get("outlets", [])):
        ambient = dict(reactor_cfg)
        ambient["P"] = outlet.get("P", ambient.get("P", ONE_ATM))
        downstream = Reservoir(_make_gas(species, ambient, "outlets", f"outlet_{i}"), name=f"outlet_{i}")
        if "K" in outlet:
            Valve(reactor, downstream, K=outlet["K"])
        else:
            MassFlowController(reactor, downstream, mdot=outlet.get("mdot", 0.0))

    net.add_reactor(reactor)
    return net


def main():
    """
    Parse .toml configuration file and run the reactor simulation.
    """

    PARSER = argparse.ArgumentParser(
        description="Simulate a zero-dimensional ideal-gas reactor."
    )
    PARSER.add_argument(
        "-i",
        "--input",
        type=str,
        dest="input",
        help="Path to the .toml configuration file.",
    )
    PARSER.add_argument(
        "-o", "--output", type=str, dest="output", default="reactor.csv", help="Output .csv file."
    )
    PARSER.add_argument(
        "-v", "--verbose", action="store_true", help="Print integration progress."
    )
    ARGS = PARSER.parse_args()

    if not ARGS.input:
        raise MissingInputError("An input TOML file is required to run this program.")

    logging.basicConfig(
        level=logging.INFO if ARGS.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    with open(ARGS.input, "rb") as f:
        config = tomllib.load(f)

    net = build_network(config)
    integration = config.get("integration", {})
    tfin = integration.get("tfin", 1.0)
    t_eval = np.linspace(net.time, tfin, integration.get("nsteps", 100) + 1)
    results = net.integrate(tfin, t_eval=t_eval)

    header = ["time"] + [net.component_name(i) for i in range(net.n_eqs)]
    np.savetxt(
        ARGS.output,
        np.column_stack((results.t, results.y.T)),
        delimiter=",",
        header=",".join(header),
        comments="",
    )

    table = PrettyTable()
    table.field_names = ["Component", "Final value"]
    table.align["Component"] = "l"
    state = net.state
    for i in range(net.n_eqs):
        table.add_row([net.component_name(i), f"{state[i]:.6e}"])
    print(table)
    print(f"Integration time: {results['time']:.2f}s, results written to {ARGS.output}")


if __name__ == "__main__":
    main()
