"""
Built-in species thermochemistry.

NASA 7-coefficient polynomials (GRI-Mech 3.0 fits) for a small H2/O2 set
plus common diluents. Each entry holds the molecular weight [kg kmol-1],
the temperature ranges [K] and the low/high coefficient sets.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Species:
    """Ideal-gas species described by a two-range NASA7 polynomial.

    Attributes:
        name (str): Species name.
        molecular_weight (float): Molecular weight [kg kmol-1].
        t_low (float): Lower validity bound [K].
        t_mid (float): Temperature at which the two fits meet [K].
        t_high (float): Upper validity bound [K].
        low (tuple[float]): Coefficients a1..a7 below t_mid.
        high (tuple[float]): Coefficients a1..a7 above t_mid.
    """

    name: str
    molecular_weight: float
    t_low: float
    t_mid: float
    t_high: float
    low: tuple
    high: tuple


SPECIES_DB: dict[str, Species] = {
    "H2": Species(
        "H2", 2.01588, 200.0, 1000.0, 3500.0,
        (2.34433112e00, 7.98052075e-03, -1.94781510e-05, 2.01572094e-08,
         -7.37611761e-12, -9.17935173e02, 6.83010238e-01),
        (3.33727920e00, -4.94024731e-05, 4.99456778e-07, -1.79566394e-10,
         2.00255376e-14, -9.50158922e02, -3.20502331e00),
    ),
    "O2": Species(
        "O2", 31.9988, 200.0, 1000.0, 3500.0,
        (3.78245636e00, -2.99673416e-03, 9.84730201e-06, -9.68129509e-09,
         3.24372837e-12, -1.06394356e03, 3.65767573e00),
        (3.28253784e00, 1.48308754e-03, -7.57966669e-07, 2.09470555e-10,
         -2.16717794e-14, -1.08845772e03, 5.45323129e00),
    ),
    "H2O": Species(
        "H2O", 18.01528, 200.0, 1000.0, 3500.0,
        (4.19864056e00, -2.03643410e-03, 6.52040211e-06, -5.48797062e-09,
         1.77197817e-12, -3.02937267e04, -8.49032208e-01),
        (3.03399249e00, 2.17691804e-03, -1.64072518e-07, -9.70419870e-11,
         1.68200992e-14, -3.00042971e04, 4.96677010e00),
    ),
    "H": Species(
        "H", 1.00794, 200.0, 1000.0, 3500.0,
        (2.50000000e00, 0.0, 0.0, 0.0, 0.0, 2.54736599e04, -4.46682853e-01),
        (2.50000000e00, 0.0, 0.0, 0.0, 0.0, 2.54736599e04, -4.46682914e-01),
    ),
    "O": Species(
        "O", 15.9994, 200.0, 1000.0, 3500.0,
        (3.16826710e00, -3.27931884e-03, 6.64306396e-06, -6.12806624e-09,
         2.11265971e-12, 2.91222592e04, 2.05193346e00),
        (2.56942078e00, -8.59741137e-05, 4.19484589e-08, -1.00177799e-11,
         1.22833691e-15, 2.92175791e04, 4.78433864e00),
    ),
    "OH": Species(
        "OH", 17.00734, 200.0, 1000.0, 3500.0,
        (3.99201543e00, -2.40131752e-03, 4.61793841e-06, -3.88113333e-09,
         1.36411470e-12, 3.61508056e03, -1.03925458e-01),
        (3.09288767e00, 5.48429716e-04, 1.26505228e-07, -8.79461556e-11,
         1.17412376e-14, 3.85865700e03, 4.47669610e00),
    ),
    "N2": Species(
        "N2", 28.0134, 300.0, 1000.0, 5000.0,
        (3.298677e00, 1.4082404e-03, -3.963222e-06, 5.641515e-09,
         -2.444854e-12, -1.0208999e03, 3.950372e00),
        (2.92664e00, 1.4879768e-03, -5.68476e-07, 1.0097038e-10,
         -6.753351e-15, -9.227977e02, 5.980528e00),
    ),
    "AR": Species(
        "AR", 39.948, 300.0, 1000.0, 5000.0,
        (2.5, 0.0, 0.0, 0.0, 0.0, -7.45375e02, 4.366),
        (2.5, 0.0, 0.0, 0.0, 0.0, -7.45375e02, 4.366),
    ),
}


def get_species(names: list[str]) -> list[Species]:
    """
    Look up species in the built-in database.

    Args:
        names(list[str]): Species names.
    Returns:
        (list[Species]): Species objects in the requested order.
    """
    missing = [name for name in names if name not in SPECIES_DB]
    if missing:
        raise ValueError(f"Species not available in the built-in database: {missing}")
    return [SPECIES_DB[name] for name in names]
