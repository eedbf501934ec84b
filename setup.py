#!/usr/bin/env python

from setuptools import setup, find_packages

setup(
    name="zerod",
    version="0.1.0",
    description="zerod, zero-dimensional ideal-gas reactor models with homogeneous and surface chemistry for stiff reactor-network integration.",
    author="zerod developers",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.11",
    install_requires=[
        "numpy",
        "scipy",
        "numba",
        "prettytable",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["zerod-run=zerod.scripts.run_reactor:main"]},
    keywords=["chemical kinetics", "reactor networks", "combustion", "heterogeneous catalysis"],
)
