# setup.py

from setuptools import setup, find_packages

setup(
    name="tsp_insertion",
    version="0.1.0",
    description="Best-first incremental insertion heuristics for the Traveling Salesman Problem",
    packages=find_packages(exclude=["tests*", "benchmarks*", "examples*", "scripts*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
)
