"""
f1flat: flat relational snapshot of the Ergast motorsport dataset.

This package validates the dataset's CSV files record by record and loads
them into a single foreign-key-enforced, indexed SQLite file.
"""

from importlib.metadata import version

__version__ = version("f1flat")

__all__ = ["__version__"]
