"""Build, reshape and inspect coordinate geometries held in numpy arrays, lists and pandas data frames."""

__version__ = "0.1.0"