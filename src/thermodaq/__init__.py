"""thermodaq - single-sensor temperature acquisition unit."""

__version__ = "0.1.0"
