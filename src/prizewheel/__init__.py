"""Prize wheel reward distribution engine."""

__version__ = "0.1.0"
