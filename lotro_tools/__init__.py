"""LOTRO Tools - stat derivation calculator and item comparison."""

__version__ = "0.1.0"
