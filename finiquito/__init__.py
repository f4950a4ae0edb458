"""Finiquito Calc - Mexican severance settlement calculator."""

__version__ = "0.3.0"
