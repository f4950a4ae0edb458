"""Finiquito Calc command-line interface."""
