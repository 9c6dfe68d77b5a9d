"""Salary-capped lineup optimizer for position-differential driver scoring."""

__version__ = "0.1.0"
