"""Shared data models."""

from .driver import DriverRecord

__all__ = ["DriverRecord"]
