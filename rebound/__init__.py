"""Rebound: concussion-recovery companion backend."""

__version__ = "0.1.0"
