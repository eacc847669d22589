"""Foxie - student productivity backend."""

__version__ = "1.0.0"
