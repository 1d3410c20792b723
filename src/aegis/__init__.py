"""Aegis - learning condition estimation and pedagogical intervention policy."""

__version__ = "0.1.0"
