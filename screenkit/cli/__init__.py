"""Screenkit CLI — render and inspect screen documents."""

__version__ = "0.1.0"
