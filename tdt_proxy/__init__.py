"""Tianditu search proxy: forwards browser search queries to the Tianditu API."""

__version__ = "0.1.0"
