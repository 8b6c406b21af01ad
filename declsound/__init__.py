"""Declarative sound behaviours: YAML node graphs, tag and value matching, and leaf building."""

__version__ = "0.1.0"