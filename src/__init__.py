# src/__init__.py — v1
"""glucolens — LLM vision analysis of blood-glucose curve images."""

from glucolens.version import __version__

__all__ = ["__version__"]
