"""Expo eject/publish automation for CI pipelines."""

__version__ = "0.3.0"
