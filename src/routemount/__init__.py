"""Compose a host application's route tree from workspace packages."""

__version__ = "0.1.0"
