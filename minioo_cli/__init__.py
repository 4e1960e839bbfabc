"""Command line front-end for the minioo object runtime."""

from .main import main

__all__ = ["main"]
