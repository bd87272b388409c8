"""Command line interface for SkinWatch."""

from .main import main

__all__ = ['main']
