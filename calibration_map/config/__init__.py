"""
Configuration package for settings loading and validation.
"""

from .settings import Settings

__all__ = ['Settings']
