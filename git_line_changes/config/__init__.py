"""
Configuration package for git-line-changes.
"""

from .settings import Settings

__all__ = ["Settings"]
