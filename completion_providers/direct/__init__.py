"""Local process adapter package."""

from .client import DirectProcessAdapter

__all__ = ["DirectProcessAdapter"]
