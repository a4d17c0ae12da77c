"""Google adapter package."""

from .client import GoogleAdapter

__all__ = ["GoogleAdapter"]
