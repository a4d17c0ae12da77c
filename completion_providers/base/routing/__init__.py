"""Routing package."""

from .router import CompletionRouter

__all__ = ["CompletionRouter"]
