"""Local process bookkeeping."""

from .registry import ProcessRegistry

__all__ = ["ProcessRegistry"]
