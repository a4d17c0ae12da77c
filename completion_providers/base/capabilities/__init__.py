"""Capabilities package.

Exports the capability tags, the static model catalog and best-match selection.
"""

from .catalog import BACKEND_MODELS, MODEL_CAPABILITIES, Capability, CapabilityCatalog

__all__ = [
    "Capability",
    "CapabilityCatalog",
    "MODEL_CAPABILITIES",
    "BACKEND_MODELS",
]
