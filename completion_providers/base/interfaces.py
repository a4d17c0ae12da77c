"""Adapter interface public surface.

Re-exports the single-class Protocol modules under
``completion_providers.base.interfaces_parts``.
"""

from .interfaces_parts.completion_adapter import CompletionAdapter
from .interfaces_parts.supports_embeddings import SupportsEmbeddings

__all__ = ["CompletionAdapter", "SupportsEmbeddings"]
