"""Interface parts (one Protocol per file)."""

from .completion_adapter import CompletionAdapter
from .supports_embeddings import SupportsEmbeddings

__all__ = ["CompletionAdapter", "SupportsEmbeddings"]
