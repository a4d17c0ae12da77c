"""CompletionAdapter Protocol (single-class module).

Defines the one-operation contract every backend adapter implements.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..backends import Backend
from ..models import CompletionRequest, CompletionResponse

if TYPE_CHECKING:  # pragma: no cover
    from ...config.provider_config import ProviderConfig


@runtime_checkable
class CompletionAdapter(Protocol):
    """Minimal interface for text-generation backend adapters.

    Implementations map ``CompletionRequest`` fields onto their wire format,
    perform the call, and normalize the reply into ``CompletionResponse``.
    Failures are raised as ``ProviderError`` subclasses so the router can
    decide whether to fall back.
    """

    @property
    def backend(self) -> Backend:
        """Backend identifier served by this adapter."""
        ...

    async def complete(self, request: CompletionRequest, config: "ProviderConfig") -> CompletionResponse:
        """Execute a single completion request against the backend."""
        ...
