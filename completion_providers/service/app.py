"""FastAPI application exposing the completion router.

Endpoints:
    POST /completion              -> completion (400 when neither prompt nor messages)
    POST /embedding               -> {"embedding": [...]}
    GET  /providers               -> configured backends and the default
    GET  /providers/{id}/models   -> model family of a backend with capabilities
    GET  /health                  -> liveness

Any error surfaced by the router or embedding service becomes a 500 with
``{"error": message}``; request validation failures become a 400 in the same
shape.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..base.backends import Backend
from ..base.errors import ProviderError
from ..base.logging import get_logger, log_event
from ..base.utils.messages import MISSING_CONTENT_ERROR
from ..di import ProvidersContainer
from .app_parts.schemas import CompletionBody, EmbeddingBody

logger = get_logger("providers.service")


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def create_app(container: Optional[ProvidersContainer] = None) -> FastAPI:
    """Build the FastAPI app around ``container`` (environment-backed when omitted)."""
    container = container or ProvidersContainer()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        yield
        await container.shutdown()

    app = FastAPI(title="Completion Provider Service", version="0.1.0", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        first = errors[0] if errors else {}
        where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "Invalid request")
        return _error(400, f"{where}: {message}" if where else message)

    @app.exception_handler(ProviderError)
    async def _provider_error(_request: Request, exc: ProviderError) -> JSONResponse:
        log_event(
            logger,
            "service.error",
            level=logging.ERROR,
            provider=exc.provider,
            error_code=exc.code.value,
            error=exc.message,
        )
        return _error(500, exc.message)

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"ok": True}

    @app.post("/completion")
    async def completion(body: CompletionBody) -> Any:
        if not body.prompt and not body.messages:
            return _error(400, MISSING_CONTENT_ERROR)
        result = await container.router().complete(body.to_request(), backend=body.provider)
        return result.to_dict()

    @app.post("/embedding")
    async def embedding(body: EmbeddingBody) -> Dict[str, Any]:
        vector = await container.embeddings().embed(body.text, backend=body.provider)
        return {"embedding": vector}

    @app.get("/providers")
    def providers() -> Dict[str, Any]:
        store = container.store()
        return {
            "providers": [b.value for b in store.configured()],
            "default": store.default.value if store.default else None,
            "fallbackEnabled": store.fallback_enabled,
        }

    @app.get("/providers/{provider_id}/models")
    def provider_models(provider_id: str) -> Any:
        backend = Backend.parse(provider_id)
        if backend is None:
            return _error(404, f"Unknown provider: {provider_id}")
        return {"provider": backend.value, "models": container.catalog().models_for(backend)}

    return app


__all__ = ["create_app"]
