"""Shared HTTP client pool."""

from .client import build_timeout, close_all_clients, get_async_client, post_json

__all__ = ["get_async_client", "close_all_clients", "build_timeout", "post_json"]
