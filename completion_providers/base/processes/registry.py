"""Registry of running local model-runner processes.

Maps a request id to the child process serving it so that shutdown can
terminate whatever is still running. Thread-safe: the map is guarded by a
``threading.Lock`` because the registry may be touched from worker threads as
well as the event loop.
"""
from __future__ import annotations

import contextlib
from threading import Lock
from typing import Any, Dict, List, Optional


class ProcessRegistry:
    """Lock-guarded ``request_id -> process`` map."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._processes: Dict[str, Any] = {}

    def register(self, request_id: str, process: Any) -> None:
        with self._lock:
            self._processes[request_id] = process

    def unregister(self, request_id: str) -> Optional[Any]:
        """Remove and return the process for ``request_id`` (``None`` if absent)."""
        with self._lock:
            return self._processes.pop(request_id, None)

    def get(self, request_id: str) -> Optional[Any]:
        with self._lock:
            return self._processes.get(request_id)

    def active(self) -> List[str]:
        with self._lock:
            return list(self._processes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._processes)

    def terminate_all(self) -> int:
        """Kill every registered process that has not exited yet.

        Returns the number of processes signalled. Entries are removed from the
        registry regardless of whether the kill succeeded.
        """
        with self._lock:
            pending = list(self._processes.values())
            self._processes.clear()
        killed = 0
        for proc in pending:
            if getattr(proc, "returncode", None) is not None:
                continue
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
                killed += 1
        return killed

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"ProcessRegistry(active={len(self)})"


__all__ = ["ProcessRegistry"]
