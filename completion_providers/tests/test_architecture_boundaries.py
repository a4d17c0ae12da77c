"""Import boundary guardrails.

Static scans (no imports executed) asserting that the backend-agnostic layers
never import a vendor SDK, a concrete adapter package or the HTTP service:

- ``completion_providers/base`` and ``completion_providers/config`` are the
  inner layers; adapters are reached only through ``AdapterFactory``'s lazy
  import paths.
- ``embedding`` and ``di`` may use the factory but not adapter modules
  directly (the container is the only place adapters are wired).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

PACKAGE_ROOT = Path(__file__).resolve().parents[1]

_FORBIDDEN = (
    "openai",
    "anthropic",
    "google",
    "fastapi",
    "uvicorn",
    "completion_providers.openai",
    "completion_providers.anthropic",
    "completion_providers.google",
    "completion_providers.cohere",
    "completion_providers.lmstudio",
    "completion_providers.ollama",
    "completion_providers.direct",
    "completion_providers.service",
)

_RELATIVE_FORBIDDEN = ("openai", "anthropic", "google", "cohere", "lmstudio", "ollama", "direct", "service")

_IMPORT_RE = re.compile(r"^\s*(?:from\s+(?P<from>[\w.]+)\s+import|import\s+(?P<imp>[\w.]+))", re.MULTILINE)


def _iter_python_files(root: Path) -> Iterable[Path]:
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _violations(root: Path) -> List[str]:
    found: List[str] = []
    for path in _iter_python_files(root):
        text = path.read_text(encoding="utf-8")
        for match in _IMPORT_RE.finditer(text):
            target = match.group("from") or match.group("imp")
            if target.startswith("."):
                head = target.lstrip(".").split(".", 1)[0]
                bad = head in _RELATIVE_FORBIDDEN and target.startswith("..")
            else:
                bad = any(target == f or target.startswith(f + ".") for f in _FORBIDDEN)
            if bad:
                found.append(f"{path.relative_to(PACKAGE_ROOT)}: {target}")
    return found


def test_inner_layers_are_backend_agnostic():
    problems = _violations(PACKAGE_ROOT / "base") + _violations(PACKAGE_ROOT / "config")
    assert not problems, "Backend-specific imports in inner layers:\n" + "\n".join(problems)  # nosec B101


def test_services_reach_adapters_through_factory():
    problems = _violations(PACKAGE_ROOT / "embedding") + _violations(PACKAGE_ROOT / "di")
    assert not problems, "Direct adapter imports outside the factory:\n" + "\n".join(problems)  # nosec B101
