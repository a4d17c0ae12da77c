"""Local process ("direct") adapter.

Runs a model-runner program as a child process for each request:

1. ``<models_dir>/<model>`` must exist, otherwise the request fails before
   anything is written.
2. The rendered prompt is written to ``prompt-<uuid>.txt`` in the temp dir.
3. The runner is spawned as::

       <runner...> --model <path> --prompt <prompt file> --output <output file>
                   --temperature <t> --max_tokens <n>

4. The exit is awaited under ``process_timeout_seconds``; a zero exit with an
   output file yields the completion text.

Both temp files are removed on every exit path. The child is registered in a
:class:`ProcessRegistry` under the request id while it runs; a cancelled or
timed-out request kills it. The runner reports no token usage, so usage is
always zero.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import shlex
import sys
import tempfile
import uuid
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..base.adapter import BaseAdapter
from ..base.backends import Backend
from ..base.errors import ConfigurationError, ErrorCode, LocalProcessError
from ..base.logging import LogContext, log_event
from ..base.models import CompletionRequest, CompletionResponse, TokenUsage
from ..base.processes import ProcessRegistry
from ..base.timeouts import get_timeout_config
from ..base.utils.messages import render_transcript
from ..base.utils.params import pick
from ..config.defaults import LOCAL_DEFAULT_RUNNER_SCRIPT
from ..config.provider_config import ProviderConfig

# Characters of runner stderr kept in error messages.
_STDERR_TAIL = 500


def _unlink_quietly(path: Path) -> None:
    with contextlib.suppress(FileNotFoundError):
        path.unlink()


class DirectProcessAdapter(BaseAdapter):
    """Adapter that shells out to a local model runner."""

    BACKEND = Backend.DIRECT

    def __init__(
        self,
        registry: Optional[ProcessRegistry] = None,
        temp_dir: "str | os.PathLike[str] | None" = None,
        **kwargs: Any,
    ) -> None:
        """
        Args:
            registry: Shared process registry; a private one is created when
                omitted.
            temp_dir: Directory for prompt/output files (defaults to the
                system temp dir).
        """
        super().__init__(**kwargs)
        self.registry = registry if registry is not None else ProcessRegistry()
        self._temp_dir = Path(temp_dir) if temp_dir is not None else None

    @property
    def temp_dir(self) -> Path:
        return self._temp_dir if self._temp_dir is not None else Path(tempfile.gettempdir())

    def runner_command(self, config: ProviderConfig) -> List[str]:
        configured: "str | Sequence[str] | None" = config.extra.get("runner_command")
        if isinstance(configured, str):
            configured = shlex.split(configured)
        if configured:
            return [str(part) for part in configured]
        return [sys.executable, os.path.join(config.base_url or "", LOCAL_DEFAULT_RUNNER_SCRIPT)]

    def build_argv(
        self,
        request: CompletionRequest,
        config: ProviderConfig,
        model_path: Path,
        prompt_path: Path,
        output_path: Path,
    ) -> List[str]:
        return [
            *self.runner_command(config),
            "--model", str(model_path),
            "--prompt", str(prompt_path),
            "--output", str(output_path),
            "--temperature", str(pick(request.temperature, config.temperature)),
            "--max_tokens", str(pick(request.max_tokens, config.max_tokens)),
        ]

    async def _invoke(self, request: CompletionRequest, config: ProviderConfig, ctx: LogContext) -> CompletionResponse:
        if not config.base_url:
            raise ConfigurationError(
                message="Local models directory not configured",
                provider=self.BACKEND.value,
                model=config.model,
            )
        prompt = render_transcript(request, provider=self.BACKEND.value)
        model_path = Path(config.base_url) / config.model
        if not model_path.exists():
            raise LocalProcessError(
                message=f"Model not found at {model_path}",
                provider=self.BACKEND.value,
                model=config.model,
            )

        request_id = ctx.request_id or uuid.uuid4().hex
        prompt_path = self.temp_dir / f"prompt-{request_id}.txt"
        output_path = self.temp_dir / f"output-{request_id}.txt"
        try:
            prompt_path.write_text(prompt, encoding="utf-8")
            argv = self.build_argv(request, config, model_path, prompt_path, output_path)
            text = await self._run(argv, request_id, output_path, config, ctx)
        finally:
            _unlink_quietly(prompt_path)
            _unlink_quietly(output_path)

        return CompletionResponse(
            text=text,
            provider=self.BACKEND.value,
            model=config.model,
            usage=TokenUsage(),
            finish_reason="stop",
        )

    async def _run(
        self,
        argv: List[str],
        request_id: str,
        output_path: Path,
        config: ProviderConfig,
        ctx: LogContext,
    ) -> str:
        try:
            proc = await asyncio.create_subprocess_exec(  # nosec B603 - argv list, shell=False
                *argv,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise LocalProcessError(
                message=f"Failed to start local model runner: {exc}",
                provider=self.BACKEND.value,
                model=config.model,
                raw=exc,
            ) from exc

        self.registry.register(request_id, proc)
        log_event(self._logger, "process.spawn", ctx, pid=proc.pid)
        timeout = get_timeout_config().process_timeout_seconds
        try:
            _stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError as exc:
            await self._kill(proc)
            raise LocalProcessError(
                message=f"Local model runner timed out after {timeout:g}s",
                provider=self.BACKEND.value,
                code=ErrorCode.TIMEOUT,
                model=config.model,
                raw=exc,
            ) from exc
        except asyncio.CancelledError:
            await self._kill(proc)
            raise
        finally:
            self.registry.unregister(request_id)

        log_event(self._logger, "process.exit", ctx, pid=proc.pid, exit_code=proc.returncode)
        if proc.returncode != 0:
            detail = (stderr or b"").decode("utf-8", errors="replace").strip()[-_STDERR_TAIL:]
            message = f"Process exited with code {proc.returncode}"
            raise LocalProcessError(
                message=f"{message}: {detail}" if detail else message,
                provider=self.BACKEND.value,
                model=config.model,
                exit_code=proc.returncode,
            )
        if not output_path.exists():
            raise LocalProcessError(
                message="Output file not found",
                provider=self.BACKEND.value,
                model=config.model,
                exit_code=proc.returncode,
            )
        # Undecodable bytes become U+FFFD, as with stderr above.
        return output_path.read_text(encoding="utf-8", errors="replace")

    async def _kill(self, proc: Any) -> None:
        if proc.returncode is not None:
            return
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        log_event(self._logger, "process.killed", None, level=logging.WARNING, pid=proc.pid)


__all__ = ["DirectProcessAdapter"]
