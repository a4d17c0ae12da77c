from __future__ import annotations

import threading

from completion_providers.base.processes import ProcessRegistry


class _Proc:
    def __init__(self, returncode=None) -> None:
        self.returncode = returncode
        self.killed = False

    def kill(self) -> None:
        self.killed = True


def test_register_and_unregister():
    registry = ProcessRegistry()
    proc = _Proc()
    registry.register("r1", proc)
    assert registry.get("r1") is proc and len(registry) == 1  # nosec B101
    assert registry.unregister("r1") is proc  # nosec B101
    assert registry.unregister("r1") is None and registry.active() == []  # nosec B101


def test_terminate_all_kills_running_only():
    registry = ProcessRegistry()
    running, finished = _Proc(), _Proc(returncode=0)
    registry.register("a", running)
    registry.register("b", finished)
    assert registry.terminate_all() == 1  # nosec B101
    assert running.killed and not finished.killed  # nosec B101
    assert len(registry) == 0  # nosec B101


def test_concurrent_registration():
    registry = ProcessRegistry()

    def _work(start: int) -> None:
        for i in range(start, start + 100):
            registry.register(str(i), _Proc())
            registry.unregister(str(i))

    threads = [threading.Thread(target=_work, args=(n * 100,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(registry) == 0  # nosec B101
