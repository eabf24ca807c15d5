"""Blocking until the process is asked to terminate."""

from __future__ import annotations

import logging
import signal
import threading

_log = logging.getLogger(__name__)


def wait_for_termination_signal() -> signal.Signals:
    """Block until SIGINT or SIGTERM arrives and return it. Main thread only."""
    received: list[int] = []
    event = threading.Event()

    def _on_signal(signum: int, _frame: object) -> None:
        received.append(signum)
        event.set()

    sigs = (signal.SIGINT, signal.SIGTERM)
    previous = [signal.signal(sig, _on_signal) for sig in sigs]
    try:
        while not event.wait(0.1):
            pass
    finally:
        for sig, handler in zip(sigs, previous):
            signal.signal(sig, handler)
    _log.info("Shutting down...")
    return signal.Signals(received[0])