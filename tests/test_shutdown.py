import os
import signal
import threading

import pytest

from balancekv.shutdown import wait_for_termination_signal


@pytest.mark.parametrize("sig", [signal.SIGTERM, signal.SIGINT])
def test_returns_received_signal(sig):
    timer = threading.Timer(0.2, os.kill, (os.getpid(), sig))
    timer.start()
    try:
        received = wait_for_termination_signal()
    finally:
        timer.cancel()
    assert received == sig


def test_restores_previous_handlers():
    before_term = signal.getsignal(signal.SIGTERM)
    before_int = signal.getsignal(signal.SIGINT)
    timer = threading.Timer(0.2, os.kill, (os.getpid(), signal.SIGTERM))
    timer.start()
    try:
        received = wait_for_termination_signal()
    finally:
        timer.cancel()
    assert received == signal.SIGTERM
    assert signal.getsignal(signal.SIGTERM) == before_term
    assert signal.getsignal(signal.SIGINT) == before_int