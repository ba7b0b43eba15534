"""
Start, status and end handling plus the shutdown signal.

The supervisor creates a ShutdownSignal and waits on it; the controller only
ever fires it, and fires it at most once however many end requests arrive.
"""

import threading
from typing import Optional

from ..models.models import AgentPhase
from ..utils.logger_config import get_logger

logger = get_logger("lifecycle")


class ShutdownSignal:
    """One-shot, thread-safe shutdown notification"""

    def __init__(self):
        self._event = threading.Event()
        self._lock = threading.Lock()

    def fire(self) -> bool:
        """
        Request shutdown.

        Returns:
            True for the call that fired the signal, False for every later one
        """
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the signal fires; returns whether it did"""
        return self._event.wait(timeout)

    @property
    def fired(self) -> bool:
        return self._event.is_set()


class LifecycleController:
    """Tracks the agent phase and turns end requests into a shutdown signal"""

    def __init__(self, signal: ShutdownSignal):
        self.signal = signal
        self._phase = AgentPhase.CREATED
        self._lock = threading.Lock()

    @property
    def phase(self) -> AgentPhase:
        with self._lock:
            return self._phase

    def touch(self) -> None:
        """Record that a request was received"""
        with self._lock:
            if self._phase == AgentPhase.CREATED:
                self._phase = AgentPhase.READY

    def start(self) -> None:
        logger.info("Start notification received")

    def status(self) -> None:
        pass

    def end(self) -> None:
        with self._lock:
            self._phase = AgentPhase.SHUTTING_DOWN

        if self.signal.fire():
            logger.info("End received, shutdown requested")
        else:
            logger.info("End received again, shutdown already requested")
