"""First-error latch shared by concurrent workers."""

from threading import Event, Lock
from typing import Optional


class FirstErrorLatch:
    """Thread-safe latch that keeps only the first error it is given."""

    def __init__(self) -> None:
        """Initialize an unset latch."""
        self._lock = Lock()
        self._event = Event()
        self._error: Optional[BaseException] = None

    def set(self, error: BaseException) -> bool:
        """Record an error if none has been recorded yet.

        Args:
            error: Exception raised by a worker

        Returns:
            True if this call tripped the latch, False if it was already set
        """
        with self._lock:
            if self._error is not None:
                return False
            self._error = error
            self._event.set()
            return True

    def is_set(self) -> bool:
        """Check whether an error has been recorded."""
        return self._event.is_set()

    def raise_if_set(self) -> None:
        """Re-raise the recorded error."""
        if self._error is not None:
            raise self._error
