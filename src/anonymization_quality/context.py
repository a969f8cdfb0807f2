"""
Cooperative cancellation and progress reporting.

A ComputationContext is owned by the caller and handed to compute_quality. The
engine only reads the cancellation flag and only ever raises the progress value.
"""

import threading
from typing import Callable, Optional


class ComputationInterruptedError(RuntimeError):
    """Raised when the caller requested cancellation of a running computation."""


class ComputationContext:
    """
    Cancellation flag and progress counter shared between a caller and the engine.

    The flag may be set from another thread, e.g. by a user interface that runs the
    computation in the background. Progress is monotonically non-decreasing over
    one computation.

    Parameters
    ----------
    progress_callback : Callable[[int], None], optional
        Called with the new value whenever progress advances, by default None
    """

    def __init__(self, progress_callback: Optional[Callable[[int], None]] = None) -> None:
        self._cancelled = threading.Event()
        self._progress = 0
        self._progress_callback = progress_callback

    @property
    def progress(self) -> int:
        return self._progress

    def cancel(self) -> None:
        """Request cancellation; observed at the next poll."""
        self._cancelled.set()

    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def report(self, percent: int) -> None:
        """
        Advance the progress counter.

        Parameters
        ----------
        percent : int
            New progress value in [0, 100]. Values below the current progress are ignored.

        Raises
        ------
        ValueError
            If percent is outside of [0, 100]
        """
        if not 0 <= percent <= 100:
            raise ValueError(f"progress must be in [0, 100], got {percent}")
        if percent > self._progress:
            self._progress = percent
            if self._progress_callback is not None:
                self._progress_callback(percent)

    def check_interrupt(self) -> None:
        """
        Raise if cancellation was requested.

        Raises
        ------
        ComputationInterruptedError
            If cancel() has been called
        """
        if self._cancelled.is_set():
            raise ComputationInterruptedError("Interrupted")
