"""Cooperative cancellation for long-running computations."""

import threading
import time
from typing import Optional

from ..core.models import CentralityStatus


class CancellationToken:
    """Cancel flag with an optional wall-clock deadline.

    The token is safe to share between the thread running a computation and
    the thread that wants to abandon it. Computations poll :meth:`check`
    between units of work.

    Example:
        >>> token = CancellationToken(deadline_seconds=30.0)
        >>> result = calculate_betweenness_centrality(network, token=token)
    """

    def __init__(self, deadline_seconds: Optional[float] = None) -> None:
        if deadline_seconds is not None and deadline_seconds <= 0:
            raise ValueError(f"deadline_seconds must be positive, got {deadline_seconds}")
        self._event = threading.Event()
        self._deadline = time.monotonic() + deadline_seconds if deadline_seconds is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self) -> Optional[CentralityStatus]:
        """Return why work should stop, or ``None`` to keep going."""
        if self.cancelled:
            return CentralityStatus.CANCELLED
        if self.expired:
            return CentralityStatus.TIMED_OUT
        return None
