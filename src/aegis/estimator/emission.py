"""Emission scheduling - pull-based rate limiting of condition states."""


class EmissionScheduler:
    """Decides whether a new state may be emitted at a caller-supplied time.

    Owns no timer. Calling less often than the interval only degrades
    responsiveness; it never errors.
    """

    def __init__(self, interval_s: float):
        self.interval_s = interval_s
        self._last_emit: float | None = None

    def ready(self, now: float) -> bool:
        """True if at least interval_s has elapsed since the last emission."""
        if self._last_emit is None:
            return True
        return now - self._last_emit >= self.interval_s

    def try_emit(self, now: float) -> bool:
        """Claim an emission slot at `now` if one is available."""
        if not self.ready(now):
            return False
        self._last_emit = now
        return True

    @property
    def last_emit(self) -> float | None:
        return self._last_emit

    def reset(self) -> None:
        self._last_emit = None
