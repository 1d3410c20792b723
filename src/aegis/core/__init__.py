"""Session orchestration."""

from aegis.core.session import LearningSession, SessionCallbacks, TickResult

__all__ = ["LearningSession", "SessionCallbacks", "TickResult"]
