"""Enums - Quiz phases and request lifecycle phases."""

from enum import Enum


class QuizPhase(str, Enum):
    """Phases of an interactive quiz session."""

    IDLE = "idle"
    LOADING = "loading"  # Waiting for generated questions
    ANSWERING = "answering"
    FEEDBACK = "feedback"  # Answer shown, timed advance pending
    FINISHED = "finished"


class RequestPhase(str, Enum):
    """Phases of a single logical request session."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


class RequestOutcomeStatus(str, Enum):
    """What happened to a completed request."""

    APPLIED = "applied"  # Token still current, result applied
    STALE = "stale"  # Superseded or cancelled, result dropped
    FAILED = "failed"  # Transport error while current
