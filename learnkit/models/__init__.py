"""learnkit Models - Enums, Schemas and State."""

from .enums import QuizPhase, RequestOutcomeStatus, RequestPhase
from .schemas import (
    AnswerFeedback,
    CodeSnippet,
    GuideStep,
    QuizQuestion,
    QuizResult,
    StageDetail,
    TaskGuide,
    WorkflowPayload,
    WorkflowStage,
)
from .state import QuizSession, RequestState, WorkflowState

__all__ = [
    # Enums
    "QuizPhase",
    "RequestPhase",
    "RequestOutcomeStatus",
    # Schemas
    "QuizQuestion",
    "WorkflowStage",
    "WorkflowPayload",
    "CodeSnippet",
    "StageDetail",
    "GuideStep",
    "TaskGuide",
    "AnswerFeedback",
    "QuizResult",
    # State
    "RequestState",
    "QuizSession",
    "WorkflowState",
]
