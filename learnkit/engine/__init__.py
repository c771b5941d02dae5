"""learnkit Engines - Session logic for quizzes, workflows and chat."""

from .assistant import ChatMessage, LearningAssistant
from .lifecycle import RequestLifecycleController, RequestOutcome
from .quiz_engine import QuizEngine
from .scoring_engine import QuizScoringEngine
from .workflow_engine import WorkflowEngine

__all__ = [
    "RequestLifecycleController",
    "RequestOutcome",
    "QuizScoringEngine",
    "QuizEngine",
    "WorkflowEngine",
    "LearningAssistant",
    "ChatMessage",
]
