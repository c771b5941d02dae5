"""learnkit - Resilient structured content for a learning roadmap client.

Architecture:
- models/: Enums, Pydantic schemas, session state
- extraction/: Generated text to validated structures, with fallbacks
- engine/: Request lifecycle, QuizEngine, WorkflowEngine, LearningAssistant
- llm/: BackendClient (httpx)
- prompts/: Prompt templates and fallback content
"""

from .config import ClientConfig, get_config, reset_config
from .engine import (
    LearningAssistant,
    QuizEngine,
    QuizScoringEngine,
    RequestLifecycleController,
    WorkflowEngine,
)
from .exceptions import BackendError, LearnkitError
from .extraction import extract, extract_payload
from .llm import BackendClient
from .logger import configure_logging, get_logger
from .models import QuizPhase, QuizQuestion, RequestPhase, StageDetail, WorkflowStage

__version__ = "0.1.0"

__all__ = [
    # Config
    "ClientConfig",
    "get_config",
    "reset_config",
    # Logging
    "configure_logging",
    "get_logger",
    # Models
    "QuizPhase",
    "RequestPhase",
    "QuizQuestion",
    "WorkflowStage",
    "StageDetail",
    # Extraction
    "extract",
    "extract_payload",
    # Engines
    "RequestLifecycleController",
    "QuizScoringEngine",
    "QuizEngine",
    "WorkflowEngine",
    "LearningAssistant",
    # LLM
    "BackendClient",
    # Errors
    "LearnkitError",
    "BackendError",
]
