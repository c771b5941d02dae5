"""learnkit Prompts - Templates and fallback content."""

from .templates import (
    CHAT_FALLBACK_REPLY,
    CHAT_GREETING,
    FEEDBACK_CORRECT,
    FEEDBACK_INCORRECT,
    QUIZ_CONTEXT_TEMPLATE,
    QUIZ_GENERATION_PROMPT,
    QUIZ_QUESTION_COUNT,
    QUIZ_REQUEST_ROLE,
    TASK_GUIDE_PROMPT,
    TASK_GUIDE_ROLE,
    WORKFLOW_EMPTY,
    WORKFLOW_PAYLOAD_UNUSABLE,
    WORKFLOW_REGENERATION_FAILED,
    quiz_fallback,
    stage_detail_unavailable,
    task_guide_fallback,
)

__all__ = [
    "QUIZ_GENERATION_PROMPT",
    "QUIZ_CONTEXT_TEMPLATE",
    "QUIZ_QUESTION_COUNT",
    "QUIZ_REQUEST_ROLE",
    "FEEDBACK_CORRECT",
    "FEEDBACK_INCORRECT",
    "WORKFLOW_REGENERATION_FAILED",
    "WORKFLOW_PAYLOAD_UNUSABLE",
    "WORKFLOW_EMPTY",
    "CHAT_FALLBACK_REPLY",
    "CHAT_GREETING",
    "TASK_GUIDE_PROMPT",
    "TASK_GUIDE_ROLE",
    "quiz_fallback",
    "stage_detail_unavailable",
    "task_guide_fallback",
]
