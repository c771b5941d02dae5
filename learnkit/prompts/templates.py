"""Templates - Prompts and static fallback content."""

from ..models.schemas import QuizQuestion, StageDetail, TaskGuide

# =============================================================================
# QUIZ
# =============================================================================

QUIZ_QUESTION_COUNT = 3

QUIZ_GENERATION_PROMPT = """Generate {num_questions} multiple choice quiz questions for the topic "{phase_name}".
Return strictly valid JSON array of objects with keys: id (number), question (string), options (array of 4 strings), correctAnswer (index number 0-3), explanation (string)."""

QUIZ_CONTEXT_TEMPLATE = "Role: {role}, Topics: {topics}"

# Role sent with quiz generation requests; the backend treats it as the system voice
QUIZ_REQUEST_ROLE = "system"


def quiz_fallback(phase_name: str) -> list[QuizQuestion]:
    """Placeholder questions used when generated content cannot be validated.

    Args:
        phase_name: Roadmap phase the quiz was opened for

    Returns:
        Two always-valid questions
    """
    return [
        QuizQuestion(
            id=1,
            question=f"What is a core concept of {phase_name}?",
            options=["Concept A", "Concept B", "Concept C", "Concept D"],
            correct_answer=0,
            explanation="Concept A is fundamental.",
        ),
        QuizQuestion(
            id=2,
            question="Which tool is commonly used in this phase?",
            options=["Tool X", "Tool Y", "Tool Z", "None"],
            correct_answer=1,
            explanation="Tool Y is standard.",
        ),
    ]


FEEDBACK_CORRECT = "Correct! 🎉"
FEEDBACK_INCORRECT = "Incorrect. The right answer was: {correct_option}"

# =============================================================================
# WORKFLOW
# =============================================================================


def stage_detail_unavailable() -> StageDetail:
    """Explicit "unavailable" detail, a fresh object for every view."""
    return StageDetail(available=False)


WORKFLOW_REGENERATION_FAILED = "We couldn't regenerate the workflow. Your current workflow is unchanged."
WORKFLOW_PAYLOAD_UNUSABLE = "The regenerated workflow could not be read. Your current workflow is unchanged."
WORKFLOW_EMPTY = "The regenerated workflow has no stages. Your current workflow is unchanged."

# =============================================================================
# LEARNING ASSISTANT
# =============================================================================

CHAT_FALLBACK_REPLY = "I'm having trouble connecting right now. Please try again."

CHAT_GREETING = 'Hi! I see you have a question about: "{context}".\n\nHow can I help you understand this better?'

TASK_GUIDE_PROMPT = """Generate a detailed step-by-step guide for the task: "{task}".
Format exactly as JSON:
{{
  "title": "Task Title",
  "overview": "Brief overview...",
  "steps": [
    {{ "title": "...", "description": "...", "code": "...or null" }}
  ],
  "tips": ["..."],
  "troubleshooting": ["..."]
}}"""

TASK_GUIDE_ROLE = "Software Engineer"


def task_guide_fallback(task: str) -> TaskGuide:
    """Guide returned when a generated guide cannot be used."""
    return TaskGuide(
        title=task,
        overview=(
            "We couldn't generate a guide dynamically. "
            "Please try again or ask the AI in the sidebar."
        ),
        generated=False,
    )
