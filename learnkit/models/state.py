"""State - Session scoped state owned by a single quiz or workflow view."""

from dataclasses import dataclass, field
from typing import Any

from .enums import QuizPhase, RequestPhase
from .schemas import QuizQuestion, StageDetail, WorkflowStage


@dataclass
class RequestState:
    """Lifecycle of one logical request session.

    Attributes:
        phase: Current phase (idle, pending, success, error)
        token: Identifier of the current request; bumps on every issue/cancel
        error: Reason of the last failure, if phase is ERROR
    """

    phase: RequestPhase = RequestPhase.IDLE
    token: int = 0
    error: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.phase == RequestPhase.PENDING

    def to_dict(self) -> dict[str, Any]:
        return {"phase": self.phase.value, "token": self.token, "error": self.error}


@dataclass
class QuizSession:
    """State of an open quiz.

    Attributes:
        questions: Validated questions (never malformed)
        current_index: Index of the question being shown
        score: Number of correct answers so far
        selected_answer: Option chosen for the current question, if any
        phase: Current quiz phase
        feedback: Feedback text shown for the current answer
        request: Lifecycle of the quiz generation request
    """

    questions: list[QuizQuestion] = field(default_factory=list)
    current_index: int = 0
    score: int = 0
    selected_answer: int | None = None
    phase: QuizPhase = QuizPhase.IDLE
    feedback: str | None = None
    request: RequestState = field(default_factory=RequestState)

    @property
    def current_question(self) -> QuizQuestion | None:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    def start(self, questions: list[QuizQuestion]) -> None:
        """Begin answering a freshly loaded question list."""
        self.questions = list(questions)
        self.current_index = 0
        self.score = 0
        self.selected_answer = None
        self.feedback = None
        self.phase = QuizPhase.ANSWERING

    def reset(self) -> None:
        """Discard everything and return to IDLE."""
        self.questions = []
        self.current_index = 0
        self.score = 0
        self.selected_answer = None
        self.feedback = None
        self.phase = QuizPhase.IDLE

    def to_dict(self) -> dict[str, Any]:
        return {
            "questions": [q.model_dump(by_alias=True) for q in self.questions],
            "current_index": self.current_index,
            "score": self.score,
            "selected_answer": self.selected_answer,
            "phase": self.phase.value,
            "feedback": self.feedback,
            "request": self.request.to_dict(),
        }


@dataclass
class WorkflowState:
    """State of a workflow view.

    Attributes:
        stages: Ordered stages; empty renders as "unavailable"
        display_role_label: Role shown in the header and sent to the backend
        active_stage: Name of the most recently selected stage
        active_stage_detail: Detail of the selected stage, None while loading
        workflow_request: Lifecycle of the regeneration request
        detail_request: Lifecycle of the stage detail request
        last_error: User visible message of the last failed regeneration
    """

    stages: list[WorkflowStage] = field(default_factory=list)
    display_role_label: str = ""
    active_stage: str | None = None
    active_stage_detail: StageDetail | None = None
    workflow_request: RequestState = field(default_factory=RequestState)
    detail_request: RequestState = field(default_factory=RequestState)
    last_error: str | None = None

    @property
    def is_available(self) -> bool:
        return bool(self.stages)

    def replace_stages(self, stages: list[WorkflowStage], role_label: str | None = None) -> None:
        """Swap the whole stage list (never patched in place)."""
        self.stages = list(stages)
        if role_label:
            self.display_role_label = role_label
        self.last_error = None

    def clear_detail(self) -> None:
        self.active_stage = None
        self.active_stage_detail = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "stages": [s.model_dump() for s in self.stages],
            "display_role_label": self.display_role_label,
            "active_stage": self.active_stage,
            "active_stage_detail": (
                self.active_stage_detail.model_dump() if self.active_stage_detail else None
            ),
            "workflow_request": self.workflow_request.to_dict(),
            "detail_request": self.detail_request.to_dict(),
            "last_error": self.last_error,
        }
