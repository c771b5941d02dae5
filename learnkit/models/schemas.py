"""Schemas - Pydantic models for generated content and backend payloads."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

QUIZ_OPTION_COUNT = 4


class QuizQuestion(BaseModel):
    """Multiple choice question with exactly four options."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int = Field(..., description="Question number")
    question: str = Field(..., min_length=1, description="Question text")
    options: list[str] = Field(
        ...,
        min_length=QUIZ_OPTION_COUNT,
        max_length=QUIZ_OPTION_COUNT,
        description="The 4 answer options",
    )
    correct_answer: int = Field(
        ...,
        alias="correctAnswer",
        ge=0,
        le=QUIZ_OPTION_COUNT - 1,
        description="Index of the correct option (0-3)",
    )
    explanation: str = Field(default="", description="Why the correct option is right")

    @field_validator("options")
    @classmethod
    def _options_are_text(cls, value: list[str]) -> list[str]:
        if any(not option.strip() for option in value):
            raise ValueError("options must not be blank")
        return value

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer]


class WorkflowStage(BaseModel):
    """One stage of a role workflow."""

    model_config = ConfigDict(frozen=True)

    stage: str = Field(..., min_length=1, description="Stage name, e.g. 'Design'")
    description: str = Field(default="", description="What happens in this stage")
    tools_used: list[str] = Field(default_factory=list, description="Tools, no duplicates")
    activities: list[str] = Field(default_factory=list, description="Key activities in order")

    @field_validator("tools_used", "activities", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("tools_used")
    @classmethod
    def _dedupe_tools(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(tool for tool in value if tool.strip()))


class CodeSnippet(BaseModel):
    """Example code attached to a stage detail."""

    language: str = Field(default="text")
    code: str = Field(default="")


class StageDetail(BaseModel):
    """Supplementary detail for one workflow stage.

    Every field tolerates absence. ``available=False`` marks the explicit
    "unavailable" fallback, which is not the same thing as an empty detail.
    """

    code_snippet: CodeSnippet | None = None
    best_practices: list[str] = Field(default_factory=list)
    checklist: list[str] = Field(default_factory=list)
    available: bool = True

    @field_validator("best_practices", "checklist", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("code_snippet", mode="before")
    @classmethod
    def _blank_snippet_as_none(cls, value):
        if isinstance(value, dict) and not value.get("code"):
            return None
        return value

    @property
    def is_empty(self) -> bool:
        return self.code_snippet is None and not self.best_practices and not self.checklist


class WorkflowPayload(BaseModel):
    """``data`` of a successful GenerateWorkflow response."""

    workflow: list[WorkflowStage]
    role: str | None = None

    @field_validator("role")
    @classmethod
    def _blank_role_as_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value


class GuideStep(BaseModel):
    """One step of a task guide."""

    title: str
    description: str = ""
    code: str | None = None


class TaskGuide(BaseModel):
    """Step-by-step guide for a project task."""

    title: str
    overview: str = ""
    steps: list[GuideStep] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)
    troubleshooting: list[str] = Field(default_factory=list)
    generated: bool = True


class AnswerFeedback(BaseModel):
    """Evaluation of one selected answer."""

    question_id: int
    selected_index: int
    correct_index: int
    is_correct: bool
    message: str = Field(..., description="Deterministic feedback text")
    explanation: str = ""


class QuizResult(BaseModel):
    """Final summary of a finished quiz."""

    score: int
    total_questions: int
    percentage: float
    title: str
    message: str

    @model_validator(mode="after")
    def _score_within_total(self) -> "QuizResult":
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed the number of questions")
        return self
