# =============================================================================
# TESTS - Schemas and State
# =============================================================================
# Unit tests for the Pydantic models and session state dataclasses
# =============================================================================

import pytest
from pydantic import ValidationError


class TestQuizQuestion:
    """Tests for the QuizQuestion model."""

    def test_alias_and_field_name(self):
        """correctAnswer and correct_answer are both accepted."""
        from learnkit.models.schemas import QuizQuestion

        by_alias = QuizQuestion.model_validate(
            {"id": 1, "question": "Q?", "options": ["a", "b", "c", "d"], "correctAnswer": 3}
        )
        by_name = QuizQuestion(id=1, question="Q?", options=["a", "b", "c", "d"], correct_answer=3)

        assert by_alias == by_name
        assert by_alias.correct_option == "d"
        assert by_alias.explanation == ""
        assert by_alias.model_dump(by_alias=True)["correctAnswer"] == 3

    @pytest.mark.parametrize(
        "options",
        [["a", "b", "c"], ["a", "b", "c", "d", "e"], ["a", "b", " ", "d"]],
    )
    def test_options_must_be_four_texts(self, options):
        from learnkit.models.schemas import QuizQuestion

        with pytest.raises(ValidationError):
            QuizQuestion(id=1, question="Q?", options=options, correct_answer=0)

    def test_blank_question_rejected(self):
        from learnkit.models.schemas import QuizQuestion

        with pytest.raises(ValidationError):
            QuizQuestion(id=1, question="", options=["a", "b", "c", "d"], correct_answer=0)

    def test_frozen(self, sample_questions):
        with pytest.raises(ValidationError):
            sample_questions[0].correct_answer = 0


class TestWorkflowModels:
    """Tests for WorkflowStage, StageDetail and WorkflowPayload."""

    def test_stage_null_lists(self):
        from learnkit.models.schemas import WorkflowStage

        stage = WorkflowStage.model_validate({"stage": "Test", "tools_used": None, "activities": None})

        assert stage.tools_used == []
        assert stage.activities == []

    def test_stage_tools_deduplicated(self):
        from learnkit.models.schemas import WorkflowStage

        stage = WorkflowStage(stage="Build", tools_used=["Git", "", "Docker", "Git"])

        assert stage.tools_used == ["Git", "Docker"]

    def test_snippet_without_code_dropped(self):
        from learnkit.models.schemas import StageDetail

        detail = StageDetail.model_validate({"code_snippet": {"language": "python"}})

        assert detail.code_snippet is None
        assert detail.is_empty is True

    def test_unavailable_detail(self):
        """Each call builds a new unavailable detail."""
        from learnkit.prompts.templates import stage_detail_unavailable

        first = stage_detail_unavailable()

        assert first.available is False
        assert first.is_empty is True
        assert stage_detail_unavailable() is not first

    def test_blank_role_is_none(self):
        from learnkit.models.schemas import WorkflowPayload

        payload = WorkflowPayload.model_validate({"workflow": [], "role": "  "})

        assert payload.role is None


class TestSessionState:
    """Tests for the state dataclasses."""

    def test_quiz_session_lifecycle(self, sample_questions):
        from learnkit.models.enums import QuizPhase
        from learnkit.models.state import QuizSession

        session = QuizSession()
        assert session.current_question is None

        session.start(sample_questions)
        assert session.phase == QuizPhase.ANSWERING
        assert session.current_question.id == 1
        assert session.is_last_question is False

        session.current_index = 2
        assert session.is_last_question is True

        session.reset()
        assert session.phase == QuizPhase.IDLE
        assert session.questions == []

    def test_quiz_session_to_dict(self, sample_questions):
        from learnkit.models.state import QuizSession

        session = QuizSession()
        session.start(sample_questions)
        data = session.to_dict()

        assert data["phase"] == "answering"
        assert data["questions"][0]["correctAnswer"] == 1
        assert data["request"] == {"phase": "idle", "token": 0, "error": None}

    def test_workflow_state(self, sample_stages):
        from learnkit.models.state import WorkflowState

        state = WorkflowState(stages=sample_stages, display_role_label="Dev")
        state.last_error = "failed"
        state.active_stage = "Build"

        state.replace_stages([], None)

        assert state.is_available is False
        assert state.display_role_label == "Dev"
        assert state.last_error is None
        assert state.to_dict()["active_stage"] == "Build"

        state.clear_detail()
        assert state.active_stage is None
