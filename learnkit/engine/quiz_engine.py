"""Quiz Engine - Interactive quiz session state machine."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..config import get_config
from ..exceptions import InvalidInputError
from ..extraction.extractor import extract, quiz_questions_shape
from ..models.enums import QuizPhase, RequestOutcomeStatus
from ..models.schemas import AnswerFeedback, QuizQuestion, QuizResult
from ..models.state import QuizSession
from ..prompts.templates import (
    QUIZ_CONTEXT_TEMPLATE,
    QUIZ_GENERATION_PROMPT,
    QUIZ_QUESTION_COUNT,
    QUIZ_REQUEST_ROLE,
    quiz_fallback,
)
from .lifecycle import RequestLifecycleController
from .scoring_engine import QuizScoringEngine

if TYPE_CHECKING:
    from ..llm.client import BackendClient

logger = logging.getLogger(__name__)


class QuizEngine:
    """Drives one quiz view: load, answer, feedback, score, finish.

    States: IDLE -> LOADING -> ANSWERING <-> FEEDBACK -> FINISHED, and back to
    IDLE on close. The session is mutated only here.

    After an answer the engine stays in FEEDBACK for ``feedback_delay``
    seconds, then advances on its own. That timed step is an asyncio task
    owned by the engine; closing the quiz cancels it.

    Example:
        >>> engine = QuizEngine(client, feedback_delay=2.5)
        >>> session = await engine.open("API Design", ["REST", "GraphQL"], "Backend Engineer")
        >>> engine.select_answer(1)
        >>> await engine.pending_transition
    """

    SESSION_ID = "quiz"

    def __init__(
        self,
        client: BackendClient,
        lifecycle: RequestLifecycleController | None = None,
        scoring: QuizScoringEngine | None = None,
        feedback_delay: float | None = None,
        num_questions: int = QUIZ_QUESTION_COUNT,
    ):
        """Initialize the engine.

        Args:
            client: Backend client used for GenerateContent
            lifecycle: Shared controller (a private one is created otherwise)
            scoring: Answer evaluation engine
            feedback_delay: Seconds feedback stays visible (config default)
            num_questions: Questions requested from the backend
        """
        self.client = client
        self.lifecycle = lifecycle or RequestLifecycleController()
        self.scoring = scoring or QuizScoringEngine()
        self.feedback_delay = (
            feedback_delay if feedback_delay is not None else get_config().feedback_delay
        )
        self.num_questions = num_questions

        self.session = QuizSession()
        self.lifecycle.bind(self.SESSION_ID, self.session.request)

        self._advance_task: asyncio.Task | None = None
        self._last_open: tuple[str, list[str], str] | None = None

    # =========================================================================
    # LOADING
    # =========================================================================

    def _build_request(self, phase_name: str, topics: list[str], role: str) -> tuple[str, str]:
        message = QUIZ_GENERATION_PROMPT.format(
            num_questions=self.num_questions, phase_name=phase_name
        )
        context = QUIZ_CONTEXT_TEMPLATE.format(role=role, topics=", ".join(topics))
        return message, context

    async def open(self, phase_name: str, topics: list[str], role: str) -> QuizSession:
        """Open the quiz and load its questions.

        Re-opening while a previous load is pending supersedes it: only the
        latest load is ever applied.

        Args:
            phase_name: Roadmap phase the quiz covers
            topics: Topics of that phase
            role: Role the learner is preparing for

        Returns:
            The session (ANSWERING on success, IDLE with request ERROR on
            transport failure, unchanged if superseded)
        """
        self._cancel_advance()
        self.session.reset()
        self.session.phase = QuizPhase.LOADING
        self._last_open = (phase_name, list(topics), role)

        message, context = self._build_request(phase_name, topics, role)
        fallback = quiz_fallback(phase_name)

        async def fetch_questions() -> list[QuizQuestion]:
            reply = await self.client.generate_content(QUIZ_REQUEST_ROLE, message, context)
            return extract(reply, fallback, quiz_questions_shape)

        logger.info(f"[Quiz] Generating questions for '{phase_name}'")
        outcome = await self.lifecycle.issue(
            self.SESSION_ID, fetch_questions, on_success=self.session.start
        )

        if outcome.status == RequestOutcomeStatus.FAILED:
            self.session.phase = QuizPhase.IDLE
            logger.error(f"[Quiz] Could not load questions: {outcome.error}")
        elif outcome.applied:
            logger.info(f"[Quiz] {len(self.session.questions)} questions ready")

        return self.session

    async def retry(self) -> QuizSession:
        """Re-issue the last ``open`` (the retry affordance after an error)."""
        if self._last_open is None:
            raise InvalidInputError(message="No quiz has been opened yet")
        phase_name, topics, role = self._last_open
        return await self.open(phase_name, topics, role)

    # =========================================================================
    # ANSWERING
    # =========================================================================

    def select_answer(self, index: int) -> AnswerFeedback | None:
        """Answer the current question.

        A question can be answered once: selections outside ANSWERING, or
        after an answer was already recorded, return None and change nothing.
        Must be called from a running event loop (the timed advance is
        scheduled on it).

        Args:
            index: Option chosen (0-3)

        Returns:
            AnswerFeedback, or None if the selection was rejected

        Raises:
            InvalidAnswerError: If the index is not one of the options
        """
        session = self.session
        if session.phase != QuizPhase.ANSWERING or session.selected_answer is not None:
            logger.debug(f"[Quiz] Ignoring selection {index} in phase {session.phase.value}")
            return None

        question = session.current_question
        if question is None:
            return None

        feedback = self.scoring.evaluate_answer(question, index)
        session.selected_answer = index
        if feedback.is_correct:
            session.score += 1
        session.feedback = feedback.message
        session.phase = QuizPhase.FEEDBACK

        self._advance_task = asyncio.ensure_future(self._advance_after_delay())
        return feedback

    async def _advance_after_delay(self) -> None:
        await asyncio.sleep(self.feedback_delay)
        self._advance()

    def _advance(self) -> None:
        session = self.session
        if session.phase != QuizPhase.FEEDBACK:
            return

        session.selected_answer = None
        session.feedback = None
        if session.is_last_question:
            session.current_index = len(session.questions)
            session.phase = QuizPhase.FINISHED
            logger.info(f"[Quiz] Finished with {session.score}/{len(session.questions)}")
        else:
            session.current_index += 1
            session.phase = QuizPhase.ANSWERING

    @property
    def pending_transition(self) -> asyncio.Task | None:
        """Task of the scheduled feedback advance, if one is pending."""
        if self._advance_task is not None and not self._advance_task.done():
            return self._advance_task
        return None

    def _cancel_advance(self) -> None:
        if self._advance_task is not None and not self._advance_task.done():
            self._advance_task.cancel()
        self._advance_task = None

    # =========================================================================
    # RESULT & TEARDOWN
    # =========================================================================

    def result(self) -> QuizResult | None:
        """Summary of a finished quiz, None before FINISHED."""
        if self.session.phase != QuizPhase.FINISHED:
            return None
        return self.scoring.summarize(self.session.score, len(self.session.questions))

    def close(self) -> None:
        """Close the quiz view.

        Cancels the timed advance and the pending load, and discards score,
        index and questions.
        """
        self._cancel_advance()
        self.lifecycle.cancel(self.SESSION_ID)
        self.session.reset()
        logger.debug("[Quiz] Closed")
