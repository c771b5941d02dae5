"""Quiz Scoring Engine - Answer evaluation and result summary."""

from ..exceptions import InvalidAnswerError
from ..models.schemas import AnswerFeedback, QuizQuestion, QuizResult
from ..prompts.templates import FEEDBACK_CORRECT, FEEDBACK_INCORRECT


class QuizScoringEngine:
    """Evaluates answers and summarizes finished quizzes.

    Every question is worth one point. Feedback text is deterministic: a fixed
    affirmative string for a correct answer, or a string naming the correct
    option otherwise.

    Result tiers (percentage of correct answers):
        - 100%: Phase Mastered
        - 66-99%: Solid Understanding
        - 33-65%: Getting There
        - <33%: Keep Practicing

    Example:
        >>> engine = QuizScoringEngine()
        >>> engine.summarize(score=2, total_questions=3).title
        'Solid Understanding'
    """

    # (threshold, title, message)
    RESULT_TIERS = [
        (
            100,
            "Phase Mastered",
            "Perfect score! You're ready to move on to the next phase of your roadmap.",
        ),
        (
            66,
            "Solid Understanding",
            "Nice work. Review the questions you missed before moving on.",
        ),
        (
            33,
            "Getting There",
            "You have the basics. Revisit this phase's topics and try again.",
        ),
        (
            0,
            "Keep Practicing",
            "This phase needs more study. Go through its resources and retake the quiz.",
        ),
    ]

    def evaluate_answer(self, question: QuizQuestion, selected_index: int) -> AnswerFeedback:
        """Evaluate one selected option.

        Args:
            question: Question being answered
            selected_index: Option chosen (0-3)

        Returns:
            AnswerFeedback with correctness and feedback message

        Raises:
            InvalidAnswerError: If the index is not one of the options
        """
        if not 0 <= selected_index < len(question.options):
            raise InvalidAnswerError(
                message=f"Option {selected_index} does not exist",
                details={"question_id": question.id, "options": len(question.options)},
            )

        is_correct = selected_index == question.correct_answer
        if is_correct:
            message = FEEDBACK_CORRECT
        else:
            message = FEEDBACK_INCORRECT.format(correct_option=question.correct_option)

        return AnswerFeedback(
            question_id=question.id,
            selected_index=selected_index,
            correct_index=question.correct_answer,
            is_correct=is_correct,
            message=message,
            explanation=question.explanation,
        )

    def calculate_tier(self, percentage: float) -> tuple[str, str]:
        """Return (title, message) for a percentage of correct answers."""
        for threshold, title, message in self.RESULT_TIERS:
            if percentage >= threshold:
                return title, message
        return self.RESULT_TIERS[-1][1], self.RESULT_TIERS[-1][2]

    def summarize(self, score: int, total_questions: int) -> QuizResult:
        """Summarize a finished quiz.

        Args:
            score: Correct answers
            total_questions: Questions in the quiz

        Returns:
            QuizResult with percentage and tier
        """
        percentage = (score / total_questions * 100) if total_questions > 0 else 0.0
        title, message = self.calculate_tier(percentage)
        return QuizResult(
            score=score,
            total_questions=total_questions,
            percentage=round(percentage, 1),
            title=title,
            message=message,
        )
