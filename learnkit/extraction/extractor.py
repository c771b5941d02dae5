"""Structured Response Extractor - Generated text to validated structured data.

The backend is a generative model: its replies are free-form text that usually,
but not always, carry a JSON document. Extraction runs an ordered list of parse
strategies (first success wins) and then validates the parsed value against a
shape. Any failure along the way resolves to a caller supplied fallback value,
so callers always receive something well-typed.

Example:
    >>> text = 'Here you go:\\n```json\\n[{"id": 1, ...}]\\n```'
    >>> questions = extract(text, quiz_fallback("API Design"), quiz_questions_shape)
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Sequence, TypeVar, Union

from pydantic import BaseModel

from ..models.schemas import QuizQuestion, StageDetail, WorkflowPayload

logger = logging.getLogger(__name__)

T = TypeVar("T")

Shape = Callable[[Any], T]

# Errors a shape may raise for a value of the wrong structure
# (pydantic.ValidationError is a ValueError)
SHAPE_ERRORS = (ValueError, TypeError, KeyError, IndexError, AttributeError)

PREVIEW_CHARS = 120

JSON_FENCE_RE = re.compile(r"```[ \t]*json[ \t]*\r?\n?(.*?)```", re.IGNORECASE | re.DOTALL)
ANY_FENCE_RE = re.compile(r"```[ \t]*[\w+.-]*[ \t]*\r?\n?(.*?)```", re.DOTALL)
OUTERMOST_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


# =============================================================================
# TAGGED RESULT
# =============================================================================


@dataclass(frozen=True)
class Parsed:
    """A strategy decoded a JSON value."""

    value: Any
    strategy: str


@dataclass(frozen=True)
class Fallback:
    """Nothing usable was found; ``reason`` says why."""

    reason: str


ExtractionResult = Union[Parsed, Fallback]


# =============================================================================
# PARSE STRATEGIES
# =============================================================================


def _loads(candidate: str) -> tuple[bool, Any]:
    candidate = candidate.strip()
    if not candidate:
        return False, None
    try:
        return True, json.loads(candidate)
    except (ValueError, RecursionError):
        return False, None


def json_fence_strategy(text: str) -> Parsed | None:
    """Fenced block tagged ``json``."""
    for match in JSON_FENCE_RE.finditer(text):
        ok, value = _loads(match.group(1))
        if ok:
            return Parsed(value=value, strategy="json_fence")
    return None


def any_fence_strategy(text: str) -> Parsed | None:
    """Any fenced block, tagged or not."""
    for match in ANY_FENCE_RE.finditer(text):
        ok, value = _loads(match.group(1))
        if ok:
            return Parsed(value=value, strategy="any_fence")
    return None


def whole_text_strategy(text: str) -> Parsed | None:
    """The entire reply as JSON."""
    ok, value = _loads(text)
    if ok:
        return Parsed(value=value, strategy="whole_text")
    return None


def outermost_object_strategy(text: str) -> Parsed | None:
    """Span from the first ``{`` to the last ``}``.

    Not part of the default chain: prose that merely mentions braces would
    otherwise be read as content.
    """
    match = OUTERMOST_OBJECT_RE.search(text)
    if match is None:
        return None
    ok, value = _loads(match.group(0))
    if ok:
        return Parsed(value=value, strategy="outermost_object")
    return None


ParseStrategy = Callable[[str], Union[Parsed, None]]

DEFAULT_STRATEGIES: tuple[ParseStrategy, ...] = (
    json_fence_strategy,
    any_fence_strategy,
    whole_text_strategy,
)

LENIENT_STRATEGIES: tuple[ParseStrategy, ...] = DEFAULT_STRATEGIES + (outermost_object_strategy,)


def parse_structured(
    raw_text: Any, strategies: Sequence[ParseStrategy] = DEFAULT_STRATEGIES
) -> ExtractionResult:
    """Run the strategies in order and return the first successful parse.

    Args:
        raw_text: Reply text from the backend (non-strings yield Fallback)
        strategies: Ordered parse strategies

    Returns:
        Parsed(value) or Fallback(reason); never raises
    """
    if not isinstance(raw_text, str):
        return Fallback(reason=f"reply is {type(raw_text).__name__}, not text")
    if not raw_text.strip():
        return Fallback(reason="reply is empty")

    for strategy in strategies:
        result = strategy(raw_text)
        if result is not None:
            return result

    return Fallback(reason="no JSON found in reply")


def _preview(raw: Any) -> str:
    text = raw if isinstance(raw, str) else repr(raw)
    text = text.replace("\n", " ")
    return text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")


def _apply_shape(value: Any, shape: Shape[T]) -> T | Fallback:
    try:
        return shape(value)
    except SHAPE_ERRORS as e:
        first_line = str(e).splitlines()[0] if str(e) else type(e).__name__
        return Fallback(reason=f"shape mismatch: {first_line}")


# =============================================================================
# BOUNDARY
# =============================================================================


def extract(
    raw_text: Any,
    fallback: T,
    shape: Shape[T],
    strategies: Sequence[ParseStrategy] = DEFAULT_STRATEGIES,
) -> T:
    """Turn generated text into a shape-valid value or the fallback.

    Either the whole structure validates or the whole fallback is returned;
    generated and placeholder items are never mixed.

    Args:
        raw_text: Reply text from the backend
        fallback: Always-valid value for this call site
        shape: Converts the parsed JSON into ``T``, raising on mismatch
        strategies: Ordered parse strategies

    Returns:
        The shaped value, or ``fallback``
    """
    result = parse_structured(raw_text, strategies)
    if isinstance(result, Parsed):
        shaped = _apply_shape(result.value, shape)
        if not isinstance(shaped, Fallback):
            logger.debug(f"Extracted structured reply via {result.strategy}")
            return shaped
        result = shaped

    logger.warning(f"Using fallback content ({result.reason}): {_preview(raw_text)}")
    return fallback


def extract_payload(payload: Any, fallback: T, shape: Shape[T]) -> T:
    """Validate an already-decoded ``{success, data}`` envelope.

    ``success: true`` does not guarantee ``data`` is well-formed, so ``data``
    still goes through ``shape``.

    Args:
        payload: Decoded backend response
        fallback: Value returned when the envelope is unusable
        shape: Converts ``data`` into ``T``

    Returns:
        The shaped ``data``, or ``fallback``
    """
    if not isinstance(payload, dict):
        reason = "payload is not an object"
    elif payload.get("success") is not True:
        reason = "backend reported success=false"
    elif payload.get("data") is None:
        reason = "payload has no data"
    else:
        shaped = _apply_shape(payload["data"], shape)
        if not isinstance(shaped, Fallback):
            return shaped
        reason = shaped.reason

    logger.warning(f"Using fallback content ({reason}): {_preview(payload)}")
    return fallback


# =============================================================================
# SHAPES
# =============================================================================


def quiz_questions_shape(value: Any) -> list[QuizQuestion]:
    """A non-empty list of valid questions.

    Accepts a bare JSON array or an object with a ``questions`` array.
    """
    if isinstance(value, dict) and "questions" in value:
        value = value["questions"]
    if not isinstance(value, list):
        raise TypeError(f"expected a list of questions, got {type(value).__name__}")
    if not value:
        raise ValueError("question list is empty")
    return [QuizQuestion.model_validate(item) for item in value]


def record_shape(model: type[BaseModel]) -> Shape:
    """Shape validating a JSON object against a pydantic model."""

    def _shape(value: Any):
        if not isinstance(value, dict):
            raise TypeError(f"expected an object, got {type(value).__name__}")
        return model.model_validate(value)

    return _shape


def stage_detail_shape(value: Any) -> StageDetail:
    """A stage detail object; ``available`` is never taken from the payload."""
    if not isinstance(value, dict):
        raise TypeError(f"expected an object, got {type(value).__name__}")
    data = {k: v for k, v in value.items() if k != "available"}
    return StageDetail.model_validate(data)


def workflow_shape(value: Any) -> WorkflowPayload:
    """``{workflow: [...], role?: str}`` with every stage valid."""
    return record_shape(WorkflowPayload)(value)
