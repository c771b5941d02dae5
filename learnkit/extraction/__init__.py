"""learnkit Extraction - Generated text to validated structured data."""

from .extractor import (
    DEFAULT_STRATEGIES,
    LENIENT_STRATEGIES,
    ExtractionResult,
    Fallback,
    Parsed,
    extract,
    extract_payload,
    parse_structured,
    quiz_questions_shape,
    record_shape,
    stage_detail_shape,
    workflow_shape,
)

__all__ = [
    "Parsed",
    "Fallback",
    "ExtractionResult",
    "DEFAULT_STRATEGIES",
    "LENIENT_STRATEGIES",
    "parse_structured",
    "extract",
    "extract_payload",
    "quiz_questions_shape",
    "record_shape",
    "stage_detail_shape",
    "workflow_shape",
]
