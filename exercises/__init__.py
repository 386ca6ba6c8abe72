"""Exercise record validation and content helpers.

Architecture:
- Configuration holds the shared constraint tables (level bounds, enums, SEO)
- The validator turns untyped JSON into a verdict of errors and warnings
- parse_record is the only way from raw JSON to a typed ExerciseRecord
- Helpers build slugs, seasonal themes and content paths

Validation:
- validate_record: one candidate -> ValidationResult
- validate_all: many candidates -> BatchResult (valid / invalid / summary)
- find_duplicate_slugs: opt-in corpus-wide slug uniqueness check

Configuration:
- ValidatorConfig, QuestionBounds, LengthBounds, DEFAULT_CONFIG
"""

from exercises.config import (
    DEFAULT_CONFIG,
    LengthBounds,
    QuestionBounds,
    ValidatorConfig,
)
from exercises.errors import InvalidExerciseError, RecordParseError
from exercises.helpers import (
    content_path,
    estimate_minutes,
    generate_slug,
    seasonal_theme,
)
from exercises.validator import (
    REQUIRED_FIELDS,
    RecordValidator,
    find_duplicate_slugs,
    parse_record,
    summarize,
    validate_all,
    validate_record,
)

__all__ = [
    # Validation
    "RecordValidator",
    "REQUIRED_FIELDS",
    "validate_record",
    "validate_all",
    "parse_record",
    "summarize",
    "find_duplicate_slugs",
    # Errors
    "InvalidExerciseError",
    "RecordParseError",
    # Configuration
    "ValidatorConfig",
    "QuestionBounds",
    "LengthBounds",
    "DEFAULT_CONFIG",
    # Helpers
    "generate_slug",
    "seasonal_theme",
    "estimate_minutes",
    "content_path",
]
