"""Exceptions raised at the typed boundary of the exercise tooling.

The validator itself never raises for bad content; these are for callers that
asked for a typed record (or a write) and cannot get one.
"""

from pathlib import Path

from models import ValidationResult


class InvalidExerciseError(ValueError):
    """Raised when a candidate cannot become an ExerciseRecord."""

    def __init__(self, result: ValidationResult, source: str | None = None):
        self.result = result
        self.source = source
        first = result.errors[0].message if result.errors else "invalid record"
        where = f"{source}: " if source else ""
        super().__init__(
            f"{where}{len(result.errors)} validation error(s), first: {first}"
        )


class RecordParseError(ValueError):
    """Raised when a content file cannot be read as a JSON document."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")
