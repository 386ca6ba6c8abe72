"""Structural and content checks for exercise records.

The validator receives untyped, freshly parsed JSON. It never raises for bad
content: every problem becomes an ``Issue`` so that operators get a complete
report for a broken file instead of the first exception.

Severity model:
- errors block a record (it would render or grade incorrectly)
- warnings are advisory (SEO lengths, correction wording drift, too many
  questions) and never affect validity
"""

import re
from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from models import (
    BatchResult,
    BatchSummary,
    ExerciseRecord,
    InvalidCandidate,
    Issue,
    Severity,
    ValidationResult,
)

from .config import DEFAULT_CONFIG, LengthBounds, ValidatorConfig
from .errors import InvalidExerciseError

REQUIRED_FIELDS = (
    "date",
    "level",
    "domain",
    "skill",
    "type",
    "theme",
    "title",
    "slug",
    "h1",
    "instruction",
    "questions",
    "correction",
    "seo",
)

# Fields that hold a container instead of text
CONTAINER_FIELDS: dict[str, type] = {
    "questions": list,
    "correction": dict,
    "seo": dict,
}

SEO_LIST_FIELDS = ("tags", "internalLinks", "nextSuggestions")


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_string_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _type_name(expected: type) -> str:
    return {list: "a list", dict: "an object", str: "a string"}[expected]


class RecordValidator:
    """Runs every record check against one candidate.

    All checks are independent and all of them run; a failing check never
    hides the diagnostics of another one.
    """

    def __init__(self, config: ValidatorConfig = DEFAULT_CONFIG):
        self.config = config
        self._date_re = re.compile(config.date_pattern)
        self._slug_re = re.compile(config.slug_pattern)

    def validate(self, candidate: Any) -> ValidationResult:
        result, _ = self.check(candidate)
        return result

    def check(self, candidate: Any) -> tuple[ValidationResult, ExerciseRecord | None]:
        """Validate a candidate and build the typed record when it passes.

        Returns:
            Tuple of (validation result, record or None when invalid).
        """
        result = ValidationResult()

        if isinstance(candidate, ExerciseRecord):
            candidate = candidate.to_json_dict()

        if not isinstance(candidate, dict):
            self._error(
                result,
                "record",
                f"Expected a JSON object, got {type(candidate).__name__}",
            )
            return result, None

        self._check_required_fields(candidate, result)
        self._check_enumerations(candidate, result)
        self._check_question_count(candidate, result)
        self._check_questions(candidate, result)
        self._check_correction(candidate, result)
        self._check_matching(candidate, result)
        self._check_date(candidate, result)
        self._check_slug(candidate, result)
        self._check_seo(candidate, result)

        if not result.valid:
            return result, None
        return result, self._build_record(candidate, result)

    # ------------------------------------------------------------------
    # Individual checks
    # ------------------------------------------------------------------

    def _check_required_fields(self, record: dict, result: ValidationResult) -> None:
        for name in REQUIRED_FIELDS:
            value = record.get(name)
            expected = CONTAINER_FIELDS.get(name, str)
            if value is None:
                self._error(result, name, f'Field "{name}" is required')
            elif not isinstance(value, expected):
                self._error(
                    result, name, f'Field "{name}" must be {_type_name(expected)}'
                )
            elif expected is str and not value.strip():
                self._error(result, name, f'Field "{name}" must not be empty')

    def _check_enumerations(self, record: dict, result: ValidationResult) -> None:
        level = record.get("level")
        if not _is_blank(level) and level not in self.config.levels:
            allowed = ", ".join(self.config.levels)
            self._error(result, "level", f"Unknown level {level!r} (expected {allowed})")

        domain = record.get("domain")
        if not _is_blank(domain) and domain not in self.config.domains:
            allowed = ", ".join(self.config.domains)
            self._error(
                result, "domain", f"Unknown domain {domain!r} (expected {allowed})"
            )

    def _check_question_count(self, record: dict, result: ValidationResult) -> None:
        questions = record.get("questions")
        level = record.get("level")
        if not isinstance(questions, list) or not isinstance(level, str):
            return

        bounds = self.config.bounds_for(level)
        if bounds is None:
            return

        count = len(questions)
        if count < bounds.min:
            self._error(
                result,
                "questions",
                f"{level}: at least {bounds.min} questions required, {count} found",
            )
        elif count > bounds.max:
            # Over-generation is tolerated so editors can trim by hand
            self._warning(
                result,
                "questions",
                f"{level}: at most {bounds.max} questions recommended, {count} found",
            )

    def _check_questions(self, record: dict, result: ValidationResult) -> None:
        questions = record.get("questions")
        if not isinstance(questions, list):
            return

        for index, question in enumerate(questions):
            path = f"questions[{index}]"
            if not isinstance(question, dict):
                question = {}

            if _is_blank(question.get("prompt")):
                self._error(
                    result, f"{path}.prompt", f"Question {index + 1}: prompt is empty"
                )
            if _is_blank(question.get("answer")):
                self._error(
                    result, f"{path}.answer", f"Question {index + 1}: answer is empty"
                )

            hint = question.get("hint")
            if hint is not None and not isinstance(hint, str):
                self._error(
                    result, f"{path}.hint", f"Question {index + 1}: hint must be a string"
                )
            options = question.get("options")
            if options is not None and not _is_string_list(options):
                self._error(
                    result,
                    f"{path}.options",
                    f"Question {index + 1}: options must be a list of strings",
                )
            pair = question.get("pair")
            if pair is not None and not isinstance(pair, str):
                self._error(
                    result, f"{path}.pair", f"Question {index + 1}: pair must be a string"
                )

    def _check_correction(self, record: dict, result: ValidationResult) -> None:
        correction = record.get("correction")
        if not isinstance(correction, dict):
            return

        mode = correction.get("mode")
        values = correction.get("v")
        if mode == "list":
            self._check_list_correction(record.get("questions"), values, result)
        elif mode == "short_text":
            if _is_blank(values):
                self._error(
                    result,
                    "correction.v",
                    "short_text correction must be a non-empty string",
                )
        else:
            self._error(
                result,
                "correction.mode",
                f"Unknown correction mode {mode!r} (expected 'list' or 'short_text')",
            )

    def _check_list_correction(
        self, questions: Any, values: Any, result: ValidationResult
    ) -> None:
        if not isinstance(values, list):
            self._error(result, "correction.v", "list correction must be a list")
            return
        if not _is_string_list(values):
            self._error(result, "correction.v", "list correction entries must be strings")

        if not isinstance(questions, list):
            return

        if len(values) != len(questions):
            self._error(
                result,
                "correction",
                f"{len(questions)} questions but {len(values)} entries in the correction",
            )

        for index, (question, expected) in enumerate(zip(questions, values)):
            if not isinstance(question, dict) or _is_blank(expected):
                continue
            answer = question.get("answer")
            if not _is_blank(answer) and answer != expected:
                self._warning(
                    result,
                    f"correction.v[{index}]",
                    f'Question {index + 1}: answer "{answer}" differs from '
                    f'correction "{expected}"',
                )

    def _check_matching(self, record: dict, result: ValidationResult) -> None:
        questions = record.get("questions")
        if record.get("type") != self.config.matching_type:
            return
        if not isinstance(questions, list):
            return

        entries = [q if isinstance(q, dict) else {} for q in questions]

        answers = [q["answer"] for q in entries if isinstance(q.get("answer"), str)]
        duplicates = sorted(a for a, n in Counter(answers).items() if n > 1)
        if duplicates:
            listed = ", ".join(f'"{a}"' for a in duplicates)
            self._error(
                result,
                "questions",
                f'"{self.config.matching_type}" exercise: answers must be unique '
                f"(duplicated: {listed})",
            )

        missing_pairs = sum(1 for q in entries if _is_blank(q.get("pair")))
        if missing_pairs:
            self._error(
                result,
                "questions",
                f'"{self.config.matching_type}" exercise: {missing_pairs} question(s) '
                f'without a "pair"',
            )

    def _check_date(self, record: dict, result: ValidationResult) -> None:
        date = record.get("date")
        # Format only: "2024-02-30" is accepted
        if not _is_blank(date) and not self._date_re.fullmatch(date):
            self._error(result, "date", f"Invalid date {date!r} (expected YYYY-MM-DD)")

    def _check_slug(self, record: dict, result: ValidationResult) -> None:
        slug = record.get("slug")
        if not _is_blank(slug) and not self._slug_re.fullmatch(slug):
            self._error(
                result,
                "slug",
                f"Invalid slug {slug!r} (lowercase letters, digits and dashes only)",
            )

    def _check_seo(self, record: dict, result: ValidationResult) -> None:
        seo = record.get("seo")
        if not isinstance(seo, dict):
            return

        self._check_length(seo.get("title"), "seo.title", self.config.seo_title, result)
        self._check_length(
            seo.get("description"),
            "seo.description",
            self.config.seo_description,
            result,
        )

        for name in SEO_LIST_FIELDS:
            value = seo.get(name)
            if value is not None and not _is_string_list(value):
                self._error(result, f"seo.{name}", f"seo.{name} must be a list of strings")

    def _check_length(
        self, value: Any, field: str, bounds: LengthBounds, result: ValidationResult
    ) -> None:
        length = len(value) if isinstance(value, str) else 0
        if length < bounds.min:
            self._warning(
                result,
                field,
                f"{field} should be at least {bounds.min} characters ({length})",
            )
        elif length > bounds.max:
            self._warning(
                result,
                field,
                f"{field} should be at most {bounds.max} characters ({length})",
            )

    def _build_record(
        self, record: dict, result: ValidationResult
    ) -> ExerciseRecord | None:
        """Build the typed record; schema errors missed above become issues."""
        try:
            return ExerciseRecord.model_validate(record)
        except ValidationError as exc:
            for err in exc.errors():
                self._error(result, _format_loc(err["loc"]), err["msg"])
            return None

    # ------------------------------------------------------------------

    @staticmethod
    def _error(result: ValidationResult, field: str, message: str) -> None:
        result.errors.append(Issue(field=field, message=message, severity=Severity.ERROR))

    @staticmethod
    def _warning(result: ValidationResult, field: str, message: str) -> None:
        result.warnings.append(
            Issue(field=field, message=message, severity=Severity.WARNING)
        )


def _format_loc(loc: tuple) -> str:
    """Turn a pydantic error location into a field path like ``questions[0].hint``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path or "record"


# ============================================================================
# Module-level API
# ============================================================================


def validate_record(
    candidate: Any, config: ValidatorConfig = DEFAULT_CONFIG
) -> ValidationResult:
    """Validate one candidate record."""
    return RecordValidator(config).validate(candidate)


def parse_record(
    candidate: Any,
    config: ValidatorConfig = DEFAULT_CONFIG,
    source: str | None = None,
) -> ExerciseRecord:
    """Validate a candidate and return it as a typed record.

    Raises:
        InvalidExerciseError: If the candidate has at least one error.
    """
    result, record = RecordValidator(config).check(candidate)
    if record is None:
        raise InvalidExerciseError(result, source=source)
    return record


def summarize(results: Iterable[ValidationResult]) -> BatchSummary:
    """Aggregate counts over validation results."""
    summary = BatchSummary()
    for result in results:
        summary.total += 1
        if result.valid:
            summary.valid += 1
        else:
            summary.invalid += 1
        summary.warnings += len(result.warnings)
        summary.errors += len(result.errors)
    return summary


def validate_all(
    candidates: Sequence[Any], config: ValidatorConfig = DEFAULT_CONFIG
) -> BatchResult:
    """Validate each candidate independently and partition the batch.

    Slug uniqueness across the batch is not checked here, see
    ``find_duplicate_slugs``.
    """
    validator = RecordValidator(config)
    batch = BatchResult()
    results: list[ValidationResult] = []

    for candidate in candidates:
        result, record = validator.check(candidate)
        results.append(result)
        if record is not None:
            batch.valid.append(record)
        else:
            batch.invalid.append(InvalidCandidate(record=candidate, result=result))

    batch.summary = summarize(results)
    return batch


def find_duplicate_slugs(records: Iterable[ExerciseRecord]) -> dict[str, int]:
    """Return slugs used by more than one record, with their use count."""
    counts = Counter(record.slug for record in records)
    return {slug: count for slug, count in counts.items() if count > 1}
