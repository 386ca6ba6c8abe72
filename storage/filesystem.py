"""Flat-file content store: one JSON document per exercise.

Layout: ``<root>/<year>/<month>/<slug>.json``. Loading is best-effort: a file
that cannot be parsed or does not validate is skipped and reported, it never
aborts the load of its siblings.
"""

import json
import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from exercises.config import DEFAULT_CONFIG, ValidatorConfig
from exercises.errors import RecordParseError
from exercises.helpers import content_path
from exercises.validator import RecordValidator, parse_record
from models import ExerciseRecord, Issue, Severity, ValidationResult

from .base import ExerciseRepository

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_DIR = Path(__file__).parent.parent / "content" / "exercises"
CONTENT_DIR_ENV = "EXERCISES_ROOT"
RECORD_SUFFIX = ".json"

# Receives (file path, issues) for every skipped file
IssueReporter = Callable[[Path, list[Issue]], None]


def default_content_dir() -> Path:
    """Content root, overridable through the EXERCISES_ROOT environment variable."""
    override = os.environ.get(CONTENT_DIR_ENV)
    return Path(override) if override else DEFAULT_CONTENT_DIR


def iter_record_files(root: Path) -> list[Path]:
    """All record files under root, in sorted path order.

    A missing root is not an error and yields no files.
    """
    if not root.is_dir():
        return []
    return sorted(
        path for path in root.rglob(f"*{RECORD_SUFFIX}") if path.is_file()
    )


def read_candidate(path: Path) -> Any:
    """Read and parse one record file without validating it.

    Raises:
        RecordParseError: If the file is unreadable or not valid JSON.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise RecordParseError(path, f"cannot read file: {exc}") from exc

    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise RecordParseError(path, f"invalid JSON: {exc}") from exc


class FileCheck(BaseModel):
    """Validation outcome for one file of the content tree."""

    path: Path
    result: ValidationResult
    record: ExerciseRecord | None = None
    parsed: bool = True


class JSONExerciseRepository(ExerciseRepository):
    """Exercise repository backed by a directory tree of JSON files."""

    def __init__(
        self,
        root: Path | None = None,
        config: ValidatorConfig = DEFAULT_CONFIG,
        reporter: IssueReporter | None = None,
    ):
        self.root = Path(root) if root is not None else default_content_dir()
        self.config = config
        self.reporter = reporter
        self._validator = RecordValidator(config)

    def check_file(self, path: Path) -> FileCheck:
        """Parse and validate one file; parse failures become a ``file`` error."""
        try:
            raw = read_candidate(path)
        except RecordParseError as exc:
            issue = Issue(field="file", message=exc.reason, severity=Severity.ERROR)
            return FileCheck(
                path=path, result=ValidationResult(errors=[issue]), parsed=False
            )

        result, record = self._validator.check(raw)
        return FileCheck(path=path, result=result, record=record)

    def check_all(self) -> list[FileCheck]:
        """Check every file of the tree, valid or not."""
        return [self.check_file(path) for path in iter_record_files(self.root)]

    def get_all(self) -> list[ExerciseRecord]:
        if not self.root.is_dir():
            logger.debug("Content root %s does not exist, nothing to load", self.root)
            return []

        records: list[ExerciseRecord] = []
        for check in self.check_all():
            if check.record is not None:
                for issue in check.result.warnings:
                    logger.debug("%s: %s: %s", check.path, issue.field, issue.message)
                records.append(check.record)
                continue
            self._report_skipped(check)

        logger.debug("Loaded %d exercise(s) from %s", len(records), self.root)
        return records

    def get_by_slug(self, slug: str) -> ExerciseRecord | None:
        for record in self.get_all():
            if record.slug == slug:
                return record
        return None

    def save(self, record: ExerciseRecord, overwrite: bool = False) -> Path:
        record = parse_record(record, self.config, source=record.slug)
        path = content_path(self.root, record)
        if path.exists() and not overwrite:
            raise FileExistsError(f"An exercise already exists at {path}")

        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(record.to_json_dict(), ensure_ascii=False, indent=2)
        path.write_text(payload + "\n", encoding="utf-8")
        logger.info("Saved exercise %s to %s", record.slug, path)
        return path

    def _report_skipped(self, check: FileCheck) -> None:
        if check.parsed:
            logger.warning(
                "Skipping invalid exercise %s (%d error(s))",
                check.path,
                len(check.result.errors),
            )
            for issue in check.result.errors:
                logger.debug("%s: %s: %s", check.path, issue.field, issue.message)
        else:
            logger.warning(
                "Skipping unreadable exercise %s: %s",
                check.path,
                check.result.errors[0].message,
            )

        if self.reporter is not None:
            self.reporter(check.path, check.result.errors)


def load_all(
    root: Path,
    config: ValidatorConfig = DEFAULT_CONFIG,
    reporter: IssueReporter | None = None,
) -> list[ExerciseRecord]:
    """Load every valid record under root."""
    return JSONExerciseRepository(root, config=config, reporter=reporter).get_all()
