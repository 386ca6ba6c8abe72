"""Storage layer for the exercise content store.

Provides the repository interface, the JSON-file implementation used for the
content tree, and the read-only catalog built on top of loaded records.
"""

from pathlib import Path

from exercises.config import DEFAULT_CONFIG, ValidatorConfig

from .base import ExerciseRepository
from .filesystem import (
    DEFAULT_CONTENT_DIR,
    FileCheck,
    IssueReporter,
    JSONExerciseRepository,
    default_content_dir,
    iter_record_files,
    load_all,
    read_candidate,
)
from .query import ExerciseCatalog

__all__ = [
    # Abstract interface
    "ExerciseRepository",
    # JSON implementation
    "JSONExerciseRepository",
    "FileCheck",
    "IssueReporter",
    "iter_record_files",
    "read_candidate",
    "load_all",
    # Query layer
    "ExerciseCatalog",
    # Paths
    "DEFAULT_CONTENT_DIR",
    "default_content_dir",
    # Factory functions
    "get_exercise_repo",
    "get_catalog",
]


def get_exercise_repo(
    root: Path | None = None,
    config: ValidatorConfig = DEFAULT_CONFIG,
    reporter: IssueReporter | None = None,
) -> ExerciseRepository:
    """Get an ExerciseRepository for a content tree (default tree if root is None)."""
    return JSONExerciseRepository(root, config=config, reporter=reporter)


def get_catalog(
    root: Path | None = None,
    config: ValidatorConfig = DEFAULT_CONFIG,
    reporter: IssueReporter | None = None,
) -> ExerciseCatalog:
    """Load a content tree and return a catalog over its valid records."""
    return ExerciseCatalog(get_exercise_repo(root, config, reporter).get_all())
