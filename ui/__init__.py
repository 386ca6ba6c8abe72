"""Terminal UI for the exercise content tooling (validation reports, corpus views)."""

from ui.app import ContentUI
from ui.components import (
    CountsTable,
    ExercisePanel,
    ExerciseTable,
    SummaryPanel,
    ValidationReport,
)
from ui.styles import (
    BRAND_BLUE,
    BRAND_YELLOW,
    SUCCESS_GREEN,
    ERROR_RED,
    WARNING_ORANGE,
    INFO_BLUE,
    MUTED_GRAY,
)

__all__ = [
    "ContentUI",
    "ValidationReport",
    "SummaryPanel",
    "CountsTable",
    "ExerciseTable",
    "ExercisePanel",
    "BRAND_BLUE",
    "BRAND_YELLOW",
    "SUCCESS_GREEN",
    "ERROR_RED",
    "WARNING_ORANGE",
    "INFO_BLUE",
    "MUTED_GRAY",
]
