from pathlib import Path
from typing import Optional

from rich.columns import Columns
from rich.console import Console
from rich.text import Text

from models import DOMAIN_LABELS, BatchSummary, ExerciseRecord
from storage.filesystem import FileCheck
from storage.query import ExerciseCatalog
from ui.components import (
    CountsTable,
    ExercisePanel,
    ExerciseTable,
    SummaryPanel,
    ValidationReport,
)
from ui.styles import ERROR_RED, INFO_BLUE


class ContentUI:
    """Main UI orchestrator for the content tooling commands."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_validation_report(
        self,
        checks: list[FileCheck],
        summary: BatchSummary,
        root: Path | None = None,
    ) -> None:
        """Display the per-file report followed by the summary panel."""
        if checks:
            self.console.print(ValidationReport(checks, root))
        self.console.print(SummaryPanel(summary))

    def show_counts(self, catalog: ExerciseCatalog) -> None:
        """Display record tallies by level and by domain side by side."""
        by_level = {
            level.value: count for level, count in catalog.count_by_level().items()
        }
        by_domain = {
            DOMAIN_LABELS[domain]: count
            for domain, count in catalog.count_by_domain().items()
        }
        self.console.print(
            Columns(
                [
                    CountsTable("By level", by_level),
                    CountsTable("By domain", by_domain),
                ],
                padding=(0, 4),
            )
        )
        self.show_info(f"{len(catalog)} exercise(s) in total.")

    def show_records(self, title: str, records: list[ExerciseRecord]) -> None:
        if not records:
            self.show_info("No matching exercise.")
            return
        self.console.print(ExerciseTable(title, records))

    def show_exercise(self, record: ExerciseRecord) -> None:
        self.console.print(ExercisePanel(record))

    def show_error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(Text(f"✗ {message}", style=f"bold {ERROR_RED}"))

    def show_info(self, message: str) -> None:
        """Display an info message."""
        self.console.print(Text(message, style=INFO_BLUE))
