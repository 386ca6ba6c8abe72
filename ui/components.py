from pathlib import Path

from rich import box
from rich.align import Align
from rich.console import Group
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

from exercises.helpers import estimate_minutes
from models import (
    DOMAIN_LABELS,
    LEVEL_EMOJIS,
    BatchSummary,
    ExerciseRecord,
    ListCorrection,
    ShortTextCorrection,
)
from storage.filesystem import FileCheck
from ui.styles import (
    BRAND_BLUE,
    BRAND_YELLOW,
    SUCCESS_GREEN,
    ERROR_RED,
    WARNING_ORANGE,
    MUTED_GRAY,
    TEXT_WHITE,
    create_status_label,
    get_level_style,
)


class ValidationReport:
    """Per-file validation table: one row per file, one sub-row per issue."""

    def __init__(self, checks: list[FileCheck], root: Path | None = None):
        self.checks = checks
        self.root = root

    def _display_path(self, path: Path) -> str:
        if self.root is not None:
            try:
                return str(path.relative_to(self.root))
            except ValueError:
                pass
        return str(path)

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=BRAND_BLUE, bold=True),
            border_style=MUTED_GRAY,
            box=box.SIMPLE_HEAVY,
        )
        table.add_column("", justify="center", width=2)
        table.add_column("File", style=Style(color=TEXT_WHITE))
        table.add_column("Field", style=Style(color=MUTED_GRAY))
        table.add_column("Message")

        for check in self.checks:
            result = check.result
            table.add_row(
                create_status_label(len(result.errors), len(result.warnings)),
                Text(self._display_path(check.path)),
                "",
                "",
            )
            for issue in result.errors:
                table.add_row(
                    "",
                    "",
                    Text(issue.field),
                    Text(f"ERROR: {issue.message}", style=Style(color=ERROR_RED)),
                )
            for issue in result.warnings:
                table.add_row(
                    "",
                    "",
                    Text(issue.field),
                    Text(f"WARN: {issue.message}", style=Style(color=WARNING_ORANGE)),
                )

        return Panel(
            Align.left(table),
            title="Exercise Validation",
            border_style=BRAND_BLUE,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class SummaryPanel:
    """Totals of a validation run and its verdict."""

    def __init__(self, summary: BatchSummary):
        self.summary = summary

    def render(self) -> Panel:
        summary = self.summary
        stats = Table(show_header=False, border_style=MUTED_GRAY, box=box.SIMPLE)
        stats.add_column("Label", style=Style(color=MUTED_GRAY))
        stats.add_column("Value", justify="right")

        stats.add_row("Files", str(summary.total))
        stats.add_row("Valid", Text(str(summary.valid), style=Style(color=SUCCESS_GREEN)))
        stats.add_row("Invalid", Text(str(summary.invalid), style=Style(color=ERROR_RED)))
        stats.add_row("Errors", Text(str(summary.errors), style=Style(color=ERROR_RED)))
        stats.add_row(
            "Warnings", Text(str(summary.warnings), style=Style(color=WARNING_ORANGE))
        )

        if summary.ok:
            verdict = Text("✓ Validation passed", Style(color=SUCCESS_GREEN, bold=True))
            border = SUCCESS_GREEN
        else:
            verdict = Text(
                "✗ Validation failed, fix the errors before building",
                Style(color=ERROR_RED, bold=True),
            )
            border = ERROR_RED

        return Panel(
            Group(stats, verdict),
            title="Summary",
            border_style=border,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()


class CountsTable:
    """A two-column tally table (label, count)."""

    def __init__(self, title: str, counts: dict[str, int]):
        self.title = title
        self.counts = counts

    def render(self) -> Table:
        table = Table(
            title=self.title,
            show_header=False,
            border_style=MUTED_GRAY,
            box=box.ROUNDED,
        )
        table.add_column("Label")
        table.add_column("Count", justify="right")
        for label, count in self.counts.items():
            style = Style(color=BRAND_YELLOW, bold=True) if count else Style(color=MUTED_GRAY)
            table.add_row(label, Text(str(count), style=style))
        return table

    def __rich__(self) -> Table:
        return self.render()


class ExerciseTable:
    """A list of exercises, one row each."""

    def __init__(self, title: str, records: list[ExerciseRecord]):
        self.title = title
        self.records = records

    def render(self) -> Panel:
        table = Table(
            show_header=True,
            header_style=Style(color=BRAND_BLUE, bold=True),
            border_style=MUTED_GRAY,
            row_styles=[Style(), Style(dim=True)],
            box=box.HEAVY,
        )
        table.add_column("Date", style=Style(color=MUTED_GRAY))
        table.add_column("Level", justify="center")
        table.add_column("Domain")
        table.add_column("Title", style=Style(color=TEXT_WHITE))
        table.add_column("Slug", style=Style(color=MUTED_GRAY))

        for record in self.records:
            table.add_row(
                Text(record.date),
                Text(record.level.value, style=get_level_style(record.level)),
                DOMAIN_LABELS[record.domain],
                Text(record.title),
                Text(record.slug),
            )

        return Panel(
            Align.center(table),
            title=Text(f"{self.title} ({len(self.records)})"),
            border_style=BRAND_YELLOW,
            box=box.HEAVY,
            padding=(1, 1),
        )

    def __rich__(self) -> Panel:
        return self.render()


class ExercisePanel:
    """Full view of one exercise: questions and answer key."""

    def __init__(self, record: ExerciseRecord):
        self.record = record

    def render(self) -> Panel:
        record = self.record
        content = Text()

        content.append(f"{LEVEL_EMOJIS[record.level]} ", Style())
        content.append(record.level.value, get_level_style(record.level))
        content.append(f"  {DOMAIN_LABELS[record.domain]}", Style(color=MUTED_GRAY))
        content.append(
            f"  ~{estimate_minutes(len(record.questions), record.level)} min\n\n",
            Style(color=MUTED_GRAY),
        )
        content.append(f"{record.h1}\n", Style(color=BRAND_BLUE, bold=True))
        content.append(f"{record.instruction}\n\n", Style(color=TEXT_WHITE))

        for index, question in enumerate(record.questions, start=1):
            content.append(f"{index}. ", Style(color=BRAND_YELLOW, bold=True))
            content.append(question.prompt, Style(color=TEXT_WHITE))
            if question.pair:
                content.append(f"  ↔ {question.pair}", Style(color=MUTED_GRAY))
            content.append("\n")

        content.append("\nCorrection\n", Style(color=BRAND_YELLOW, bold=True))
        correction = record.correction
        if isinstance(correction, ListCorrection):
            for index, value in enumerate(correction.v, start=1):
                content.append(f"{index}. {value}\n", Style(color=SUCCESS_GREEN))
        elif isinstance(correction, ShortTextCorrection):
            content.append(f"{correction.v}\n", Style(color=SUCCESS_GREEN))
        else:
            raise TypeError(f"Unsupported correction: {correction!r}")

        return Panel(
            Align.left(content),
            title=Text(record.title),
            subtitle=Text(record.slug),
            border_style=BRAND_BLUE,
            box=box.HEAVY,
            padding=(1, 2),
        )

    def __rich__(self) -> Panel:
        return self.render()
