"""Read-only views over a loaded exercise collection.

The catalog holds the list it was given and never reloads it; build a new
catalog after the content tree changes.
"""

from collections.abc import Iterable
from pathlib import Path

from exercises.config import DEFAULT_CONFIG, ValidatorConfig
from models import Domain, ExerciseRecord, Level

from .filesystem import IssueReporter, load_all

# Relatedness weights: level proximity matters more than subject proximity
LEVEL_MATCH_SCORE = 2
DOMAIN_MATCH_SCORE = 1


class ExerciseCatalog:
    """Filters, search and rankings over exercise records."""

    def __init__(self, records: Iterable[ExerciseRecord]):
        self.records = list(records)

    @classmethod
    def from_directory(
        cls,
        root: Path,
        config: ValidatorConfig = DEFAULT_CONFIG,
        reporter: IssueReporter | None = None,
    ) -> "ExerciseCatalog":
        """Load a content tree and wrap the valid records."""
        return cls(load_all(root, config=config, reporter=reporter))

    def __len__(self) -> int:
        return len(self.records)

    def by_level(self, level: Level | str) -> list[ExerciseRecord]:
        level = Level(level)
        return [record for record in self.records if record.level == level]

    def by_domain(self, domain: Domain | str) -> list[ExerciseRecord]:
        domain = Domain(domain)
        return [record for record in self.records if record.domain == domain]

    def by_level_and_domain(
        self, level: Level | str, domain: Domain | str
    ) -> list[ExerciseRecord]:
        level, domain = Level(level), Domain(domain)
        return [
            record
            for record in self.records
            if record.level == level and record.domain == domain
        ]

    def by_slug(self, slug: str) -> ExerciseRecord | None:
        """First record with this slug, or None."""
        for record in self.records:
            if record.slug == slug:
                return record
        return None

    def recent(self, count: int = 10) -> list[ExerciseRecord]:
        """Most recent records first; equal dates keep collection order."""
        # ISO dates sort chronologically as strings
        ordered = sorted(self.records, key=lambda record: record.date, reverse=True)
        return ordered[: max(count, 0)]

    def search(self, query: str) -> list[ExerciseRecord]:
        """Case-insensitive substring search on title, h1, skill and SEO tags."""
        needle = query.casefold()
        return [record for record in self.records if self._matches(record, needle)]

    @staticmethod
    def _matches(record: ExerciseRecord, needle: str) -> bool:
        haystacks = [record.title, record.h1, record.skill, *record.seo.tags]
        return any(needle in text.casefold() for text in haystacks)

    def related(self, record: ExerciseRecord, count: int = 3) -> list[ExerciseRecord]:
        """Other records sharing the level or the domain, best matches first.

        Score is 2 for the same level plus 1 for the same domain; ties keep
        collection order.
        """
        scored = []
        for candidate in self.records:
            if candidate.slug == record.slug:
                continue
            score = self._relatedness(record, candidate)
            if score > 0:
                scored.append((score, candidate))

        scored.sort(key=lambda item: item[0], reverse=True)
        return [candidate for _, candidate in scored[: max(count, 0)]]

    @staticmethod
    def _relatedness(record: ExerciseRecord, candidate: ExerciseRecord) -> int:
        score = 0
        if candidate.level == record.level:
            score += LEVEL_MATCH_SCORE
        if candidate.domain == record.domain:
            score += DOMAIN_MATCH_SCORE
        return score

    def count_by_level(self) -> dict[Level, int]:
        """Record count per level, every level included."""
        counts = {level: 0 for level in Level}
        for record in self.records:
            counts[record.level] += 1
        return counts

    def count_by_domain(self) -> dict[Domain, int]:
        """Record count per domain, every domain included."""
        counts = {domain: 0 for domain in Domain}
        for record in self.records:
            counts[record.domain] += 1
        return counts
