"""Abstract repository interface for the content store."""

from abc import ABC, abstractmethod
from pathlib import Path

from models import ExerciseRecord


class ExerciseRepository(ABC):
    """Abstract interface for exercise record storage."""

    @abstractmethod
    def get_all(self) -> list[ExerciseRecord]:
        """Load every valid exercise record.

        Unreadable or invalid entries are skipped and reported, never raised.

        Returns:
            List of valid records, in storage order.
        """
        pass

    @abstractmethod
    def get_by_slug(self, slug: str) -> ExerciseRecord | None:
        """Load a single record by slug.

        Args:
            slug: The record slug.

        Returns:
            The record, or None if not found.
        """
        pass

    @abstractmethod
    def save(self, record: ExerciseRecord, overwrite: bool = False) -> Path:
        """Persist a record.

        Args:
            record: The record to save.
            overwrite: Replace an existing record with the same slug.

        Returns:
            Location of the saved record.

        Raises:
            InvalidExerciseError: If the record does not validate.
            FileExistsError: If the slug is taken and overwrite is False.
        """
        pass
