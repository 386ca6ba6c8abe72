"""Small content helpers shared by generators, the writer and the CLI."""

import math
import re
import unicodedata
from datetime import date as Date
from pathlib import Path

from models import ExerciseRecord, Level

SLUG_BODY_MAX_LENGTH = 50

# Minutes per question; younger pupils need more time per item
MINUTES_PER_QUESTION: dict[Level, float] = {
    Level.CP: 0.75,
    Level.CE1: 0.5,
    Level.CE2: 0.4,
}


def generate_slug(title: str, date: str) -> str:
    """Build a record slug from its title, prefixed with the compact date.

    Examples:
        generate_slug("Les articles définis CP", "2024-09-02")
        -> "20240902-les-articles-definis-cp"
    """
    prefix = date.replace("-", "")[:8]
    body = unicodedata.normalize("NFD", title.lower())
    body = "".join(char for char in body if not unicodedata.combining(char))
    body = re.sub(r"[^a-z0-9\s-]", "", body)
    body = re.sub(r"\s+", "-", body.strip())
    body = re.sub(r"-+", "-", body)[:SLUG_BODY_MAX_LENGTH].strip("-")
    return f"{prefix}-{body}" if body else prefix


def seasonal_theme(day: Date | None = None) -> str:
    """Return the seasonal theme for a publication date."""
    day = day or Date.today()
    month, dom = day.month, day.day

    if month == 12 and dom >= 15:
        return "Noël"
    if month == 1 and dom <= 6:
        return "Nouvel An"
    if month == 2 and 10 <= dom <= 14:
        return "Saint-Valentin"
    if month == 10 and dom >= 25:
        return "Halloween"
    if month == 4 and dom <= 15:
        return "Pâques"

    if 3 <= month <= 5:
        return "Printemps"
    if 6 <= month <= 8:
        return "Été"
    if 9 <= month <= 11:
        return "Automne"
    return "Hiver"


def estimate_minutes(question_count: int, level: Level | str) -> int:
    """Estimated completion time in whole minutes."""
    return math.ceil(question_count * MINUTES_PER_QUESTION[Level(level)])


def content_path(root: Path, record: ExerciseRecord) -> Path:
    """Location of a record in the content tree: ``<root>/<year>/<month>/<slug>.json``."""
    year, month = record.year_month
    return root / year / month / f"{record.slug}.json"
