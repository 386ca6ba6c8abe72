"""Shared pytest fixtures for the exercise content test suite."""

import copy
import json
import pytest

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from exercises import parse_record
from models import ExerciseRecord


def build_raw_record(
    question_count: int = 8,
    *,
    level: str = "CP",
    domain: str = "maths",
    slug: str = "20240902-additions-cp",
    date: str = "2024-09-02",
    title: str = "Additions CP",
    skill: str = "Calculer des additions",
    tags: list[str] | None = None,
    exercise_type: str = "calcul-mental",
) -> dict:
    """Build a raw record (as parsed from JSON) that passes every check."""
    questions = [
        {"prompt": f"{n} + 1 = ?", "answer": str(n + 1)}
        for n in range(1, question_count + 1)
    ]
    return {
        "date": date,
        "level": level,
        "domain": domain,
        "skill": skill,
        "type": exercise_type,
        "theme": "Automne",
        "title": title,
        "slug": slug,
        "h1": f"{title} : entraîne-toi",
        "instruction": "Trouve le résultat de chaque addition.",
        "questions": questions,
        "correction": {"mode": "list", "v": [q["answer"] for q in questions]},
        "seo": {
            "title": "Additions pour le CP : exercices corrigés",
            "description": (
                "Des additions simples pour les élèves de CP, avec la correction "
                "complète pour s'entraîner en autonomie à la maison."
            ),
            "tags": tags if tags is not None else ["additions", "calcul"],
            "internalLinks": [],
            "nextSuggestions": [],
        },
    }


def build_matching_record(answers: list[str], pairs: list[str | None]) -> dict:
    """Build a valid-looking "relier" record from answers and pairs."""
    raw = build_raw_record(len(answers), domain="francais", exercise_type="relier")
    raw["questions"] = [
        {"prompt": f"Mot {i + 1}", "answer": answer}
        for i, answer in enumerate(answers)
    ]
    for question, pair in zip(raw["questions"], pairs):
        if pair is not None:
            question["pair"] = pair
    raw["correction"]["v"] = list(answers)
    return raw


def write_record(root: Path, raw: dict, name: str | None = None) -> Path:
    """Write a raw record under root/<year>/<month>/<slug>.json."""
    year, month, _ = str(raw.get("date", "2024-01-01")).split("-", 2)
    folder = root / year / month
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / (name or f"{raw['slug']}.json")
    path.write_text(json.dumps(raw, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def raw_record() -> dict:
    """A valid CP record with 8 questions, as untyped JSON data."""
    return build_raw_record()


@pytest.fixture
def record(raw_record) -> ExerciseRecord:
    """The typed version of raw_record."""
    return parse_record(copy.deepcopy(raw_record))


@pytest.fixture
def content_root(tmp_path) -> Path:
    """An empty content tree."""
    root = tmp_path / "content" / "exercises"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def catalog_records() -> list[ExerciseRecord]:
    """Records spread over levels, domains and dates for query tests."""
    specs = [
        ("20240101-additions-cp", "2024-01-01", "CP", "maths", "Additions CP", ["calcul"]),
        ("20240301-articles-ce1", "2024-03-01", "CE1", "francais", "Les articles", ["grammaire"]),
        ("20240201-saisons-cp", "2024-02-01", "CP", "questionner-le-monde", "Les saisons", ["saisons"]),
        ("20240301-tables-ce2", "2024-03-01", "CE2", "maths", "Tables de 2", ["multiplication"]),
    ]
    records = []
    for slug, date, level, domain, title, tags in specs:
        count = {"CP": 6, "CE1": 8, "CE2": 12}[level]
        raw = build_raw_record(
            count,
            level=level,
            domain=domain,
            slug=slug,
            date=date,
            title=title,
            tags=tags,
        )
        records.append(parse_record(raw))
    return records
