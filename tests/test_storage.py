"""Tests for the JSON content store."""

import json
import logging

import pytest

from exercises import InvalidExerciseError, RecordParseError, content_path
from models import ExerciseRecord
from storage import (
    ExerciseRepository,
    JSONExerciseRepository,
    get_exercise_repo,
    iter_record_files,
    load_all,
    read_candidate,
)
from storage.filesystem import CONTENT_DIR_ENV, DEFAULT_CONTENT_DIR, default_content_dir

from conftest import build_raw_record, write_record


class TestLoadAll:
    """Tests for best-effort loading of a content tree."""

    def test_missing_root_yields_empty_list(self, tmp_path):
        """Should not fail when the content directory does not exist."""
        assert load_all(tmp_path / "nowhere") == []

    def test_loads_nested_files_in_path_order(self, content_root):
        """Should walk year/month folders and return typed records."""
        write_record(content_root, build_raw_record(slug="b-second", date="2024-10-01"))
        write_record(content_root, build_raw_record(slug="a-first", date="2024-09-02"))

        records = load_all(content_root)

        assert [record.slug for record in records] == ["a-first", "b-second"]
        assert all(isinstance(record, ExerciseRecord) for record in records)

    def test_parse_failure_is_isolated(self, content_root, caplog):
        """Should return the 10 valid records and report the corrupt file once."""
        for n in range(10):
            write_record(content_root, build_raw_record(slug=f"exercice-{n:02d}"))
        corrupt = content_root / "2024" / "09" / "corrupt.json"
        corrupt.write_text('{"date": "2024-09-02", ', encoding="utf-8")

        reported = []
        with caplog.at_level(logging.WARNING, logger="storage.filesystem"):
            records = load_all(
                content_root,
                reporter=lambda path, issues: reported.append((path, issues)),
            )

        assert len(records) == 10
        assert len(reported) == 1
        path, issues = reported[0]
        assert path == corrupt
        assert issues[0].field == "file"
        assert "invalid JSON" in issues[0].message
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "corrupt.json" in warnings[0].getMessage()

    def test_invalid_records_are_dropped_and_reported(self, content_root):
        """Should skip records failing validation and report their errors."""
        write_record(content_root, build_raw_record(slug="valide"))
        write_record(content_root, build_raw_record(5, slug="trop-court"))

        reported = {}
        records = load_all(
            content_root, reporter=lambda path, issues: reported.update({path.name: issues})
        )

        assert [record.slug for record in records] == ["valide"]
        assert list(reported) == ["trop-court.json"]

    @pytest.mark.parametrize(
        "payload",
        [
            pytest.param('{"x": ' + "1" * 5000 + "}", id="oversized-integer"),
            pytest.param("[" * 200000 + "]" * 200000, id="deep-nesting"),
        ],
    )
    def test_decoder_limits_are_isolated(self, content_root, payload):
        """Should skip files the JSON decoder gives up on and keep the others."""
        for n in range(3):
            write_record(content_root, build_raw_record(slug=f"exercice-{n}"))
        broken = content_root / "2024" / "09" / "enorme.json"
        broken.write_text(payload, encoding="utf-8")

        reported = []
        records = load_all(
            content_root,
            reporter=lambda path, issues: reported.append((path, issues)),
        )

        assert len(records) == 3
        assert len(reported) == 1
        path, issues = reported[0]
        assert path == broken
        assert issues[0].field == "file"
        assert "invalid JSON" in issues[0].message
        assert reported["trop-court.json"][0].field == "questions"

    def test_non_object_document_is_skipped(self, content_root):
        """Should skip a JSON file whose top level is not an object."""
        (content_root / "liste.json").write_text("[1, 2, 3]", encoding="utf-8")
        write_record(content_root, build_raw_record())
        assert len(load_all(content_root)) == 1

    def test_ignores_other_extensions(self, content_root):
        """Should only read .json files."""
        (content_root / "notes.md").write_text("# notes", encoding="utf-8")
        write_record(content_root, build_raw_record())
        assert iter_record_files(content_root) == [
            content_root / "2024" / "09" / "20240902-additions-cp.json"
        ]

    def test_accepts_any_json_layout(self, content_root):
        """Should load compact JSON with a UTF-8 BOM."""
        raw = build_raw_record()
        path = content_root / "compact.json"
        path.write_text("\ufeff" + json.dumps(raw, separators=(",", ":")), encoding="utf-8")
        assert load_all(content_root)[0].slug == raw["slug"]


class TestReadCandidate:
    """Tests for single-file parsing."""

    def test_invalid_json_raises_parse_error(self, tmp_path):
        """Should wrap JSON errors in RecordParseError."""
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(RecordParseError) as excinfo:
            read_candidate(path)
        assert excinfo.value.path == path

    def test_undecodable_bytes_raise_parse_error(self, tmp_path):
        """Should report non UTF-8 files as parse errors."""
        path = tmp_path / "latin1.json"
        path.write_bytes('{"title": "Noël"}'.encode("latin-1"))
        with pytest.raises(RecordParseError):
            read_candidate(path)


class TestJSONExerciseRepository:
    """Tests for the repository implementation."""

    def test_is_a_repository(self, content_root):
        """Should implement the abstract interface."""
        assert isinstance(get_exercise_repo(content_root), ExerciseRepository)

    def test_check_all_includes_invalid_files(self, content_root):
        """Should return one check per file, parse failures included."""
        write_record(content_root, build_raw_record(slug="valide"))
        (content_root / "vide.json").write_text("", encoding="utf-8")

        checks = JSONExerciseRepository(content_root).check_all()

        by_name = {check.path.name: check for check in checks}
        assert by_name["valide.json"].record is not None
        assert by_name["valide.json"].parsed is True
        assert by_name["vide.json"].record is None
        assert by_name["vide.json"].parsed is False

    def test_get_by_slug(self, content_root):
        """Should find a record by slug or return None."""
        write_record(content_root, build_raw_record(slug="cherche-moi"))
        repo = JSONExerciseRepository(content_root)
        assert repo.get_by_slug("cherche-moi").slug == "cherche-moi"
        assert repo.get_by_slug("absent") is None

    def test_save_writes_year_month_layout(self, content_root, record):
        """Should write <root>/<year>/<month>/<slug>.json with 2-space indent."""
        repo = JSONExerciseRepository(content_root)
        path = repo.save(record)

        assert path == content_root / "2024" / "09" / f"{record.slug}.json"
        assert path == content_path(content_root, record)
        text = path.read_text(encoding="utf-8")
        assert text.startswith('{\n  "date": "2024-09-02"')
        assert "entraîne-toi" in text
        assert repo.get_all() == [record]

    def test_save_refuses_slug_collision(self, content_root, record):
        """Should not overwrite an existing record unless asked to."""
        repo = JSONExerciseRepository(content_root)
        repo.save(record)
        with pytest.raises(FileExistsError):
            repo.save(record)

        updated = record.model_copy(update={"theme": "Halloween"})
        repo.save(updated, overwrite=True)
        assert repo.get_by_slug(record.slug).theme == "Halloween"

    def test_save_rejects_invalid_record(self, content_root, record):
        """Should validate before writing anything."""
        broken = record.model_copy(update={"questions": record.questions[:3]})
        repo = JSONExerciseRepository(content_root)
        with pytest.raises(InvalidExerciseError):
            repo.save(broken)
        assert iter_record_files(content_root) == []


class TestDefaultContentDir:
    """Tests for content root configuration."""

    def test_default(self, monkeypatch):
        """Should fall back to content/exercises in the project."""
        monkeypatch.delenv(CONTENT_DIR_ENV, raising=False)
        assert default_content_dir() == DEFAULT_CONTENT_DIR

    def test_environment_override(self, monkeypatch, tmp_path):
        """Should honour EXERCISES_ROOT."""
        monkeypatch.setenv(CONTENT_DIR_ENV, str(tmp_path))
        assert default_content_dir() == tmp_path
        assert JSONExerciseRepository().root == tmp_path
