"""Tests for the render_entry command line."""

import json

import pytest

import render_entry
from entries import Entry


@pytest.fixture
def export_file(tmp_path, block_record, legacy_record):
    path = tmp_path / "entries.json"
    path.write_text(json.dumps([block_record, legacy_record]), encoding="utf-8")
    return path


def test_single_entry_to_stdout(tmp_path, capsys, block_record):
    path = tmp_path / "entry.json"
    path.write_text(json.dumps(block_record), encoding="utf-8")

    assert render_entry.main(["-i", str(path), "--site-url", "https://example.org"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("<!DOCTYPE html>")
    assert "https://example.org/#entry-blocks-1" in out


def test_entry_id_to_output_file(tmp_path, export_file):
    output = tmp_path / "out.html"
    code = render_entry.main(["-i", str(export_file), "--entry-id", "entry-legacy-1", "-o", str(output)])

    assert code == 0
    html = output.read_text(encoding="utf-8")
    assert "Old sketch" in html
    assert "New tape" not in html


def test_output_dir_writes_one_file_per_entry(tmp_path, export_file):
    out_dir = tmp_path / "email"
    assert render_entry.main(["-i", str(export_file), "--output-dir", str(out_dir)]) == 0

    assert sorted(p.name for p in out_dir.iterdir()) == ["entry-blocks-1.html", "entry-legacy-1.html"]


def test_email_only_filters_on_publish_flag(tmp_path, export_file):
    out_dir = tmp_path / "email"
    assert render_entry.main(["-i", str(export_file), "--output-dir", str(out_dir), "--email-only"]) == 0

    assert [p.name for p in out_dir.iterdir()] == ["entry-blocks-1.html"]


def test_no_match_exits_with_error(export_file, capsys):
    assert render_entry.main(["-i", str(export_file), "--entry-id", "missing"]) == 1
    assert "no matching entries" in capsys.readouterr().err


def test_bad_input_exits_with_error(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")

    assert render_entry.main(["-i", str(path)]) == 1
    assert "could not load" in capsys.readouterr().err


def test_record_without_title_exits_with_error(tmp_path, capsys):
    path = tmp_path / "untitled.json"
    path.write_text(json.dumps({"_id": "x"}), encoding="utf-8")

    assert render_entry.main(["-i", str(path)]) == 1
    assert "has no title" in capsys.readouterr().err


def test_select_entries():
    entries = [Entry(id="a", title="A", publish_to_email=True), Entry(id="b", title="B")]
    assert [e.id for e in render_entry.select_entries(entries)] == ["a", "b"]
    assert [e.id for e in render_entry.select_entries(entries, entry_id="b")] == ["b"]
    assert render_entry.select_entries(entries, entry_id="b", email_only=True) == []
