"""
Tests for the marks-toolkit command line.

Drives main() end to end against a JSON markbook in tmp_path.
"""

import json
import logging
import pytest

from pypdf import PdfReader

from marks_toolkit.cli import build_parser, main
from marks_toolkit.store import JsonMarkStore


@pytest.fixture
def markbook(tmp_path, students, cycle_test):
    path = tmp_path / "markbook.json"
    store = JsonMarkStore(path, create=True)
    for student in students:
        store.add_student(student)
    store.add_test(cycle_test)
    return path


@pytest.fixture
def entries_csv(tmp_path):
    path = tmp_path / "marks.csv"
    path.write_text("student_id,raw_score,remarks\nS1,40,\nS2,25,\nS3,,absent\nGHOST,30,\n")
    return path


class TestCli:
    """End-to-end CLI tests."""

    def test_ingest_when_csv_then_saves_and_reports_failures(self, markbook, entries_csv, caplog):
        caplog.set_level(logging.INFO)

        code = main(["ingest", "--store", str(markbook), "--test", "T1",
                     "--entries", str(entries_csv), "--actor", "faculty-7"])

        assert code == 0
        assert "Saved marks for 2 students, 1 failed" in caplog.text
        marks = json.loads(markbook.read_text())["marks"]
        assert sorted(m["student_id"] for m in marks) == ["S1", "S2"]

    def test_ingest_when_unknown_test_then_exit_1(self, markbook, entries_csv, caplog):
        code = main(["ingest", "--store", str(markbook), "--test", "T9",
                     "--entries", str(entries_csv)])

        assert code == 1
        assert "Test not found: T9" in caplog.text

    def test_ingest_when_store_missing_then_exit_1(self, tmp_path, entries_csv):
        code = main(["ingest", "--store", str(tmp_path / "none.json"), "--test", "T1",
                     "--entries", str(entries_csv)])

        assert code == 1

    def test_report_when_marked_then_writes_pdf(self, markbook, entries_csv, tmp_path):
        main(["ingest", "--store", str(markbook), "--test", "T1", "--entries", str(entries_csv)])
        output = tmp_path / "reports" / "T1_CSE-A.pdf"

        code = main(["report", "--store", str(markbook), "--test", "T1",
                     "--class", "CSE-A", "--output", str(output),
                     "--institution", "ABC COLLEGE"])

        assert code == 0
        text = PdfReader(str(output)).pages[0].extract_text()
        assert "ABC COLLEGE" in text

    def test_report_when_class_without_marks_then_exit_1(self, markbook, tmp_path, caplog):
        code = main(["report", "--store", str(markbook), "--test", "T1",
                     "--class", "CSE-A", "-o", str(tmp_path / "x.pdf")])

        assert code == 1
        assert "No marks found" in caplog.text
        assert not (tmp_path / "x.pdf").exists()

    def test_report_when_logo_missing_then_exit_1(self, markbook, tmp_path):
        code = main(["report", "--store", str(markbook), "--test", "T1", "--class", "CSE-A",
                     "-o", str(tmp_path / "x.pdf"), "--logo", str(tmp_path / "nope.png")])

        assert code == 1

    def test_card_when_student_then_writes_pdf(self, markbook, entries_csv, tmp_path):
        main(["ingest", "--store", str(markbook), "--test", "T1", "--entries", str(entries_csv)])
        output = tmp_path / "S1.pdf"

        code = main(["card", "--store", str(markbook), "--student", "S1", "-o", str(output)])

        assert code == 0
        assert output.read_bytes().startswith(b"%PDF-")

    def test_pending_when_partially_marked_then_lists_rest(self, markbook, entries_csv, capsys):
        main(["ingest", "--store", str(markbook), "--test", "T1", "--entries", str(entries_csv)])
        capsys.readouterr()

        code = main(["pending", "--store", str(markbook), "--test", "T1", "--class", "CSE-A"])

        assert code == 0
        out = capsys.readouterr().out
        assert "S3" in out
        assert "S1" not in out
        assert "S4" not in out

    def test_parser_when_no_command_then_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])
