"""
Module: marks_toolkit.cli

Purpose:
    Command line entry point over a JSON markbook.

Commands:
    ingest   Convert and save a batch of raw scores for one test
    report   Write the class statement PDF for one test and class
    card     Write a student report card PDF
    pending  List students of a class with no mark for a test

Exit status is 1 when a toolkit error (bad document, unknown test, empty
class, ...) stops the command, 0 otherwise. A batch with rejected entries
still exits 0; the rejections are logged.

Example:
    marks-toolkit ingest --store markbook.json --test T1 --entries marks.csv
    marks-toolkit report --store markbook.json --test T1 --class CSE-A -o T1.pdf
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from marks_toolkit import __version__
from marks_toolkit.core.schemas import ValidationError
from marks_toolkit.core.utils import load_entries
from marks_toolkit.ingest import IngestError, ingest_for_test
from marks_toolkit.report import (
    ReportConfig,
    ReportError,
    build_class_report,
    build_student_card,
)
from marks_toolkit.store import JsonMarkStore, StoreError

logger = logging.getLogger("marks_toolkit.cli")

TOOLKIT_ERRORS = (ValidationError, StoreError, IngestError, ReportError, FileNotFoundError)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marks-toolkit",
        description="Internal assessment marks: ingestion and class statements",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p_ingest = sub.add_parser("ingest", help="Save raw scores for one test")
    p_ingest.add_argument("--store", required=True, type=Path, help="Markbook JSON file")
    p_ingest.add_argument("--test", required=True, help="Test id")
    p_ingest.add_argument("--entries", required=True, type=Path,
                          help="JSON array or CSV of student_id, raw_score, remarks")
    p_ingest.add_argument("--actor", default=None, help="Recorded as added_by on new records")
    p_ingest.add_argument("--create", action="store_true",
                          help="Create the markbook if it does not exist")

    p_report = sub.add_parser("report", help="Write the class statement PDF")
    p_report.add_argument("--store", required=True, type=Path, help="Markbook JSON file")
    p_report.add_argument("--test", required=True, help="Test id")
    p_report.add_argument("--class", dest="class_label", required=True, help="Class label")
    p_report.add_argument("-o", "--output", required=True, type=Path, help="PDF path")
    _add_branding(p_report)

    p_card = sub.add_parser("card", help="Write a student report card PDF")
    p_card.add_argument("--store", required=True, type=Path, help="Markbook JSON file")
    p_card.add_argument("--student", required=True, help="Student id")
    p_card.add_argument("-o", "--output", required=True, type=Path, help="PDF path")
    _add_branding(p_card)

    p_pending = sub.add_parser("pending", help="List students without a mark for a test")
    p_pending.add_argument("--store", required=True, type=Path, help="Markbook JSON file")
    p_pending.add_argument("--test", required=True, help="Test id")
    p_pending.add_argument("--class", dest="class_label", default=None,
                           help="Only students of this class")

    return parser


def _add_branding(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--institution", default=None, help="Institution name in the header")
    parser.add_argument("--logo", type=Path, default=None, help="Logo image for the header")
    parser.add_argument("--no-footer", action="store_true", help="Omit the version footer")


def _report_config(args: argparse.Namespace) -> ReportConfig:
    kwargs = {"logo_path": args.logo, "show_footer": not args.no_footer}
    if args.institution:
        kwargs["institution_name"] = args.institution
    try:
        return ReportConfig(**kwargs)
    except ValueError as e:
        raise ReportError(str(e)) from e


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

def cmd_ingest(args: argparse.Namespace) -> int:
    store = JsonMarkStore(args.store, create=args.create)
    entries = load_entries(args.entries)
    logger.debug(f"Loaded {len(entries)} entries from {args.entries}")

    result = ingest_for_test(store, args.test, entries, actor_id=args.actor)
    for rejected in result.rejected:
        logger.info(f"  {rejected.student_id}: {rejected.error}")
    logger.info(result.message)
    return 0


def cmd_report(args: argparse.Namespace) -> int:
    store = JsonMarkStore(args.store)
    document = build_class_report(
        store, args.test, args.class_label, config=_report_config(args)
    )
    document.write(args.output)
    logger.info(f"Class statement written to {args.output}")
    return 0


def cmd_card(args: argparse.Namespace) -> int:
    store = JsonMarkStore(args.store)
    pdf_bytes = build_student_card(store, args.student, config=_report_config(args))
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(pdf_bytes)
    logger.info(f"Report card written to {args.output}")
    return 0


def cmd_pending(args: argparse.Namespace) -> int:
    store = JsonMarkStore(args.store)
    if store.get_test(args.test) is None:
        raise ReportError(f"Test not found: {args.test}")

    students = store.students_without_marks(args.test)
    if args.class_label:
        students = [s for s in students if s.class_label == args.class_label]

    for student in students:
        print(f"{student.roll_no}\t{student.id}\t{student.name}")
    logger.info(f"{len(students)} students without marks for {args.test}")
    return 0


COMMANDS = {
    "ingest": cmd_ingest,
    "report": cmd_report,
    "card": cmd_card,
    "pending": cmd_pending,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(message)s',
    )

    try:
        return COMMANDS[args.command](args)
    except TOOLKIT_ERRORS as e:
        logger.error(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
