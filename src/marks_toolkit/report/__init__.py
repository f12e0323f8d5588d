"""
Module: report

Purpose:
    Class statement and student report card generation.
    Plans a fixed A4 page (report.layout) then draws it with ReportLab
    (report.output).

Key Functions:
    - build_class_report(): Main entry point for class statements
    - render(): Roster + statistics -> ReportDocument
    - build_student_card(): Report card for one student

Key Classes:
    - ReportConfig: Branding, signature roles, layout
    - ReportDocument: Rendered PDF bytes with their plan
    - ClassReport: Roster and statistics of one statement

Dependencies:
    - reportlab: PDF generation
    - PIL: Logo image
    - marks_toolkit.stats: Class statistics

Used By:
    - marks_toolkit.cli: report / card sub-commands
"""

from .layout import CardPlan, LayoutConfig, ReportPlan
from .config import ReportConfig
from .models import ClassReport, ReportDocument
from .controller import (
    ReportError,
    build_class_report,
    build_student_card,
    load_class_report,
    render,
)

__all__ = [
    # Config
    "LayoutConfig",
    "ReportConfig",
    # Plans
    "CardPlan",
    "ReportPlan",
    # Models
    "ClassReport",
    "ReportDocument",
    # Controller
    "ReportError",
    "build_class_report",
    "build_student_card",
    "load_class_report",
    "render",
]
