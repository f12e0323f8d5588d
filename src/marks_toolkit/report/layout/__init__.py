"""
Module: report.layout

Purpose:
    Page geometry for the class statement and the student report card.
    Produces immutable plans in millimetres; nothing here draws.

Key Functions:
    - plan_report(): Class statement -> ReportPlan
    - plan_card(): Student report card -> CardPlan
    - build_roster() / split_roster(): Roster ordering and halves
    - plan_chart(): Performance chart geometry

Key Classes:
    - LayoutConfig: Geometry, fonts and colours
    - ReportPlan / CardPlan: Complete page layouts

Dependencies:
    - reportlab.pdfbase.pdfmetrics: Text width measurement

Used By:
    - report.controller: render(), build_class_report()
    - report.output: Renderers
"""

from .config import LayoutConfig
from .models import (
    CardPlan,
    ChartPlan,
    ChartPoint,
    ChartTick,
    HeaderBand,
    ReportPlan,
    SignatureBlock,
    SummaryBlock,
    SummaryRow,
    TablePlan,
    TextItem,
)
from .roster import RosterLine, build_roster, split_roster, plan_roster_tables
from .chart import plan_chart, value_to_y
from .planner import plan_report
from .card import plan_card

__all__ = [
    # Config
    "LayoutConfig",
    # Models
    "CardPlan",
    "ChartPlan",
    "ChartPoint",
    "ChartTick",
    "HeaderBand",
    "ReportPlan",
    "SignatureBlock",
    "SummaryBlock",
    "SummaryRow",
    "TablePlan",
    "TextItem",
    # Functions
    "RosterLine",
    "build_roster",
    "split_roster",
    "plan_roster_tables",
    "plan_chart",
    "value_to_y",
    "plan_report",
    "plan_card",
]
