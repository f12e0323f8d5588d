"""
Module: report.output

Purpose:
    PDF rendering of report plans using ReportLab.

Key Functions:
    - render_plan(): Class statement plan -> PDF bytes
    - render_card(): Report card plan -> PDF bytes
    - render_student_card(): Student + marks -> PDF bytes

Dependencies:
    - reportlab: PDF generation
    - PIL: Logo image

Used By:
    - report.controller: Pipeline orchestration
"""

from .renderer import render_plan, render_card
from .student_card import render_student_card

__all__ = [
    "render_plan",
    "render_card",
    "render_student_card",
]
