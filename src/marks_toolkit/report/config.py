"""
Module: report.config

Purpose:
    Configuration dataclass for report generation. Immutable configuration
    with validation on construction.

Key Classes:
    - ReportConfig: Institution branding, signature roles, layout

Dependencies:
    - dataclasses (std)
    - pathlib (std)

Used By:
    - report.controller: Class statement and report card
    - marks_toolkit.cli: Built from command line flags
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .layout.config import LayoutConfig


DEFAULT_SIGNATURE_ROLES = (
    "HoD Signature",
    "VP Exams Signature",
    "DEAN, FET Signature",
)


@dataclass(frozen=True)
class ReportConfig:
    """
    Configuration for report generation (immutable).

    Attributes:
        institution_name: Printed in the header band
        report_title: Printed after the institution name on class statements
        card_title: Second header line of student report cards
        logo_path: Optional image drawn at the left of the header band
        signature_roles: Captions of the signature boxes, top to bottom
        show_footer: Print the "Generated with" footer
        date_format: strftime format of the generation date
        layout: Page geometry, fonts and colours

    Example:
        >>> config = ReportConfig(institution_name="SRM INSTITUTE")
        >>> config.header_title
        'SRM INSTITUTE - MARKS EVALUATION REPORT'
    """

    institution_name: str = "SRM INSTITUTE"
    report_title: str = "MARKS EVALUATION REPORT"
    card_title: str = "STUDENT REPORT CARD"
    logo_path: Optional[Path] = None
    signature_roles: tuple[str, ...] = DEFAULT_SIGNATURE_ROLES

    # Footer
    show_footer: bool = True  # Show version footer on each page

    date_format: str = "%d/%m/%Y"
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.institution_name.strip():
            raise ValueError("institution_name must not be empty")
        if not self.signature_roles:
            raise ValueError("signature_roles must not be empty")
        if self.logo_path is not None and not Path(self.logo_path).exists():
            raise ValueError(f"logo_path does not exist: {self.logo_path}")

    @property
    def header_title(self) -> str:
        if not self.report_title:
            return self.institution_name
        return f"{self.institution_name} - {self.report_title}"
