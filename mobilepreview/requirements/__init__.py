"""
Requirements Module

Validates the development environment before a preview is launched.
"""

from .models import CheckOutcome, RequirementCheck, SetupTestResult
from .engine import RequirementsEngine
from .report import build_report_tree, render_report

__all__ = [
    "RequirementsEngine",
    "RequirementCheck",
    "CheckOutcome",
    "SetupTestResult",
    "build_report_tree",
    "render_report",
]
