"""
Requirement Report

Renders a SetupTestResult as a two-level rich tree.
"""

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from .models import CheckOutcome, SetupTestResult


def format_outcome(outcome: CheckOutcome) -> str:
    """Plain text line for one outcome."""
    glyph = "✓" if outcome.passed else "✗"
    return f"{glyph} {outcome.status} ({outcome.duration:.3f} sec): {outcome.message}"


def build_report_tree(result: SetupTestResult) -> Tree:
    """
    Build the report tree for a result.

    The root carries the total duration, each child one check.
    """
    tree = Tree(Text(f"Setup ({result.total_duration:.3f} sec)", style="bold"))
    for outcome in result.outcomes:
        style = "bold green" if outcome.passed else "bold red"
        tree.add(Text(format_outcome(outcome), style=style))
    return tree


def render_report(result: SetupTestResult, console: Console) -> None:
    console.print(build_report_tree(result))
