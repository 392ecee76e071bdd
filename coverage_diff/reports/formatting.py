import logging
from typing import List, Optional, Sequence

from coverage_diff.helpers.numeric import format_number, trunc_percentage
from coverage_diff.reports.types import (
    CoverageChange,
    CoverageStats,
    FileCoverageDiff,
    StatsDiff,
    TotalCoverageDiff,
)

log = logging.getLogger(__name__)

DEFAULT_HEADING = "## Coverage difference"
TOTALS_HEADING = "### Total coverage"
NO_DIFFERENCES = "No differences"

DIFF_TABLE_HEAD = [
    "Filename",
    "Line Coverage",
    "Branch Coverage",
    "Line Diff",
    "Branch Diff",
]
TOTALS_TABLE_HEAD = ["Total", "Base", "Head", "Diff"]

UP = "📈"
DOWN = "📉"
FLAT = "➡️"
NEW = "🆕 NEW"
DELETED = "DELETED"
DELETED_DIFF = "🗑️ DELETED"
EMPTY = "-"

MIN_COLUMN_WIDTH = 3


def text_length(text: str) -> int:
    """
    Length of a text in UTF-16 code units: an emoji outside the basic plane
        counts as two.

    text_length("📈 +1%") == 6
    """
    return len(text.encode("utf-16-le")) // 2


def trim_workspace_path(filename: str, workspace: Optional[str]) -> str:
    if workspace is None:
        return filename
    workspace_path = f"{workspace}/"
    if filename.startswith(workspace_path):
        return filename[len(workspace_path) :]
    return filename


def get_change_emoji(diff: float) -> str:
    if diff > 0:
        return UP
    if diff < 0:
        return DOWN
    return FLAT


def format_percentage(value: Optional[float]) -> str:
    if value is None:
        return EMPTY
    return f"{format_number(trunc_percentage(value))}%"


def format_percentage_diff(diff: float) -> str:
    if diff == 0:
        return f"{FLAT} 0%"
    sign = "+" if diff > 0 else ""
    return f"{get_change_emoji(diff)} {sign}{format_number(trunc_percentage(diff))}%"


def format_coverage_value(change: CoverageChange) -> str:
    if change.to is not None:
        return format_percentage(change.to)
    return DELETED if change.from_ is not None else EMPTY


def format_coverage_diff(change: CoverageChange) -> str:
    if change.from_ is None and change.to is not None:
        return NEW
    if change.from_ is not None and change.to is None:
        return DELETED_DIFF
    if change.from_ is not None and change.to is not None:
        return format_percentage_diff(change.to - change.from_)
    return EMPTY


def format_diff(diff: FileCoverageDiff, workspace: Optional[str]) -> List[str]:
    return [
        trim_workspace_path(diff.filename, workspace),
        format_coverage_value(diff.lines),
        format_coverage_value(diff.branches),
        format_coverage_diff(diff.lines),
        format_coverage_diff(diff.branches),
    ]


def format_coverage_stats_value(stats: CoverageStats) -> str:
    return f"{stats.covered}/{stats.total} ({format_percentage(stats.percentage)})"


def format_coverage_stats_diff(
    base: CoverageStats, head: CoverageStats, diff: float
) -> str:
    covered_diff = head.covered - base.covered
    total_diff = head.total - base.total
    result = ""
    if covered_diff != 0 or total_diff != 0:
        covered_sign = "+" if covered_diff > 0 else ""
        total_sign = "+" if total_diff > 0 else ""
        result = f"{covered_sign}{covered_diff}/{total_sign}{total_diff} "
    return result + format_percentage_diff(diff)


def _format_stats_diff_row(label: str, stats_diff: StatsDiff) -> List[str]:
    return [
        label,
        format_coverage_stats_value(stats_diff.base),
        format_coverage_stats_value(stats_diff.head),
        format_coverage_stats_diff(stats_diff.base, stats_diff.head, stats_diff.diff),
    ]


def format_total_coverage_diff(total_diff: TotalCoverageDiff) -> List[List[str]]:
    return [
        _format_stats_diff_row("Lines", total_diff.lines),
        _format_stats_diff_row("Branches", total_diff.branches),
    ]


def get_markdown_table(head: Sequence[str], body: Sequence[Sequence[str]]) -> str:
    """
    Renders a markdown table, every column padded to its widest cell.

    get_markdown_table(["a", "bb"], [["1", "2"]]) ==
        '| a   | bb  |\\n| --- | --- |\\n| 1   | 2   |'
    """
    widths = [max(MIN_COLUMN_WIDTH, text_length(cell)) for cell in head]
    for row in body:
        if len(row) != len(head):
            raise ValueError(
                f"Row has {len(row)} cells but the table has {len(head)} columns"
            )
        widths = [max(width, text_length(cell)) for width, cell in zip(widths, row)]

    def _render_row(cells: Sequence[str]) -> str:
        padded = [
            cell + " " * (width - text_length(cell))
            for cell, width in zip(cells, widths)
        ]
        return f"| {' | '.join(padded)} |"

    lines = [_render_row(head), _render_row(["-" * width for width in widths])]
    lines.extend(_render_row(row) for row in body)
    return "\n".join(lines)


def build_report(
    diffs: Sequence[FileCoverageDiff],
    workspace: Optional[str],
    total_diff: Optional[TotalCoverageDiff] = None,
    heading: str = DEFAULT_HEADING,
) -> str:
    """
    Builds the markdown report of a comparison.

    Args:
        diffs (Sequence[FileCoverageDiff]): The changed files, in the order they are listed
        workspace (str): Prefix stripped from the filenames (see `trim_workspace_path`)
        total_diff (TotalCoverageDiff): When given, a table of the total coverage of
            both snapshots is appended
        heading (str): First line of the report

    Returns:
        str: The report, newline terminated
    """
    if not diffs:
        content = NO_DIFFERENCES
    else:
        content = get_markdown_table(
            DIFF_TABLE_HEAD, [format_diff(diff, workspace) for diff in diffs]
        )
    if total_diff is not None:
        totals_table = get_markdown_table(
            TOTALS_TABLE_HEAD, format_total_coverage_diff(total_diff)
        )
        content = f"{content}\n\n{TOTALS_HEADING}\n{totals_table}"
    return f"{heading}\n{content}\n"
