import logging
from typing import List, Optional

import sentry_sdk

from coverage_diff.helpers.numeric import floor
from coverage_diff.metrics import COMPARISON_COUNTER, inc_counter
from coverage_diff.reports.resources import CoverageSnapshot
from coverage_diff.reports.types import (
    CoverageChange,
    CoverageStats,
    FileCoverage,
    FileCoverageDiff,
    StatsDiff,
    TotalCoverageDiff,
)

log = logging.getLogger(__name__)


def merge_filenames(base: CoverageSnapshot, head: CoverageSnapshot) -> List[str]:
    """
    All the filenames of both snapshots, once each, sorted by code point.

    This is the order every diff listing follows.
    """
    return sorted(set(base.filenames) | set(head.filenames))


def is_difference(
    base_file: Optional[FileCoverage], head_file: Optional[FileCoverage]
) -> bool:
    """
    Whether a file changed between the two snapshots.

    Only the computed percentages are compared. Two files with different hits but the
        same floored percentages are not a difference.
    """
    if base_file is None and head_file is None:
        return False
    if base_file is None or head_file is None:
        return True
    if base_file.lines_pct != head_file.lines_pct:
        return True
    if base_file.branches_pct != head_file.branches_pct:
        return True
    return False


def make_diff(
    base_file: Optional[FileCoverage], head_file: Optional[FileCoverage]
) -> FileCoverageDiff:
    if base_file is None and head_file is None:
        raise ValueError("no coverages")
    if base_file is None:
        return FileCoverageDiff(
            filename=head_file.filename,
            lines=CoverageChange(from_=None, to=head_file.lines_pct),
            branches=CoverageChange(from_=None, to=head_file.branches_pct),
        )
    if head_file is None:
        return FileCoverageDiff(
            filename=base_file.filename,
            lines=CoverageChange(from_=base_file.lines_pct, to=None),
            branches=CoverageChange(from_=base_file.branches_pct, to=None),
        )
    return FileCoverageDiff(
        filename=base_file.filename,
        lines=CoverageChange(from_=base_file.lines_pct, to=head_file.lines_pct),
        branches=CoverageChange(
            from_=base_file.branches_pct, to=head_file.branches_pct
        ),
    )


@sentry_sdk.trace
def get_coverage_diff(
    base: CoverageSnapshot, head: CoverageSnapshot
) -> List[FileCoverageDiff]:
    base_files = base.files_map()
    head_files = head.files_map()
    diff = []
    for filename in merge_filenames(base, head):
        base_file = base_files.get(filename)
        head_file = head_files.get(filename)
        if is_difference(base_file, head_file):
            diff.append(make_diff(base_file, head_file))
    log.info(
        "Compared coverage snapshots",
        extra=dict(
            base_files=len(base_files),
            head_files=len(head_files),
            changed_files=len(diff),
        ),
    )
    inc_counter(
        COMPARISON_COUNTER,
        labels=dict(outcome="changed" if diff else "unchanged"),
    )
    return diff


def _stats_diff(base: CoverageStats, head: CoverageStats) -> StatsDiff:
    # both percentages are already floored, the delta is floored again
    return StatsDiff(
        base=base, head=head, diff=floor(head.percentage - base.percentage, 2)
    )


@sentry_sdk.trace
def get_total_coverage_diff(
    base: CoverageSnapshot, head: CoverageSnapshot
) -> TotalCoverageDiff:
    base_totals = base.get_total_coverage()
    head_totals = head.get_total_coverage()
    return TotalCoverageDiff(
        lines=_stats_diff(base_totals.lines, head_totals.lines),
        branches=_stats_diff(base_totals.branches, head_totals.branches),
    )
