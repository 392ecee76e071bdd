from typing import Optional

from coverage_diff.helpers.numeric import floor
from coverage_diff.reports.types import BranchCoverage, CoverageStats, LineCoverage


def percentage(covered: int, total: int) -> float:
    if total == 0:
        return 100.0
    return floor(covered / total * 100, 2)


def lines_stats(coverage: LineCoverage) -> CoverageStats:
    """
    Calculates the `CoverageStats` of a file's line hits.

    `None` entries are lines that can't be executed (blank lines, comments...) and are
        left out. Any other entry is an executable line, covered when its hit count is
        above 0. A file without executable lines is 100% covered.
    """
    effective_lines = [hit for hit in coverage if hit is not None]
    total = len(effective_lines)
    if total == 0:
        return CoverageStats.vacuous()
    covered = sum(1 for hit in effective_lines if hit > 0)
    return CoverageStats(
        covered=covered, total=total, percentage=percentage(covered, total)
    )


def branches_stats(coverage: Optional[BranchCoverage]) -> CoverageStats:
    """
    Calculates the `CoverageStats` of a file's branch hits.

    Every branch of every condition counts once, so `total` is the number of branches
        and not the number of conditions. No conditions at all means 100% covered.
    """
    if not coverage:
        return CoverageStats.vacuous()
    total = 0
    covered = 0
    for branches in coverage.values():
        for hit in branches.values():
            total += 1
            if hit > 0:
                covered += 1
    if total == 0:
        return CoverageStats.vacuous()
    return CoverageStats(
        covered=covered, total=total, percentage=percentage(covered, total)
    )


def sum_stats(stats_list) -> CoverageStats:
    covered = 0
    total = 0
    for stats in stats_list:
        covered += stats.covered
        total += stats.total
    return CoverageStats(
        covered=covered, total=total, percentage=percentage(covered, total)
    )
