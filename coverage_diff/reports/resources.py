import logging
from typing import Dict, List

import sentry_sdk

from coverage_diff.reports.totals import branches_stats, lines_stats, sum_stats
from coverage_diff.reports.types import (
    CoverageStats,
    FileCoverage,
    RawCoverages,
    ResultSet,
    TotalCoverageStats,
)

log = logging.getLogger(__name__)


class CoverageSnapshot(object):
    """
    One side (base or head) of a comparison, aggregated from a resultset.

    A resultset can hold several runs (one per test framework, for instance). Every
        file entry of every run is listed in `files`, in the order they come, so a file
        covered by two runs is listed twice. The raw coverage kept for the totals is the
        one of the last run that covers the file: hits of the same file are not summed
        across runs.
    """

    def __init__(self, resultset: ResultSet):
        self.files: List[FileCoverage] = []
        self._raw_coverages: RawCoverages = {}
        self._build(resultset)

    @sentry_sdk.trace
    def _build(self, resultset: ResultSet):
        for run_label, run in resultset.items():
            for filename, coverage in run["coverage"].items():
                if filename in self._raw_coverages:
                    log.debug(
                        "File covered by more than one run, keeping the latest",
                        extra=dict(filename=filename, run_label=run_label),
                    )
                self._raw_coverages[filename] = coverage
                self.files.append(
                    FileCoverage(
                        filename=filename,
                        lines_pct=lines_stats(coverage["lines"]).percentage,
                        branches_pct=branches_stats(
                            coverage.get("branches")
                        ).percentage,
                    )
                )

    def __len__(self):
        return len(self.files)

    def __repr__(self):
        return f"<{self.__class__.__name__} files={len(self.files)}>"

    @property
    def filenames(self) -> List[str]:
        return [file.filename for file in self.files]

    def files_map(self) -> Dict[str, FileCoverage]:
        return {file.filename: file for file in self.files}

    def get_total_lines_coverage(self) -> CoverageStats:
        return sum_stats(
            lines_stats(coverage["lines"])
            for coverage in self._raw_coverages.values()
        )

    def get_total_branches_coverage(self) -> CoverageStats:
        return sum_stats(
            branches_stats(coverage.get("branches"))
            for coverage in self._raw_coverages.values()
        )

    def get_total_coverage(self) -> TotalCoverageStats:
        return TotalCoverageStats(
            lines=self.get_total_lines_coverage(),
            branches=self.get_total_branches_coverage(),
        )
