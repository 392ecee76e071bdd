from dataclasses import dataclass
from typing import Dict, List, Optional, TypedDict

LineCoverage = List[Optional[int]]
BranchCoverage = Dict[str, Dict[str, int]]


class RawCoverage(TypedDict, total=False):
    lines: LineCoverage
    branches: Optional[BranchCoverage]


RawCoverages = Dict[str, RawCoverage]


class RunCoverage(TypedDict):
    coverage: RawCoverages


ResultSet = Dict[str, RunCoverage]


@dataclass(frozen=True)
class CoverageStats(object):
    covered: int = 0
    total: int = 0
    percentage: float = 100.0

    @classmethod
    def vacuous(cls) -> "CoverageStats":
        """
        Stats of something with nothing to cover (no executable lines, no branches),
            which counts as fully covered.
        """
        return cls(covered=0, total=0, percentage=100.0)


@dataclass(frozen=True)
class TotalCoverageStats(object):
    lines: CoverageStats
    branches: CoverageStats


@dataclass(frozen=True)
class FileCoverage(object):
    filename: str
    lines_pct: float
    branches_pct: float


@dataclass(frozen=True)
class CoverageChange(object):
    # None means the file is absent from that side of the comparison
    from_: Optional[float]
    to: Optional[float]


@dataclass(frozen=True)
class FileCoverageDiff(object):
    filename: str
    lines: CoverageChange
    branches: CoverageChange


@dataclass(frozen=True)
class StatsDiff(object):
    base: CoverageStats
    head: CoverageStats
    diff: float


@dataclass(frozen=True)
class TotalCoverageDiff(object):
    lines: StatsDiff
    branches: StatsDiff
