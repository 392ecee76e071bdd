import pytest

from coverage_diff.reports.diff import (
    get_coverage_diff,
    get_total_coverage_diff,
    is_difference,
    make_diff,
    merge_filenames,
)
from coverage_diff.reports.resources import CoverageSnapshot
from coverage_diff.reports.types import (
    CoverageChange,
    CoverageStats,
    FileCoverage,
    FileCoverageDiff,
    StatsDiff,
    TotalCoverageDiff,
)
from coverage_diff.storage.resultset import parse_resultset
from tests.helper import make_resultset


@pytest.fixture
def sample_snapshots(base_resultset_path, head_resultset_path, workspace):
    return (
        CoverageSnapshot(parse_resultset(base_resultset_path, workspace)),
        CoverageSnapshot(parse_resultset(head_resultset_path, workspace)),
    )


class TestGetCoverageDiff(object):
    def test_identical_snapshots(self, base_resultset_path, workspace):
        resultset = parse_resultset(base_resultset_path, workspace)
        assert get_coverage_diff(
            CoverageSnapshot(resultset), CoverageSnapshot(resultset)
        ) == []

    def test_sample_resultsets(self, sample_snapshots):
        base, head = sample_snapshots
        assert get_coverage_diff(base, head) == [
            FileCoverageDiff(
                filename="/home/runner/work/app/lib/changed.rb",
                lines=CoverageChange(from_=66.66, to=100),
                branches=CoverageChange(from_=50, to=100),
            ),
            FileCoverageDiff(
                filename="/home/runner/work/app/lib/deleted.rb",
                lines=CoverageChange(from_=50, to=None),
                branches=CoverageChange(from_=100, to=None),
            ),
            FileCoverageDiff(
                filename="/home/runner/work/app/lib/new.rb",
                lines=CoverageChange(from_=None, to=33.33),
                branches=CoverageChange(from_=None, to=100),
            ),
        ]

    def test_added_file(self):
        base = CoverageSnapshot(make_resultset({"a.rb": [1]}))
        head = CoverageSnapshot(make_resultset({"a.rb": [1], "b.rb": [1, 0]}))
        diff = get_coverage_diff(base, head)
        assert diff == [
            FileCoverageDiff(
                filename="b.rb",
                lines=CoverageChange(from_=None, to=50),
                branches=CoverageChange(from_=None, to=100),
            )
        ]

    def test_removed_file(self):
        base = CoverageSnapshot(make_resultset({"a.rb": [1], "b.rb": [1, 0]}))
        head = CoverageSnapshot(make_resultset({"a.rb": [1]}))
        diff = get_coverage_diff(base, head)
        assert diff == [
            FileCoverageDiff(
                filename="b.rb",
                lines=CoverageChange(from_=50, to=None),
                branches=CoverageChange(from_=100, to=None),
            )
        ]

    def test_same_percentage_with_different_hits_is_not_a_difference(self):
        base = CoverageSnapshot(make_resultset({"a.rb": [1, 0, 0]}))
        head = CoverageSnapshot(make_resultset({"a.rb": [0, 7, 0]}))
        assert get_coverage_diff(base, head) == []

    def test_branch_only_change(self):
        base = CoverageSnapshot(make_resultset({"a.rb": ([1], {"c": {"t": 0}})}))
        head = CoverageSnapshot(make_resultset({"a.rb": ([1], {"c": {"t": 1}})}))
        assert get_coverage_diff(base, head) == [
            FileCoverageDiff(
                filename="a.rb",
                lines=CoverageChange(from_=100, to=100),
                branches=CoverageChange(from_=0, to=100),
            )
        ]

    def test_ordered_by_filename(self):
        base = CoverageSnapshot(make_resultset({"z.rb": [1], "B.rb": [1]}))
        head = CoverageSnapshot(make_resultset({"m.rb": [0], "a.rb": [1]}))
        assert [d.filename for d in get_coverage_diff(base, head)] == [
            "B.rb",
            "a.rb",
            "m.rb",
            "z.rb",
        ]

    def test_file_in_several_runs_listed_once(self):
        base = CoverageSnapshot({})
        head = CoverageSnapshot(
            {
                **make_resultset({"a.rb": [0, 0]}, run_label="RSpec"),
                **make_resultset({"a.rb": [1, 1]}, run_label="Minitest"),
            }
        )
        assert get_coverage_diff(base, head) == [
            FileCoverageDiff(
                filename="a.rb",
                lines=CoverageChange(from_=None, to=100),
                branches=CoverageChange(from_=None, to=100),
            )
        ]

    def test_unusual_filenames(self):
        filenames = [
            "/test/file with spaces.rb",
            "/test/file-with-dashes.rb",
            "/test/file_with_underscores.rb",
            "/test/file.with.dots.rb",
            "/test/UPPERCASE.rb",
            "/test/файл.rb",
            "/test/文件.rb",
            "/test/ファイル.rb",
        ]
        base = CoverageSnapshot({})
        head = CoverageSnapshot(
            make_resultset({filename: [1, 0, 1] for filename in filenames})
        )
        diff = get_coverage_diff(base, head)
        assert [d.filename for d in diff] == [
            "/test/UPPERCASE.rb",
            "/test/file with spaces.rb",
            "/test/file-with-dashes.rb",
            "/test/file.with.dots.rb",
            "/test/file_with_underscores.rb",
            "/test/файл.rb",
            "/test/ファイル.rb",
            "/test/文件.rb",
        ]
        assert {d.lines for d in diff} == {CoverageChange(from_=None, to=66.66)}

    def test_many_files(self):
        filenames = [f"lib/file_{i:04}.rb" for i in range(1000)]
        base = CoverageSnapshot(
            make_resultset({filename: [1, 0] * 50 for filename in filenames})
        )
        head = CoverageSnapshot(
            make_resultset(
                {
                    filename: [1] * 100 if i % 10 == 0 else [1, 0] * 50
                    for i, filename in enumerate(filenames)
                }
            )
        )
        diff = get_coverage_diff(base, head)
        assert [d.filename for d in diff] == filenames[::10]
        assert {d.lines for d in diff} == {CoverageChange(from_=50, to=100)}


def test_merge_filenames():
    base = CoverageSnapshot(make_resultset({"c.rb": [1], "a.rb": [1]}))
    head = CoverageSnapshot(make_resultset({"b.rb": [1], "a.rb": [1]}))
    assert merge_filenames(base, head) == ["a.rb", "b.rb", "c.rb"]


def test_merge_filenames_in_code_point_order():
    base = CoverageSnapshot(make_resultset({"\uff21.rb": [1], "z.rb": [1]}))
    head = CoverageSnapshot(make_resultset({"\U0001f600.rb": [1], "\u00e9.rb": [1]}))
    assert merge_filenames(base, head) == [
        "z.rb",
        "\u00e9.rb",
        "\uff21.rb",
        "\U0001f600.rb",
    ]


@pytest.mark.parametrize(
    "base_file, head_file, expected",
    [
        (None, None, False),
        (FileCoverage("a.rb", 50, 50), None, True),
        (None, FileCoverage("a.rb", 50, 50), True),
        (FileCoverage("a.rb", 50, 50), FileCoverage("a.rb", 50, 50), False),
        (FileCoverage("a.rb", 50, 50), FileCoverage("a.rb", 50.01, 50), True),
        (FileCoverage("a.rb", 50, 50), FileCoverage("a.rb", 50, 0), True),
    ],
)
def test_is_difference(base_file, head_file, expected):
    assert is_difference(base_file, head_file) is expected


def test_make_diff_without_coverages():
    with pytest.raises(ValueError, match="no coverages"):
        make_diff(None, None)


class TestGetTotalCoverageDiff(object):
    def test_diff_is_floored(self):
        base = CoverageSnapshot(make_resultset({"a.rb": [1, 1, 0]}))
        head = CoverageSnapshot(make_resultset({"a.rb": [1, 1, 1]}))
        assert get_total_coverage_diff(base, head) == TotalCoverageDiff(
            lines=StatsDiff(
                base=CoverageStats(covered=2, total=3, percentage=66.66),
                head=CoverageStats(covered=3, total=3, percentage=100),
                diff=33.34,
            ),
            branches=StatsDiff(
                base=CoverageStats(covered=0, total=0, percentage=100),
                head=CoverageStats(covered=0, total=0, percentage=100),
                diff=0,
            ),
        )

    def test_no_changes(self, sample_snapshots):
        base, _ = sample_snapshots
        total_diff = get_total_coverage_diff(base, base)
        assert total_diff.lines.diff == 0
        assert total_diff.branches.diff == 0
        assert total_diff.lines.base == total_diff.lines.head

    def test_new_files_in_head(self):
        base = CoverageSnapshot(make_resultset({"a.rb": ([1, 0], {"c": {"t": 1, "e": 0}})}))
        head = CoverageSnapshot(
            make_resultset(
                {
                    "a.rb": ([1, 0], {"c": {"t": 1, "e": 0}}),
                    "b.rb": ([1, 1], {"c": {"t": 1, "e": 1}}),
                }
            )
        )
        total_diff = get_total_coverage_diff(base, head)
        assert total_diff.lines == StatsDiff(
            base=CoverageStats(covered=1, total=2, percentage=50),
            head=CoverageStats(covered=3, total=4, percentage=75),
            diff=25,
        )
        assert total_diff.branches == StatsDiff(
            base=CoverageStats(covered=1, total=2, percentage=50),
            head=CoverageStats(covered=3, total=4, percentage=75),
            diff=25,
        )

    def test_coverage_drop(self):
        base = CoverageSnapshot(make_resultset({"a.rb": [1, 1]}))
        head = CoverageSnapshot(make_resultset({"a.rb": [1, 0]}))
        assert get_total_coverage_diff(base, head).lines.diff == -50
