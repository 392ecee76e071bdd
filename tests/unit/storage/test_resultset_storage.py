import os

import pytest

from coverage_diff.storage.exceptions import ResultsetNotFoundError
from coverage_diff.storage.resultset import does_path_exist, parse_resultset
from coverage_diff.validation.exceptions import InvalidResultsetException


class TestDoesPathExist(object):
    def test_existing_path(self, base_resultset_path):
        assert does_path_exist(base_resultset_path) is None

    def test_missing_path(self, tmp_path):
        missing = str(tmp_path / "nonexistent.json")
        with pytest.raises(ResultsetNotFoundError) as exc:
            does_path_exist(missing)
        assert str(exc.value) == f"{missing} does not exist!"
        assert isinstance(exc.value, FileNotFoundError)


class TestParseResultset(object):
    def test_absolute_path(self, base_resultset_path, workspace):
        resultset = parse_resultset(base_resultset_path, workspace)
        assert list(resultset.keys()) == ["RSpec"]
        assert resultset["RSpec"]["coverage"]["/home/runner/work/app/lib/same.rb"] == {
            "lines": [1, None, 0]
        }

    def test_relative_to_workspace(self, base_resultset_path):
        workspace, filename = os.path.split(base_resultset_path)
        assert parse_resultset(filename, workspace) == parse_resultset(
            base_resultset_path, "/somewhere/else"
        )

    def test_not_a_resultset(self, sample_path, workspace):
        with pytest.raises(InvalidResultsetException):
            parse_resultset(sample_path("not_coverage.json"), workspace)

    def test_not_json(self, sample_path, workspace):
        with pytest.raises(InvalidResultsetException) as exc:
            parse_resultset(sample_path("truncated.json"), workspace)
        assert "is not valid JSON" in exc.value.error_message
        assert exc.value.original_exc is not None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            parse_resultset("nonexistent.json", str(tmp_path))
