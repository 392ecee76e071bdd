import logging
import os

import orjson
import sentry_sdk

from coverage_diff.reports.types import ResultSet
from coverage_diff.storage.exceptions import ResultsetNotFoundError
from coverage_diff.validation.exceptions import InvalidResultsetException
from coverage_diff.validation.resultset import validate_resultset

log = logging.getLogger(__name__)


def does_path_exist(filepath: str) -> None:
    if not os.path.exists(filepath):
        raise ResultsetNotFoundError(filepath)


def read_resultset(resultset_path: str, workspace: str) -> bytes:
    # an absolute resultset_path ignores the workspace
    location = os.path.join(workspace, resultset_path)
    with open(location, "rb") as f:
        return f.read()


@sentry_sdk.trace
def parse_resultset(resultset_path: str, workspace: str) -> ResultSet:
    """
    Reads, decodes and validates a SimpleCov resultset.

    Raises:
        FileNotFoundError: If there's no file at `resultset_path`
        InvalidResultsetException: If the file is not JSON, or not a resultset
    """
    content = read_resultset(resultset_path, workspace)
    try:
        decoded = orjson.loads(content)
    except orjson.JSONDecodeError as exc:
        raise InvalidResultsetException(
            error_location=[],
            error_message=f"{resultset_path} is not valid JSON: {exc}",
            original_exc=exc,
        ) from exc
    resultset = validate_resultset(decoded)
    log.debug(
        "Parsed resultset",
        extra=dict(path=resultset_path, runs=list(resultset.keys())),
    )
    return resultset
