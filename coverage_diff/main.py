import asyncio
import logging
import os
from typing import Optional

import click

from coverage_diff.config import get_config
from coverage_diff.github import actions
from coverage_diff.github.actions import ActionContext
from coverage_diff.github.client import Github
from coverage_diff.reports.diff import get_coverage_diff, get_total_coverage_diff
from coverage_diff.reports.formatting import DEFAULT_HEADING, build_report
from coverage_diff.reports.resources import CoverageSnapshot
from coverage_diff.storage.resultset import does_path_exist, parse_resultset

log = logging.getLogger(__name__)


def get_log_level() -> int:
    """
    Level set by `log_level`, falling back to INFO when it names no logging level.
    """
    level = get_config("log_level", default="INFO")
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if isinstance(resolved, int):
        return resolved
    return logging.INFO


def setup_logging() -> None:
    # first config access, so a broken .coverage-diff.yml surfaces here
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_workspace() -> str:
    return get_config("workspace") or os.getenv("GITHUB_WORKSPACE") or os.getcwd()


def calculate_coverage_diff(
    base_path: str,
    head_path: str,
    workspace: Optional[str] = None,
    show_totals: Optional[bool] = None,
) -> str:
    """
    Compares two resultsets and returns the markdown report of their differences.

    Raises:
        ResultsetNotFoundError: If one of the paths does not exist
        InvalidResultsetException: If one of the files is not a valid resultset
    """
    if workspace is None:
        workspace = get_workspace()
    if show_totals is None:
        show_totals = get_config("comment", "show_totals", default=False)
    does_path_exist(base_path)
    does_path_exist(head_path)

    base = CoverageSnapshot(parse_resultset(base_path, workspace))
    head = CoverageSnapshot(parse_resultset(head_path, workspace))

    diff = get_coverage_diff(base, head)
    total_diff = get_total_coverage_diff(base, head) if show_totals else None
    return build_report(
        diff,
        workspace,
        total_diff=total_diff,
        heading=get_config("comment", "heading", default=DEFAULT_HEADING),
    )


async def publish_report(
    message: str, token: str, context: ActionContext, dry_run: bool = False
) -> None:
    if dry_run:
        actions.info("Running in dry-run mode (DRY_RUN environment variable set)")
        actions.info("Coverage diff result:")
        actions.info(message)
        return

    pull_request_id = context.issue_number
    if not pull_request_id:
        actions.warning("Cannot find the PR id.")
        actions.info(message)
        return

    handler = Github(owner=context.owner, repo=context.repo, token=token)
    log.info(
        "Posting coverage difference",
        extra=dict(repo_slug=handler.slug, issue_number=pull_request_id),
    )
    await handler.post_comment(pull_request_id, message)


def run(
    base: Optional[str] = None,
    head: Optional[str] = None,
    token: Optional[str] = None,
    workspace: Optional[str] = None,
    dry_run: Optional[bool] = None,
) -> int:
    """
    Computes the report and publishes it. Any error is reported as a failed step.

    Returns:
        int: The exit code, 0 on success and 1 on failure
    """
    try:
        base = base or actions.get_input("base-resultset-path")
        head = head or actions.get_input("head-resultset-path")
        token = token or actions.get_input("token")
        if dry_run is None:
            dry_run = actions.is_dry_run() or get_config("dry_run", default=False)

        paths = dict(
            base=os.path.abspath(base),
            head=os.path.abspath(head),
        )
        message = calculate_coverage_diff(
            paths["base"], paths["head"], workspace=workspace
        )
        asyncio.run(
            publish_report(message, token, ActionContext.from_env(), dry_run=dry_run)
        )
    except Exception as exc:
        log.exception("Unable to compute the coverage difference")
        actions.set_failed(str(exc))
        return 1
    return 0


@click.command(name="coverage-diff")
@click.option("--base", "base", help="Path of the base .resultset.json")
@click.option("--head", "head", help="Path of the head .resultset.json")
@click.option("--token", envvar="GITHUB_TOKEN", help="Token used to comment the PR")
@click.option(
    "--workspace", help="Prefix stripped from the filenames [default: GITHUB_WORKSPACE]"
)
@click.option(
    "--dry-run", is_flag=True, default=None, help="Print the report, don't post it"
)
@click.version_option(package_name="coverage-diff")
def cli(base, head, token, workspace, dry_run):
    """Posts the coverage difference between two SimpleCov resultsets."""
    try:
        setup_logging()
    except Exception as exc:
        actions.set_failed(f"Unable to load the configuration: {exc}")
        raise SystemExit(1)
    raise SystemExit(
        run(base=base, head=head, token=token, workspace=workspace, dry_run=dry_run)
    )
