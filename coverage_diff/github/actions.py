"""
Helpers to run inside a GitHub Actions job: reading the step inputs and the event
that triggered the workflow, and writing workflow commands to the log.

https://docs.github.com/en/actions/writing-workflows/choosing-what-your-workflow-does/workflow-commands-for-github-actions
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

import click
import orjson

log = logging.getLogger(__name__)

DRY_RUN_VALUES = ("true", "1")


def get_input(name: str) -> str:
    """
    Value of a step input, the way the runner exposes it: an `INPUT_` environment
        variable with the name upper-cased and spaces replaced by underscores.
        Missing inputs are empty strings.
    """
    env_var = "INPUT_" + name.replace(" ", "_").upper()
    return os.getenv(env_var, "").strip()


def is_dry_run() -> bool:
    return os.getenv("DRY_RUN", "") in DRY_RUN_VALUES


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def info(message: str) -> None:
    click.echo(message)


def warning(message: str) -> None:
    click.echo(f"::warning::{_escape_data(message)}")


def set_failed(message: str) -> None:
    click.echo(f"::error::{_escape_data(message)}")


@dataclass(frozen=True)
class ActionContext(object):
    owner: Optional[str] = None
    repo: Optional[str] = None
    payload: dict = field(default_factory=dict)

    @property
    def issue_number(self) -> Optional[int]:
        """
        Number of the issue or pull request the workflow was triggered for, if any.
        """
        for key in ("issue", "pull_request"):
            number = (self.payload.get(key) or {}).get("number")
            if number:
                return number
        return self.payload.get("number") or None

    @classmethod
    def from_env(cls) -> "ActionContext":
        owner, repo = None, None
        repository = os.getenv("GITHUB_REPOSITORY", "")
        if "/" in repository:
            owner, repo = repository.split("/", 1)
        return cls(owner=owner, repo=repo, payload=cls._load_event_payload())

    @staticmethod
    def _load_event_payload() -> dict:
        event_path = os.getenv("GITHUB_EVENT_PATH")
        if not event_path:
            return {}
        try:
            with open(event_path, "rb") as f:
                payload = orjson.loads(f.read())
        except FileNotFoundError:
            log.warning(
                "GITHUB_EVENT_PATH does not exist", extra=dict(event_path=event_path)
            )
            return {}
        return payload if isinstance(payload, dict) else {}
