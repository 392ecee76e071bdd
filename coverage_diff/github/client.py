import logging
import os
from string import Template
from typing import List, Optional

import httpx
from httpx import Response

from coverage_diff.config import get_config
from coverage_diff.github.exceptions import (
    GithubClientGeneralError,
    GithubMisconfiguredCredentials,
    GithubObjectNotFoundError,
    GithubRateLimitError,
    GithubServer5xxCodeError,
    GithubServerUnreachableError,
    GithubUnauthorizedError,
)
from coverage_diff.metrics import GITHUB_API_CALL_COUNTER

log = logging.getLogger(__name__)

GITHUB_API_ENDPOINTS = {
    "post_comment": {
        "counter": GITHUB_API_CALL_COUNTER.labels(endpoint="post_comment"),
        "url_template": Template("/repos/${slug}/issues/${issueid}/comments"),
    },
    "make_http_call_retry": {
        "counter": GITHUB_API_CALL_COUNTER.labels(endpoint="make_http_call_retry"),
        "url_template": Template(""),
    },
}

STATUSES_TO_RETRY = (502, 503, 504)
MAX_NUMBER_RETRIES = 3


class Github(object):
    """
    The bits of the GitHub REST API needed to publish a report on a pull request.
    """

    service = "github"

    def __init__(
        self,
        owner: str,
        repo: str,
        token: Optional[str],
        api_url: Optional[str] = None,
        timeouts: Optional[List[int]] = None,
    ):
        self.owner = owner
        self.repo = repo
        self.token = token
        self.api_url = (
            api_url or get_config("github", "api_url", default="https://api.github.com")
        ).rstrip("/")
        self._timeouts = timeouts or get_config(
            "github", "timeouts", default=[10, 30]
        )

    def __repr__(self):
        return f"<{self.__class__.__name__} slug={self.slug}>"

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    def get_client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(self._timeouts[1], connect=self._timeouts[0])
        return httpx.AsyncClient(timeout=timeout)

    @classmethod
    def count_and_get_url_template(cls, url_name):
        GITHUB_API_ENDPOINTS[url_name]["counter"].inc()
        return GITHUB_API_ENDPOINTS[url_name]["url_template"]

    async def api(self, client, method, url, body=None, token=None):
        """
        Makes a single http request to GitHub and returns the parsed response
        """
        token_to_use = token or self.token
        if not token_to_use:
            raise GithubMisconfiguredCredentials(
                "A token is needed to call the GitHub API"
            )
        response = await self.make_http_call(
            client, method, url, body=body, token_to_use=token_to_use
        )
        return self._parse_response(response)

    def _parse_response(self, res: Response):
        if res.status_code == 204:
            return None
        elif (res.headers.get("Content-Type") or "")[:16] == "application/json":
            return res.json()
        return res.text

    async def make_http_call(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        body=None,
        token_to_use=None,
    ) -> Response:
        _headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": os.getenv("USER_AGENT", "coverage-diff"),
        }
        if token_to_use:
            _headers["Authorization"] = "token %s" % token_to_use
        method = (method or "GET").upper()
        log_dict = dict(event="api", endpoint=url, method=method, repo_slug=self.slug)
        if url[0] == "/":
            url = self.api_url + url
        kwargs = dict(json=body if body else None, headers=_headers)

        for current_retry in range(1, MAX_NUMBER_RETRIES + 1):
            try:
                res = await client.request(method, url, **kwargs)
                if current_retry > 1:
                    # count retries without getting a url
                    self.count_and_get_url_template(url_name="make_http_call_retry")
            except (httpx.TimeoutException, httpx.NetworkError):
                raise GithubServerUnreachableError("GitHub was not able to be reached.")
            logged_body = None
            if res.status_code >= 300 and res.text is not None:
                logged_body = res.text
            log.log(
                logging.WARNING if res.status_code >= 300 else logging.INFO,
                "Github HTTP %s",
                res.status_code,
                extra=dict(
                    current_retry=current_retry,
                    body=logged_body,
                    rl_remaining=res.headers.get("X-RateLimit-Remaining"),
                    rl_reset_time=res.headers.get("X-RateLimit-Reset"),
                    retry_after=res.headers.get("Retry-After"),
                    **log_dict,
                ),
            )
            if (res.status_code == 403 or res.status_code == 429) and (
                # Primary rate limit
                int(res.headers.get("X-RateLimit-Remaining", -1)) == 0
                # Secondary rate limit
                or res.headers.get("Retry-After") is not None
            ):
                retry_after = res.headers.get("Retry-After")
                raise GithubRateLimitError(
                    response_data=res.text,
                    message=f"Github API rate limit error: {res.reason_phrase}",
                    reset=res.headers.get("X-RateLimit-Reset"),
                    retry_after=int(retry_after) if retry_after is not None else None,
                )
            if (
                res.status_code not in STATUSES_TO_RETRY
                or current_retry >= MAX_NUMBER_RETRIES  # Last retry
            ):
                if res.status_code >= 500:
                    raise GithubServer5xxCodeError("Github is having 5xx issues")
                elif res.status_code == 401:
                    message = f"Github API unauthorized error: {res.reason_phrase}"
                    raise GithubUnauthorizedError(
                        response_data=res.text, message=message
                    )
                elif res.status_code == 404:
                    message = f"Github API: {res.reason_phrase}"
                    raise GithubObjectNotFoundError(
                        response_data=res.text, message=message
                    )
                elif res.status_code >= 300:
                    message = f"Github API: {res.reason_phrase}"
                    raise GithubClientGeneralError(
                        res.status_code, response_data=res.text, message=message
                    )
                return res
            log.info(
                "Retrying request to GitHub",
                extra=dict(status=res.status_code, **log_dict),
            )

    async def post_comment(self, issueid, body, token=None):
        # https://docs.github.com/en/rest/issues/comments#create-an-issue-comment
        async with self.get_client() as client:
            url = self.count_and_get_url_template(url_name="post_comment").substitute(
                slug=self.slug, issueid=issueid
            )
            res = await self.api(client, "post", url, body=dict(body=body), token=token)
            return res
