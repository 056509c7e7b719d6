"""GitHub issue lookup."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from githubkit import GitHub
from githubkit.auth import TokenAuthStrategy
from githubkit.exception import GitHubException, RequestFailed

from .config import DEFAULT_API_URL, BranchConfig


@dataclass(frozen=True)
class Issue:
    """The parts of a GitHub issue needed to pick a branch."""

    number: int
    title: str
    url: str
    closed_at: datetime | None = None

    @property
    def is_closed(self) -> bool:
        return self.closed_at is not None


class FetchError(Exception):
    """Raised when an issue cannot be fetched.

    ``body`` holds the raw response body (or the transport error text) so
    it can be shown to the user verbatim.
    """

    def __init__(self, message: str, body: str = "", status_code: int | None = None):
        super().__init__(message)
        self.body = body
        self.status_code = status_code


class IssueClient(Protocol):
    def get_issue(self, number: int) -> Issue: ...


class GitHubIssueClient:
    """Fetch issues from one repository through the GitHub REST API."""

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        api_url: str = DEFAULT_API_URL,
        client: GitHub | None = None,
    ):
        self.owner = owner
        self.repo = repo
        # Disable HTTP caching to always get fresh issue state
        self.client = client or GitHub(
            TokenAuthStrategy(token), base_url=api_url, http_cache=False
        )

    @classmethod
    def from_config(cls, config: BranchConfig) -> "GitHubIssueClient":
        return cls(
            owner=config.owner,
            repo=config.repo,
            token=config.token.get_secret_value(),
            api_url=config.api_url,
        )

    def get_issue(self, number: int) -> Issue:
        """Fetch a single issue.

        Raises
        ------
        FetchError
            On any non-success response or transport failure. No retry.
        """
        try:
            response = self.client.rest.issues.get(
                owner=self.owner, repo=self.repo, issue_number=number
            )
        except RequestFailed as e:
            status = e.response.status_code
            raise FetchError(
                f"GitHub returned HTTP {status} for {self.owner}/{self.repo}#{number}",
                body=e.response.text,
                status_code=status,
            ) from e
        except GitHubException as e:
            raise FetchError(f"Could not reach GitHub: {e}", body=str(e)) from e

        data = response.parsed_data
        return Issue(
            number=data.number,
            title=data.title,
            url=data.html_url,
            closed_at=data.closed_at,
        )
