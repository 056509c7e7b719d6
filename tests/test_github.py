"""Tests for the GitHub issue client."""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
from githubkit.exception import GitHubException, RequestFailed
from pydantic import SecretStr

from issue_branch.config import BranchConfig
from issue_branch.github import FetchError, GitHubIssueClient, Issue


class TestIssue:
    def test_open_issue(self):
        issue = Issue(number=1, title="t", url="u")

        assert not issue.is_closed

    def test_closed_issue(self):
        issue = Issue(number=1, title="t", url="u", closed_at=datetime(2024, 3, 1, tzinfo=timezone.utc))

        assert issue.is_closed


class TestGitHubIssueClient:
    """Test issue fetching against a mocked githubkit client."""

    @pytest.fixture
    def mock_github(self):
        return Mock()

    @pytest.fixture
    def client(self, mock_github):
        return GitHubIssueClient("acme", "widgets", "token", client=mock_github)

    def test_get_issue_maps_fields(self, client, mock_github):
        closed = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        mock_github.rest.issues.get.return_value = Mock(
            parsed_data=Mock(
                number=2415,
                title="Combat phases",
                html_url="https://github.com/acme/widgets/issues/2415",
                closed_at=closed,
            )
        )

        issue = client.get_issue(2415)

        mock_github.rest.issues.get.assert_called_once_with(
            owner="acme", repo="widgets", issue_number=2415
        )
        assert issue == Issue(
            number=2415,
            title="Combat phases",
            url="https://github.com/acme/widgets/issues/2415",
            closed_at=closed,
        )

    def test_http_failure_raises_fetch_error_with_body(self, client, mock_github):
        body = '{"message": "Not Found", "documentation_url": "https://docs.github.com"}'
        mock_github.rest.issues.get.side_effect = RequestFailed(
            Mock(status_code=404, text=body)
        )

        with pytest.raises(FetchError) as exc_info:
            client.get_issue(9999)

        assert exc_info.value.body == body
        assert exc_info.value.status_code == 404
        assert "404" in str(exc_info.value)
        assert "acme/widgets#9999" in str(exc_info.value)

    def test_transport_failure_raises_fetch_error(self, client, mock_github):
        mock_github.rest.issues.get.side_effect = GitHubException("connection refused")

        with pytest.raises(FetchError) as exc_info:
            client.get_issue(1)

        assert "connection refused" in exc_info.value.body
        assert exc_info.value.status_code is None

    def test_does_not_retry(self, client, mock_github):
        mock_github.rest.issues.get.side_effect = GitHubException("boom")

        with pytest.raises(FetchError):
            client.get_issue(1)

        assert mock_github.rest.issues.get.call_count == 1

    @patch("issue_branch.github.TokenAuthStrategy")
    @patch("issue_branch.github.GitHub")
    def test_from_config_builds_authenticated_client(self, mock_github_cls, mock_auth):
        config = BranchConfig(
            owner="acme",
            repo="widgets",
            token=SecretStr("ghp_secret"),
            api_url="https://github.example.com/api/v3",
        )

        client = GitHubIssueClient.from_config(config)

        mock_auth.assert_called_once_with("ghp_secret")
        mock_github_cls.assert_called_once_with(
            mock_auth.return_value,
            base_url="https://github.example.com/api/v3",
            http_cache=False,
        )
        assert client.owner == "acme"
        assert client.repo == "widgets"
