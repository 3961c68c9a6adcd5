"""
Per-user fetch pipeline: profile, repositories, then commits for each repository
"""

import logging

from config import LOGGER_NAME
from github_api import GitHubAPIClient
from models import (
    UserProfile, RepositorySummary, LatestCommit,
    RowsOutcome, FailureOutcome, build_row
)


class ProfileCrawler:
    def __init__(self, config, api_client=None):
        self.config = config
        self.api_client = api_client or GitHubAPIClient(config)
        self.logger = logging.getLogger(LOGGER_NAME)

    def process(self, username):
        """
        Fetch everything for one user and flatten it into output rows.

        Never raises: any failure becomes a FailureOutcome for this user.
        """
        try:
            return self._collect(username)
        except Exception as e:
            self.logger.warning(f"Aborting {username}: {e}")
            return FailureOutcome(username, str(e))

    def _collect(self, username):
        user = self.api_client.get_user(username)
        if user is None:
            return FailureOutcome(username, 'User not found')

        repos = self.api_client.get_user_repos(username)
        if repos is None:
            return FailureOutcome(username, 'Unable to fetch repositories')

        profile = UserProfile.from_api(user)

        if not repos:
            self.logger.debug(f"{username} has no public repositories")
            return RowsOutcome(username, [build_row(profile)])

        self.logger.debug(f"Fetching commits for {len(repos)} repositories of {username}")

        rows = []
        for repo in repos:
            commits = self.api_client.get_repo_commits(username, repo['name'])
            rows.append(build_row(
                profile,
                RepositorySummary.from_api(repo),
                LatestCommit.from_api(commits)
            ))

        return RowsOutcome(username, rows)
