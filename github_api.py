"""
GitHub API client for the REST endpoints the scraper reads
"""

import time
import logging
from urllib.parse import quote

import requests

from config import DEFAULT_HEADERS, LOGGER_NAME

RATE_LIMIT_STATUSES = (403, 429)


class GitHubAPIError(Exception):
    """Base class for failures that stop a single request"""


class RateLimitExceededError(GitHubAPIError):
    """The API kept throttling the request after every retry"""


class TransportError(GitHubAPIError):
    """Network failure, unexpected status or unreadable response body"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class GitHubAPIClient:
    def __init__(self, config):
        self.config = config
        self.base_url = config.base_url
        self.headers = DEFAULT_HEADERS.copy()
        self.headers['Authorization'] = f'token {config.token}'
        self.logger = logging.getLogger(LOGGER_NAME)

    def fetch(self, path):
        """
        GET one API resource.

        Returns the decoded JSON body, or None when the resource does not
        exist. Rate-limited responses are retried after a fixed delay, up to
        config.max_retries times.
        """
        url = f'{self.base_url}{path}'
        attempts = self.config.max_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                response = requests.get(
                    url, headers=self.headers,
                    timeout=self.config.request_timeout
                )
            except requests.RequestException as e:
                raise TransportError(f"Request to {url} failed: {e}") from e

            if response.status_code in RATE_LIMIT_STATUSES:
                if attempt == attempts:
                    break
                self.logger.warning(
                    f"Rate limit exceeded. Retrying in {self.config.retry_delay} seconds... "
                    f"(attempt {attempt}/{attempts})"
                )
                time.sleep(self.config.retry_delay)
                continue

            if response.status_code == 404:
                self.logger.warning(f"Resource not found: {url}")
                return None

            if not 200 <= response.status_code < 300:
                raise TransportError(
                    f"Request failed with status code {response.status_code}: {url}",
                    status_code=response.status_code
                )

            try:
                return response.json()
            except ValueError as e:
                raise TransportError(f"Invalid JSON in response from {url}") from e

        raise RateLimitExceededError('Rate limit exceeded. Max retries reached.')

    def get_user(self, username):
        """Get the public profile of a user"""
        return self.fetch(f'/users/{quote(username, safe="")}')

    def get_user_repos(self, username):
        """Get the repositories owned by a user (first page)"""
        return self.fetch(f'/users/{quote(username, safe="")}/repos')

    def get_repo_commits(self, owner, repo):
        """Get the most recent commits of a repository (first page)"""
        return self.fetch(f'/repos/{quote(owner, safe="")}/{quote(repo, safe="")}/commits')
