"""Test doubles for the GitHub API"""


class FakeResponse:
    """Minimal stand-in for requests.Response"""

    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeAPIClient:
    """
    Serves canned payloads keyed by user/repo and records every call.
    A value that is an Exception instance is raised instead of returned.
    """

    def __init__(self, users=None, repos=None, commits=None):
        self.users = users or {}
        self.repos = repos or {}
        self.commits = commits or {}
        self.calls = []

    def _serve(self, value):
        if isinstance(value, Exception):
            raise value
        return value

    def get_user(self, username):
        self.calls.append(('user', username))
        return self._serve(self.users.get(username))

    def get_user_repos(self, username):
        self.calls.append(('repos', username))
        return self._serve(self.repos.get(username))

    def get_repo_commits(self, owner, repo):
        self.calls.append(('commits', owner, repo))
        return self._serve(self.commits.get((owner, repo)))
