"""
Record types flowing from the GitHub API to the output CSV
"""

from dataclasses import dataclass, field, fields
from typing import Union

from config import NOT_AVAILABLE
from utils import or_na, dig


PROFILE_HEADERS = [
    'username', 'name', 'avatarUrl', 'bio', 'company', 'location', 'email',
    'website', 'twitter', 'followersCount', 'followingCount', 'publicRepos',
    'publicGists', 'createdAt', 'updatedAt',
]

REPO_HEADERS = [
    'repoName', 'repoDescription', 'repoUrl', 'repoStars', 'repoForks',
    'repoWatchers', 'repoLanguage', 'repoCreatedAt', 'repoUpdatedAt',
    'repoPushedAt', 'repoSize', 'repoOpenIssues', 'repoLicense',
    'repoDefaultBranch',
]

# Only the first page of /commits is fetched, so the count is capped by the page size
COMMIT_HEADERS = [
    'repoCommitCountFirstPage', 'repoLatestCommitSha', 'repoLatestCommitMessage',
    'repoLatestCommitAuthor', 'repoLatestCommitDate',
]

OUTPUT_HEADERS = PROFILE_HEADERS + REPO_HEADERS + COMMIT_HEADERS

# Counts fall back to the N/A string when the API leaves them out
Number = Union[int, str]


def _as_row(record, headers):
    return dict(zip(headers, (getattr(record, f.name) for f in fields(record))))


@dataclass(frozen=True)
class UserProfile:
    username: str
    name: str
    avatar_url: str
    bio: str
    company: str
    location: str
    email: str
    website: str
    twitter: str
    followers: Number
    following: Number
    public_repos: Number
    public_gists: Number
    created_at: str
    updated_at: str

    @classmethod
    def from_api(cls, data):
        return cls(
            username=or_na(data.get('login')),
            name=or_na(data.get('name')),
            avatar_url=or_na(data.get('avatar_url')),
            bio=or_na(data.get('bio')),
            company=or_na(data.get('company')),
            location=or_na(data.get('location')),
            email=or_na(data.get('email')),
            website=or_na(data.get('blog')),
            twitter=or_na(data.get('twitter_username')),
            followers=or_na(data.get('followers')),
            following=or_na(data.get('following')),
            public_repos=or_na(data.get('public_repos')),
            public_gists=or_na(data.get('public_gists')),
            created_at=or_na(data.get('created_at')),
            updated_at=or_na(data.get('updated_at')),
        )

    def to_row(self):
        return _as_row(self, PROFILE_HEADERS)


@dataclass(frozen=True)
class RepositorySummary:
    name: str = NOT_AVAILABLE
    description: str = NOT_AVAILABLE
    url: str = NOT_AVAILABLE
    stars: Number = NOT_AVAILABLE
    forks: Number = NOT_AVAILABLE
    watchers: Number = NOT_AVAILABLE
    language: str = NOT_AVAILABLE
    created_at: str = NOT_AVAILABLE
    updated_at: str = NOT_AVAILABLE
    pushed_at: str = NOT_AVAILABLE
    size: Number = NOT_AVAILABLE
    open_issues: Number = NOT_AVAILABLE
    license: str = NOT_AVAILABLE
    default_branch: str = NOT_AVAILABLE

    @classmethod
    def from_api(cls, data):
        return cls(
            name=or_na(data.get('name')),
            description=or_na(data.get('description')),
            url=or_na(data.get('html_url')),
            stars=or_na(data.get('stargazers_count')),
            forks=or_na(data.get('forks_count')),
            watchers=or_na(data.get('watchers_count')),
            language=or_na(data.get('language')),
            created_at=or_na(data.get('created_at')),
            updated_at=or_na(data.get('updated_at')),
            pushed_at=or_na(data.get('pushed_at')),
            size=or_na(data.get('size')),
            open_issues=or_na(data.get('open_issues_count')),
            license=or_na(dig(data, 'license', 'name')),
            default_branch=or_na(data.get('default_branch')),
        )

    def to_row(self):
        return _as_row(self, REPO_HEADERS)


@dataclass(frozen=True)
class LatestCommit:
    count: Number = NOT_AVAILABLE
    sha: str = NOT_AVAILABLE
    message: str = NOT_AVAILABLE
    author: str = NOT_AVAILABLE
    date: str = NOT_AVAILABLE

    @classmethod
    def from_api(cls, commits):
        """Summarize a commit list; the API returns the newest commit first"""
        if commits is None:
            return cls()
        if not commits:
            return cls(count=0)

        latest = commits[0] or {}
        return cls(
            count=len(commits),
            sha=or_na(latest.get('sha')),
            message=or_na(dig(latest, 'commit', 'message')),
            author=or_na(dig(latest, 'commit', 'author', 'name')),
            date=or_na(dig(latest, 'commit', 'author', 'date')),
        )

    def to_row(self):
        return _as_row(self, COMMIT_HEADERS)


def build_row(profile, repository=None, commit=None):
    """Join one profile with an optional repository and its latest commit"""
    row = profile.to_row()
    row.update((repository or RepositorySummary()).to_row())
    row.update((commit or LatestCommit()).to_row())
    return row


@dataclass
class RowsOutcome:
    """Rows produced for one user, in the order the API listed the repositories"""
    username: str
    rows: list = field(default_factory=list)

    @property
    def succeeded(self):
        return True


@dataclass
class FailureOutcome:
    """A user that could not be processed"""
    username: str
    reason: str

    @property
    def succeeded(self):
        return False
