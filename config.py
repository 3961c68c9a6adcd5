"""
Configuration settings for GitHub Profile Scraper
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when the scraper cannot start with the given settings"""


# GitHub API Configuration
GITHUB_BASE_URL = 'https://api.github.com'

# Worker pool and rate limiting settings
MAX_CONCURRENT_WORKERS = 16
RETRY_DELAY = 10  # seconds to wait after a rate-limited response
MAX_RETRIES = 3
REQUEST_TIMEOUT = 30  # seconds

# Logging configuration
DEFAULT_LOG_LEVEL = logging.INFO
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOGGER_NAME = 'GitHubProfileScraper'

# File paths
LOGS_DIR = 'logs'
DEFAULT_OUTPUT_FILE = 'github_profiles_and_repos.csv'
DEFAULT_ERROR_LOG = 'error_log.txt'
DEFAULT_INPUT_COLUMN = 'contributor_login'

# Placeholder for fields the API leaves empty
NOT_AVAILABLE = 'N/A'

# API request headers
DEFAULT_HEADERS = {
    'Accept': 'application/vnd.github.v3+json',
    'User-Agent': 'GitHub-Profile-Scraper'
}


@dataclass(frozen=True)
class ScraperConfig:
    """Settings shared read-only by every worker and API client"""
    token: str = field(repr=False)
    base_url: str = GITHUB_BASE_URL
    max_workers: int = MAX_CONCURRENT_WORKERS
    retry_delay: float = RETRY_DELAY
    max_retries: int = MAX_RETRIES
    request_timeout: float = REQUEST_TIMEOUT

    def __post_init__(self):
        if not self.token:
            raise ConfigurationError('GITHUB_TOKEN is not set. Please set it as an environment variable.')
        if self.max_workers < 1:
            raise ConfigurationError(f'max_workers must be at least 1, got {self.max_workers}')
        if self.max_retries < 0:
            raise ConfigurationError(f'max_retries cannot be negative, got {self.max_retries}')
        if self.retry_delay < 0:
            raise ConfigurationError(f'retry_delay cannot be negative, got {self.retry_delay}')


def load_config(**overrides):
    """
    Build the scraper configuration from the environment (and a .env file).

    Keyword overrides with a value of None are ignored so CLI flags that
    were not given fall back to the defaults above.
    """
    load_dotenv()

    settings = {
        'token': os.environ.get('GITHUB_TOKEN', '').strip(),
        'base_url': os.environ.get('GITHUB_API_BASE_URL', GITHUB_BASE_URL).rstrip('/'),
    }
    settings.update({key: value for key, value in overrides.items() if value is not None})

    return ScraperConfig(**settings)
