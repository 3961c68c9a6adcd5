import pytest

import config
from config import ScraperConfig


@pytest.fixture
def scraper_config():
    return ScraperConfig(token='test-token', base_url='https://api.test', retry_delay=0, max_retries=3)


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    """Keep a developer's .env file out of the tests"""
    monkeypatch.setattr(config, 'load_dotenv', lambda *args, **kwargs: False)
