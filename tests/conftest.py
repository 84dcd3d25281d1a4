"""
Shared fixtures for the pipeline tests.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from config.settings import Settings
from tools.youtube_tools import YouTubeAPIClient
from youtube_fakes import FakeYouTubeAPI


@pytest.fixture
def settings():
    """Settings with a test key, independent of any .env file."""
    return Settings(
        _env_file=None,
        youtube_api_key="test-api-key",
        youtube_handle_strategy="search",
        youtube_max_concurrent_requests=10,
        youtube_batch_size=50,
        log_file=None
    )


@pytest.fixture
def fake_api():
    return FakeYouTubeAPI()


@pytest.fixture
def client(settings, fake_api):
    return YouTubeAPIClient(settings=settings, transport=fake_api.transport())
