"""
Pytest configuration for the email renderer
"""

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def configure_logging():
    """Keep test output to warnings and errors."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)
    yield


@pytest.fixture
def block_record():
    """CMS record for an entry using the blocks model."""
    return {
        "_id": "entry-blocks-1",
        "date": "2024-03-05",
        "title": "New tape",
        "tags": ["release", "music"],
        "publishToEmail": True,
        "blocks": [
            {"_type": "textBlock", "_key": "a", "text": "Hello **there**"},
            {"_type": "embedBlock", "_key": "b", "url": "https://youtu.be/abc123"},
            {"_type": "imageBlock", "_key": "c", "imageUrl": "https://cdn.example.com/a.jpg", "size": "small"},
            {"_type": "audioBlock", "_key": "d", "audioUrl": "https://cdn.example.com/a.mp3"},
        ],
    }


@pytest.fixture
def legacy_record():
    """CMS record for a pre-blocks entry."""
    return {
        "_id": "entry-legacy-1",
        "date": "2023-11-20",
        "title": "Old sketch",
        "tags": ["sketch"],
        "content": "Some words",
        "imageUrl": "https://cdn.example.com/old.jpg",
        "audioUrl": "https://cdn.example.com/old.mp3",
        "embedUrl": "https://soundcloud.com/someone/track",
    }
