"""Shared fixtures for API tests."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark


def make_bookmarks_array() -> list[dict]:
    """Three well-formed bookmarks with fixed ids."""
    return [
        {
            "id": 1,
            "title": "Google",
            "url": "http://www.google.com",
            "description": "search engine",
            "rating": 4,
        },
        {
            "id": 2,
            "title": "Amazon",
            "url": "http://www.amazon.com",
            "description": "e-commerce",
            "rating": 3,
        },
        {
            "id": 3,
            "title": "Bing",
            "url": "http://www.bing.com",
            "description": "search engine?",
            "rating": 2,
        },
    ]


@pytest.fixture
def malicious_payload() -> tuple[dict, dict]:
    """A bookmark carrying script and event-handler markup, and how it should come back."""
    malicious = {
        "id": 911,
        "title": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "url": "https://www.hackers.com",
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
        "rating": 1,
    }
    expected = {
        **malicious,
        "title": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist">. '
            "But not <strong>all</strong> bad."
        ),
    }
    return malicious, expected


@pytest.fixture
async def test_bookmarks(db_session: AsyncSession) -> list[dict]:
    """Insert the sample bookmarks and return them as plain dicts."""
    bookmarks = make_bookmarks_array()
    db_session.add_all(Bookmark(**data) for data in bookmarks)
    await db_session.flush()
    return bookmarks


@pytest.fixture
async def malicious_bookmark(
    db_session: AsyncSession, malicious_payload: tuple[dict, dict],
) -> tuple[dict, dict]:
    """Insert the malicious bookmark directly, bypassing the API."""
    malicious, expected = malicious_payload
    db_session.add(Bookmark(**malicious))
    await db_session.flush()
    return malicious, expected
