"""
Data access for bookmarks.

Each function takes the request's AsyncSession explicitly and applies no business
rules. Functions flush rather than commit; the session dependency commits once
at the end of the request.
"""
import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate

logger = logging.getLogger(__name__)


async def list_bookmarks(db: AsyncSession) -> list[Bookmark]:
    """Return every bookmark, ordered by id."""
    result = await db.execute(select(Bookmark).order_by(Bookmark.id))
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, bookmark_id: int) -> Bookmark | None:
    """Return the bookmark with the given id, or None if it doesn't exist."""
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return result.scalar_one_or_none()


async def create_bookmark(db: AsyncSession, data: BookmarkCreate) -> Bookmark:
    """Insert a new bookmark and return it with its generated id."""
    bookmark = Bookmark(
        title=data.title,
        url=data.url,
        description=data.description,
        rating=data.rating,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> int:
    """
    Delete the bookmark with the given id.

    Returns:
        Number of rows deleted. Zero when no such bookmark exists; that is not an error.
    """
    result = await db.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
    await db.flush()
    return result.rowcount


async def update_bookmark(db: AsyncSession, bookmark_id: int, data: BookmarkUpdate) -> int:
    """
    Apply the supplied fields of `data` to the bookmark with the given id.

    Fields the caller did not send are left untouched.

    Returns:
        Number of rows updated (0 or 1).
    """
    values = data.model_dump(exclude_unset=True)
    if not values:
        return 0
    result = await db.execute(
        update(Bookmark).where(Bookmark.id == bookmark_id).values(**values),
    )
    await db.flush()
    logger.debug("Updated fields %s of bookmark %s", sorted(values), bookmark_id)
    return result.rowcount
