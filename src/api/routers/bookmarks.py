"""Bookmark CRUD endpoints."""
import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, require_api_token
from models.bookmark import Bookmark
from schemas.bookmark import (
    NO_UPDATE_FIELDS_MESSAGE,
    BookmarkCreate,
    BookmarkResponse,
    BookmarkUpdate,
    missing_field_message,
)
from services import bookmark_service
from services.exceptions import BookmarkNotFoundError, BookmarkValidationError

logger = logging.getLogger(__name__)

BOOKMARKS_PATH = "/api/bookmarks"

# Bounds of the INTEGER id column
MIN_BOOKMARK_ID = -(2**31)
MAX_BOOKMARK_ID = 2**31 - 1

router = APIRouter(
    prefix=BOOKMARKS_PATH,
    tags=["bookmarks"],
    dependencies=[Depends(require_api_token)],
)


async def load_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """
    Fetch the bookmark addressed by the path, for every verb on /{bookmark_id}.

    Runs before the body fields are validated, so a PATCH with invalid fields
    for a missing bookmark is reported as 404. A body that is not valid JSON is
    rejected while the request is parsed, before this runs, and gets 400.
    Ids outside the column's range cannot exist and are reported as 404 without
    a query.
    """
    if not MIN_BOOKMARK_ID <= bookmark_id <= MAX_BOOKMARK_ID:
        logger.error("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)

    bookmark = await bookmark_service.get_bookmark(db, bookmark_id)
    if bookmark is None:
        logger.error("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)
    return bookmark


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    bookmarks = await bookmark_service.list_bookmarks(db)
    return [BookmarkResponse.from_bookmark(b) for b in bookmarks]


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    response: Response,
    data: BookmarkCreate | None = None,
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Create a new bookmark; the Location header points at the new resource."""
    if data is None:
        raise BookmarkValidationError(missing_field_message("title"))

    bookmark = await bookmark_service.create_bookmark(db, data)
    logger.info("Bookmark with id %s created", bookmark.id)
    response.headers["Location"] = f"{BOOKMARKS_PATH}/{bookmark.id}"
    return BookmarkResponse.from_bookmark(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark: Bookmark = Depends(load_bookmark),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return BookmarkResponse.from_bookmark(bookmark)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark: Bookmark = Depends(load_bookmark),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(db, bookmark.id)
    logger.info("Bookmark with id %s deleted", bookmark.id)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    data: BookmarkUpdate | None = None,
    bookmark: Bookmark = Depends(load_bookmark),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Update only the fields supplied in the body."""
    if data is None:
        raise BookmarkValidationError(NO_UPDATE_FIELDS_MESSAGE)

    await bookmark_service.update_bookmark(db, bookmark.id, data)
    logger.info("Bookmark with id %s updated", bookmark.id)
