"""Pydantic schemas for bookmark endpoints."""
import math
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from core.config import get_settings
from services.html_sanitizer import sanitize_html

# Error type used for every bookmark validation failure. The API error handler
# returns messages of this type to the client unchanged.
BOOKMARK_ERROR_TYPE = "bookmark_invalid"

# Checked in this order; the first missing field is reported
REQUIRED_CREATE_FIELDS = ("title", "url", "rating")
UPDATABLE_FIELDS = ("title", "url", "description", "rating")

MIN_RATING = 0
MAX_RATING = 5

RATING_MESSAGE = "'rating' must be a number between 0 and 5"
URL_MESSAGE = "'url' must be a valid URL"
NO_UPDATE_FIELDS_MESSAGE = (
    "Request body must contain either 'title', 'url', 'description', or 'rating'"
)
NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object"

_http_url_adapter = TypeAdapter(HttpUrl)


def bookmark_error(message: str) -> PydanticCustomError:
    """Build a validation error whose message is shown to the client as-is."""
    return PydanticCustomError(BOOKMARK_ERROR_TYPE, message)


def missing_field_message(field: str) -> str:
    """Message for a required field that was not supplied."""
    return f"'{field}' is required"


def is_blank(value: Any) -> bool:
    """Whether a value counts as not supplied (None or an empty/whitespace string)."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def coerce_rating(value: Any) -> int:
    """
    Coerce a rating to an int in [0, 5].

    Accepts ints, integral floats (3.0), and numeric strings ("3", " 4 ", "2.0").
    Booleans and anything non-numeric are rejected.

    Raises:
        PydanticCustomError: If the value is not an integer between 0 and 5.
    """
    if isinstance(value, bool):
        raise bookmark_error(RATING_MESSAGE)

    number: float | int
    if isinstance(value, int | float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise bookmark_error(RATING_MESSAGE) from None
    else:
        raise bookmark_error(RATING_MESSAGE)

    if isinstance(number, float):
        if not math.isfinite(number) or not number.is_integer():
            raise bookmark_error(RATING_MESSAGE)
        number = int(number)

    if not MIN_RATING <= number <= MAX_RATING:
        raise bookmark_error(RATING_MESSAGE)
    return number


def validate_url(value: Any) -> str:
    """
    Check that `value` is an absolute http(s) URL.

    The original string is returned rather than pydantic's normalized form, so
    "https://example.com" is stored without a trailing slash. Surrounding
    whitespace is rejected since it would be stored as given.
    """
    if not isinstance(value, str) or value != value.strip():
        raise bookmark_error(URL_MESSAGE)
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError:
        raise bookmark_error(URL_MESSAGE) from None
    return value


def validate_title_length(title: str | None) -> str | None:
    """Validate that title doesn't exceed maximum length."""
    settings = get_settings()
    if title is not None and len(title) > settings.max_title_length:
        raise bookmark_error(
            f"'title' exceeds maximum length of {settings.max_title_length:,} characters",
        )
    return title


def validate_description_length(description: str | None) -> str | None:
    """Validate that description doesn't exceed maximum length."""
    settings = get_settings()
    if description is not None and len(description) > settings.max_description_length:
        raise bookmark_error(
            f"'description' exceeds maximum length of "
            f"{settings.max_description_length:,} characters",
        )
    return description


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    Checks run in a fixed order so the client always sees the first problem:
    required fields (title, url, rating), then the rating range, then the URL.
    """

    model_config = ConfigDict(extra="ignore")

    title: str
    url: str
    description: str | None = None
    rating: int

    @model_validator(mode="before")
    @classmethod
    def check_required_then_values(cls, data: Any) -> Any:
        """Validate presence, rating and URL in the order clients expect."""
        if not isinstance(data, dict):
            raise bookmark_error(NOT_AN_OBJECT_MESSAGE)

        for field in REQUIRED_CREATE_FIELDS:
            if is_blank(data.get(field)):
                raise bookmark_error(missing_field_message(field))

        data = dict(data)
        data["rating"] = coerce_rating(data["rating"])
        validate_url(data["url"])
        return data

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str) -> str:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating a bookmark.

    A field counts as supplied when its key is present with a non-null value, so
    `rating: 0` and `description: ""` are real updates. Only supplied fields end
    up in `model_fields_set`; use `model_dump(exclude_unset=True)` to get them.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: int | None = None

    @model_validator(mode="before")
    @classmethod
    def keep_supplied_fields(cls, data: Any) -> Any:
        """Drop unknown and null keys, require at least one field, and check values."""
        if not isinstance(data, dict):
            raise bookmark_error(NOT_AN_OBJECT_MESSAGE)

        supplied = {
            field: data[field] for field in UPDATABLE_FIELDS if data.get(field) is not None
        }
        if not supplied:
            raise bookmark_error(NO_UPDATE_FIELDS_MESSAGE)

        if "title" in supplied and is_blank(supplied["title"]):
            raise bookmark_error("'title' must not be empty")
        if "rating" in supplied:
            supplied["rating"] = coerce_rating(supplied["rating"])
        if "url" in supplied:
            validate_url(supplied["url"])
        return supplied

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str | None) -> str | None:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses. Build it with `from_bookmark` to sanitize."""

    id: int
    title: str
    url: str
    description: str | None = None
    rating: int

    @classmethod
    def from_bookmark(cls, bookmark: Any) -> "BookmarkResponse":
        """
        Build a response from a stored bookmark.

        Title and description have executable markup escaped, rating is coerced to
        an int, and id and url pass through unchanged.
        """
        return cls(
            id=bookmark.id,
            title=sanitize_html(bookmark.title),
            url=bookmark.url,
            description=sanitize_html(bookmark.description),
            rating=int(bookmark.rating),
        )
