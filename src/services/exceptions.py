"""Typed errors raised by the bookmark handlers and mapped to responses in api.main."""


class BookmarkValidationError(Exception):
    """
    Raised when client input is missing or malformed.

    The message is returned to the client verbatim as `error.message` with a 400 status.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BookmarkNotFoundError(Exception):
    """Raised when no bookmark exists with the requested id."""

    message = "Bookmark Not Found"

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark with id {bookmark_id} not found")


class UnauthorizedError(Exception):
    """Raised when the bearer token is missing or does not match the configured token."""

    message = "Unauthorized request"

    def __init__(self) -> None:
        super().__init__(self.message)
