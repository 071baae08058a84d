"""Static bearer-token authentication."""
import logging
import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings
from services.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme; missing headers are reported by us, not by FastAPI
security = HTTPBearer(auto_error=False)


def token_matches(token: str, expected: str) -> bool:
    """Compare tokens in constant time."""
    return secrets.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


async def require_api_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Dependency that rejects requests without the configured bearer token.

    Raises:
        UnauthorizedError: If the Authorization header is missing, is not a
            Bearer credential, or carries the wrong token.
    """
    if credentials is None or not token_matches(credentials.credentials, settings.api_token):
        logger.error("Unauthorized request to path: %s", request.url.path)
        raise UnauthorizedError()
