"""
Request dependencies shared by the author routes.
"""

import secrets
from typing import Annotated
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import ForbiddenAccessError
from app.db.session import get_db
from app.repos.author_repo import AuthorRepository
from app.services.author_service import AuthorService


def require_api_key(x_api_key: Annotated[str | None, Header()] = None) -> None:
    """No-op unless API_KEY is configured; then the header must match it."""
    expected = settings.API_KEY
    if not expected:
        return
    if not x_api_key or not secrets.compare_digest(x_api_key.encode(), expected.encode()):
        raise ForbiddenAccessError()


def get_author_service(db: Annotated[Session, Depends(get_db)]) -> AuthorService:
    return AuthorService(AuthorRepository(db))
