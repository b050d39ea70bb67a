from collections.abc import Mapping
from typing import Any, TypeVar
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import AuthorNotFoundError, ValidationError, field_messages
from app.core.logging import get_logger
from app.models.author import Author
from app.repos.base import AuthorStore
from app.schemas.author import AuthorCreate, AuthorUpdate

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def _validate(schema: type[M], fields: Mapping[str, Any]) -> M:
    if not isinstance(fields, Mapping):
        raise ValidationError({"body": ["The request body must be a JSON object."]})
    try:
        return schema.model_validate(dict(fields))
    except PydanticValidationError as e:
        raise ValidationError(field_messages(e.errors())) from None


class AuthorService:
    """Author CRUD over an injected AuthorStore."""

    def __init__(self, store: AuthorStore):
        self.store: AuthorStore = store

    # List authors
    def list_all(self) -> list[Author]:
        return self.store.list_all()

    # Get author or raise AuthorNotFoundError
    def get_by_id(self, author_id: int) -> Author:
        author = self.store.get(author_id)
        if author is None:
            logger.info("Author %s not found", author_id)
            raise AuthorNotFoundError(author_id)
        return author

    # Create author
    def create(self, fields: Mapping[str, Any]) -> Author:
        data = _validate(AuthorCreate, fields)
        author = self.store.add(data.model_dump())
        logger.info("Author %s created", author.id)
        return author

    # Update author; only supplied fields are applied
    def update(self, author_id: int, fields: Mapping[str, Any]) -> Author:
        author = self.get_by_id(author_id)
        data = _validate(AuthorUpdate, fields)
        changes = data.model_dump(exclude_unset=True)
        author = self.store.update(author, changes)
        logger.info("Author %s updated (%s)", author.id, ", ".join(sorted(changes)))
        return author

    # Delete author
    def delete(self, author_id: int) -> None:
        author = self.get_by_id(author_id)
        self.store.delete(author)
        logger.info("Author %s deleted", author_id)
