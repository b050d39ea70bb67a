from .base import AuthorStore
from .author_repo import AuthorRepository
from .memory import InMemoryAuthorRepository

__all__ = ["AuthorStore", "AuthorRepository", "InMemoryAuthorRepository"]
