from collections.abc import Mapping
from itertools import count
from typing import Any

from app.models.author import Author, utcnow


class InMemoryAuthorRepository:
    """Dict-backed author storage with the same contract as AuthorRepository."""

    def __init__(self) -> None:
        self._rows: dict[int, Author] = {}
        self._ids = count(1)

    def list_all(self) -> list[Author]:
        return [self._rows[k] for k in sorted(self._rows)]

    def get(self, author_id: int) -> Author | None:
        return self._rows.get(author_id)

    def add(self, values: Mapping[str, Any]) -> Author:
        now = utcnow()
        author = Author(**values)
        author.id = next(self._ids)
        author.created_at = now
        author.updated_at = now
        self._rows[author.id] = author
        return author

    def update(self, author: Author, changes: Mapping[str, Any]) -> Author:
        for field, value in changes.items():
            setattr(author, field, value)
        author.touch()
        return author

    def delete(self, author: Author) -> None:
        del self._rows[author.id]

    def __len__(self) -> int:
        return len(self._rows)
