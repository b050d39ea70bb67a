"""
Storage interface the author service reads and writes through.

Implementations own id assignment and timestamps:
`add` sets `id`, `created_at` and `updated_at`; `update` bumps `updated_at`
only. Each call is atomic from the caller's point of view.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from app.models.author import Author


class AuthorStore(Protocol):

    def list_all(self) -> list[Author]:
        """Every author, ordered by id."""
        ...

    def get(self, author_id: int) -> Author | None:
        ...

    def add(self, values: Mapping[str, Any]) -> Author:
        ...

    def update(self, author: Author, changes: Mapping[str, Any]) -> Author:
        ...

    def delete(self, author: Author) -> None:
        ...
