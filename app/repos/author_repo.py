from collections.abc import Mapping
from typing import Any
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.author import Author


class AuthorRepository:
    """SQLAlchemy-backed author storage. Commits on every write."""

    def __init__(self, db: Session):
        self.db: Session = db

    # List authors
    def list_all(self) -> list[Author]:
        stmt = select(Author).order_by(Author.id.asc())
        return list(self.db.scalars(stmt).all())

    # Get an author by ID
    def get(self, author_id: int) -> Author | None:
        return self.db.get(Author, author_id)

    # Create a new author
    def add(self, values: Mapping[str, Any]) -> Author:
        author = Author(**values)
        self.db.add(author)
        self.db.commit()
        self.db.refresh(author)
        return author

    # Apply changes and bump updated_at
    def update(self, author: Author, changes: Mapping[str, Any]) -> Author:
        for field, value in changes.items():
            setattr(author, field, value)
        author.touch()
        self.db.commit()
        self.db.refresh(author)
        return author

    # Hard delete
    def delete(self, author: Author) -> None:
        self.db.delete(author)
        self.db.commit()
