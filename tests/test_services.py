import pytest

from app.core.errors import AuthorNotFoundError, ValidationError
from app.repos.author_repo import AuthorRepository
from app.services.author_service import AuthorService


VALID = {"name": "Service Author", "email": "service@test.com", "location": "Lisbon"}


class TestAuthorService:
    """Test author service layer against in-memory storage."""

    def test_create_author_success(self, author_service):
        author = author_service.create(VALID)

        assert author.id == 1
        assert author.name == "Service Author"
        assert author.email == "service@test.com"
        assert author.location == "Lisbon"
        assert author.created_at is not None
        assert author.updated_at == author.created_at

    def test_create_assigns_distinct_ids(self, author_service):
        first = author_service.create(VALID)
        second = author_service.create(VALID)

        assert first.id != second.id

    def test_create_validation_reports_each_invalid_field(self, author_service, memory_repo):
        with pytest.raises(ValidationError) as exc_info:
            author_service.create({"name": "", "email": "bad", "location": "Rio 2"})

        assert exc_info.value.fields == {
            "name": ["The name field is required."],
            "email": ["The email must be a valid email address."],
            "location": ["The location may only contain letters."],
        }
        assert len(memory_repo) == 0

    def test_create_rejects_non_string_optional(self, author_service):
        with pytest.raises(ValidationError) as exc_info:
            author_service.create({**VALID, "github": 42})

        assert exc_info.value.fields == {"github": ["The github must be a string."]}

    def test_create_rejects_non_mapping(self, author_service):
        with pytest.raises(ValidationError) as exc_info:
            author_service.create(["name"])  # type: ignore[arg-type]

        assert "body" in exc_info.value.fields

    def test_create_drops_unlisted_fields(self, author_service):
        author = author_service.create({**VALID, "id": 77, "updated_at": "never"})

        assert author.id == 1

    def test_list_authors_empty(self, author_service):
        assert author_service.list_all() == []

    def test_list_authors_in_id_order(self, author_service):
        created = [author_service.create({**VALID, "name": f"A{i}"}) for i in range(3)]

        assert [a.id for a in author_service.list_all()] == [a.id for a in created]

    def test_get_by_id(self, author_service):
        author = author_service.create(VALID)

        assert author_service.get_by_id(author.id) is author

    def test_get_missing_author(self, author_service):
        with pytest.raises(AuthorNotFoundError) as exc_info:
            author_service.get_by_id(5)

        assert exc_info.value.author_id == 5
        assert exc_info.value.status_code == 404

    def test_update_merges_supplied_fields(self, author_service):
        author = author_service.create({**VALID, "twitter": "svc"})
        created_at = author.created_at
        before = author.updated_at

        updated = author_service.update(author.id, {"email": "new@x.com"})

        assert updated.id == author.id
        assert updated.email == "new@x.com"
        assert updated.name == "Service Author"
        assert updated.twitter == "svc"
        assert updated.created_at == created_at
        assert updated.updated_at >= before

    def test_update_missing_author(self, author_service):
        with pytest.raises(AuthorNotFoundError):
            author_service.update(3, {"email": "new@x.com"})

    def test_update_rejects_clearing_required_field(self, author_service):
        author = author_service.create(VALID)

        with pytest.raises(ValidationError) as exc_info:
            author_service.update(author.id, {"name": None})

        assert exc_info.value.fields == {"name": ["The name field is required."]}
        assert author_service.get_by_id(author.id).name == "Service Author"

    def test_update_with_empty_payload_only_touches(self, author_service):
        author = author_service.create(VALID)
        before = author.updated_at

        updated = author_service.update(author.id, {})

        assert updated.name == "Service Author"
        assert updated.updated_at >= before

    def test_delete_author(self, author_service):
        author = author_service.create(VALID)

        author_service.delete(author.id)

        with pytest.raises(AuthorNotFoundError):
            author_service.get_by_id(author.id)
        assert author_service.list_all() == []

    def test_delete_missing_author(self, author_service):
        with pytest.raises(AuthorNotFoundError):
            author_service.delete(1)


class TestAuthorServiceWithDatabase:
    """Same service over the SQLAlchemy repository."""

    def test_round_trip(self, db_session):
        service = AuthorService(AuthorRepository(db_session))

        author = service.create(VALID)
        assert author.id is not None

        service.update(author.id, {"location": "Porto"})
        assert service.get_by_id(author.id).location == "Porto"

        service.delete(author.id)
        assert service.list_all() == []
