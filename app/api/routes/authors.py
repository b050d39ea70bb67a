from fastapi import APIRouter, Body, Depends, Path
from app.api.deps import get_author_service, require_api_key
from app.services.author_service import AuthorService
from app.schemas.author import AuthorRead, DeleteConfirmation
from typing import Annotated, Any
from starlette.status import HTTP_201_CREATED

router = APIRouter(
    prefix="/authors",
    tags=["authors"],
    dependencies=[Depends(require_api_key)],
)

Service = Annotated[AuthorService, Depends(get_author_service)]
Payload = Annotated[dict[str, Any], Body()]
# Bounded to a signed 64-bit INTEGER column
AuthorId = Annotated[int, Path(ge=-(2**63), le=2**63 - 1, description="Author ID")]


@router.get("", response_model=list[AuthorRead])
def list_authors(service: Service):
    return service.list_all()


@router.get("/{author_id}", response_model=AuthorRead)
def get_author(author_id: AuthorId, service: Service):
    return service.get_by_id(author_id)


@router.post("", response_model=AuthorRead, status_code=HTTP_201_CREATED)
def create_author(data: Payload, service: Service):
    return service.create(data)


@router.put("/{author_id}", response_model=AuthorRead)
def update_author(author_id: AuthorId, data: Payload, service: Service):
    return service.update(author_id, data)


@router.delete("/{author_id}", response_model=DeleteConfirmation)
def delete_author(author_id: AuthorId, service: Service):
    service.delete(author_id)
    return DeleteConfirmation()
