from fastapi import APIRouter, Depends, status
from uuid import UUID
from catalog.dependencies import get_repo
from catalog.domain.dtos import AuthorForm
from catalog.repo.memory import DocumentStore
from catalog.services.authors import AuthorService

router = APIRouter(prefix="/v1/authors", tags=["authors"])

def get_author_service(repo: DocumentStore = Depends(get_repo)) -> AuthorService:
    return AuthorService(repo)

@router.post("", status_code=status.HTTP_201_CREATED)
def create_author(body: AuthorForm, svc: AuthorService = Depends(get_author_service)):
    return svc.create(body.model_dump())

@router.get("")
def list_authors(svc: AuthorService = Depends(get_author_service)):
    return svc.list()

@router.get("/{author_id}")
def get_author(author_id: UUID, svc: AuthorService = Depends(get_author_service)):
    return svc.detail(author_id)

@router.put("/{author_id}")
def update_author(author_id: UUID, body: AuthorForm, svc: AuthorService = Depends(get_author_service)):
    return svc.update(author_id, body.model_dump())

@router.get("/{author_id}/delete")
def confirm_delete_author(author_id: UUID, svc: AuthorService = Depends(get_author_service)):
    return svc.prepare_delete(author_id)

@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_author(author_id: UUID, svc: AuthorService = Depends(get_author_service)):
    svc.delete(author_id)
