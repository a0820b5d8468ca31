from fastapi import APIRouter, Depends, status
from uuid import UUID
from catalog.dependencies import get_repo
from catalog.domain.dtos import GenreForm
from catalog.repo.memory import DocumentStore
from catalog.services.genres import GenreService

router = APIRouter(prefix="/v1/genres", tags=["genres"])

def get_genre_service(repo: DocumentStore = Depends(get_repo)) -> GenreService:
    return GenreService(repo)

@router.post("", status_code=status.HTTP_201_CREATED)
def create_genre(body: GenreForm, svc: GenreService = Depends(get_genre_service)):
    return svc.create(body.model_dump())

@router.get("")
def list_genres(svc: GenreService = Depends(get_genre_service)):
    return svc.list()

@router.get("/{genre_id}")
def get_genre(genre_id: UUID, svc: GenreService = Depends(get_genre_service)):
    return svc.detail(genre_id)

@router.put("/{genre_id}")
def update_genre(genre_id: UUID, body: GenreForm, svc: GenreService = Depends(get_genre_service)):
    return svc.update(genre_id, body.model_dump())

@router.get("/{genre_id}/delete")
def confirm_delete_genre(genre_id: UUID, svc: GenreService = Depends(get_genre_service)):
    return svc.prepare_delete(genre_id)

@router.delete("/{genre_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_genre(genre_id: UUID, svc: GenreService = Depends(get_genre_service)):
    svc.delete(genre_id)
