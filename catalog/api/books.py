from fastapi import APIRouter, Depends, status
from uuid import UUID
from catalog.dependencies import get_repo
from catalog.domain.dtos import BookForm
from catalog.repo.memory import DocumentStore
from catalog.services.books import BookService

router = APIRouter(prefix="/v1/books", tags=["books"])

def get_book_service(repo: DocumentStore = Depends(get_repo)) -> BookService:
    return BookService(repo)

@router.post("", status_code=status.HTTP_201_CREATED)
def create_book(body: BookForm, svc: BookService = Depends(get_book_service)):
    return svc.create(body.model_dump())

@router.get("")
def list_books(svc: BookService = Depends(get_book_service)):
    return svc.list()

@router.get("/{book_id}")
def get_book(book_id: UUID, svc: BookService = Depends(get_book_service)):
    return svc.detail(book_id)

@router.put("/{book_id}")
def update_book(book_id: UUID, body: BookForm, svc: BookService = Depends(get_book_service)):
    return svc.update(book_id, body.model_dump())

@router.get("/{book_id}/delete")
def confirm_delete_book(book_id: UUID, svc: BookService = Depends(get_book_service)):
    return svc.prepare_delete(book_id)

@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: UUID, svc: BookService = Depends(get_book_service)):
    svc.delete(book_id)
