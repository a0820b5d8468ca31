from fastapi import APIRouter, Depends
from catalog.dependencies import get_repo
from catalog.domain.dtos import CatalogSummary
from catalog.repo.memory import DocumentStore
from catalog.services.catalog import CatalogService

router = APIRouter(prefix="/v1/catalog", tags=["catalog"])

@router.get("", response_model=CatalogSummary)
def catalog_summary(repo: DocumentStore = Depends(get_repo)):
    return CatalogService(repo).summary()
