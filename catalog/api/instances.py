from fastapi import APIRouter, Depends, status
from uuid import UUID
from catalog.dependencies import get_repo
from catalog.domain.dtos import BookInstanceForm
from catalog.repo.memory import DocumentStore
from catalog.services.instances import BookInstanceService

router = APIRouter(prefix="/v1/bookinstances", tags=["instances"])

def get_instance_service(repo: DocumentStore = Depends(get_repo)) -> BookInstanceService:
    return BookInstanceService(repo)

@router.post("", status_code=status.HTTP_201_CREATED)
def create_instance(body: BookInstanceForm, svc: BookInstanceService = Depends(get_instance_service)):
    return svc.create(body.model_dump())

@router.get("")
def list_instances(svc: BookInstanceService = Depends(get_instance_service)):
    return svc.list()

@router.get("/{instance_id}")
def get_instance(instance_id: UUID, svc: BookInstanceService = Depends(get_instance_service)):
    return svc.detail(instance_id)

@router.put("/{instance_id}")
def update_instance(instance_id: UUID, body: BookInstanceForm, svc: BookInstanceService = Depends(get_instance_service)):
    return svc.update(instance_id, body.model_dump())

@router.get("/{instance_id}/delete")
def confirm_delete_instance(instance_id: UUID, svc: BookInstanceService = Depends(get_instance_service)):
    return svc.prepare_delete(instance_id)

@router.delete("/{instance_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_instance(instance_id: UUID, svc: BookInstanceService = Depends(get_instance_service)):
    svc.delete(instance_id)
