"""계약서 템플릿 조회 API 라우터입니다."""

from fastapi import APIRouter, Depends
from typing import List

from contract_lifecycle.dependencies import get_repo
from contract_lifecycle.middleware.auth_middleware import get_current_user
from contract_lifecycle.models.user import User
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.schemas.template import ContractTemplateOut
from contract_lifecycle.services import template_service

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=List[ContractTemplateOut])
def list_templates(repo: ContractRepository = Depends(get_repo), _current_user: User = Depends(get_current_user)):
    return template_service.list_templates(repo)


@router.get("/{template_id}", response_model=ContractTemplateOut)
def get_template(
    template_id: int,
    repo: ContractRepository = Depends(get_repo),
    _current_user: User = Depends(get_current_user),
):
    return template_service.get_template(repo, template_id)
