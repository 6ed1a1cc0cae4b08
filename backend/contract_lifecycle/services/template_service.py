"""계약서 템플릿 조회 서비스입니다."""

from typing import List

from contract_lifecycle.exceptions import NotFoundError
from contract_lifecycle.models import ContractTemplate
from contract_lifecycle.repositories.base import ContractRepository


def list_templates(repo: ContractRepository) -> List[ContractTemplate]:
    return repo.list_templates()


def get_template(repo: ContractRepository, template_id: int) -> ContractTemplate:
    template = repo.get_template(template_id)
    if not template:
        raise NotFoundError("템플릿을 찾을 수 없습니다.")
    return template
