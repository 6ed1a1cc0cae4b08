"""계약서 템플릿 응답 스키마입니다."""

from pydantic import BaseModel


class ContractTemplateOut(BaseModel):
    template_id: int
    name: str
    description: str
    content: str

    model_config = {"from_attributes": True}
