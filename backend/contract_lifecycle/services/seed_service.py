"""기본 사용자와 기본 계약서 템플릿을 시드합니다. 이미 존재하면 건너뜁니다."""

import logging
from typing import Dict, List

from contract_lifecycle.models import ContractTemplate, UserRole
from contract_lifecycle.repositories.base import ContractRepository
from contract_lifecycle.schemas.user import UserCreate
from contract_lifecycle.services import user_service

logger = logging.getLogger(__name__)

NDA_CONTENT = """# NON-DISCLOSURE AGREEMENT

## 1. PARTIES
This Non-Disclosure Agreement is entered into between [PARTY A] ("Disclosing Party")
and [PARTY B] ("Receiving Party").

## 2. CONFIDENTIAL INFORMATION
Any information disclosed by the Disclosing Party that is designated as confidential
or should reasonably be understood to be confidential.

## 3. OBLIGATIONS
The Receiving Party shall keep the Confidential Information secret, shall not disclose
it to any third party and shall use it only to evaluate the business relationship.

## 4. TERM
This Agreement remains in effect for [TERM] years from the Effective Date.

## 5. GOVERNING LAW
This Agreement is governed by the laws of [JURISDICTION].
"""

SALES_AGREEMENT_CONTENT = """# SALES AGREEMENT

## 1. PARTIES
This Sales Agreement is entered into between [SELLER] ("Seller") and [BUYER] ("Buyer").

## 2. GOODS/SERVICES
[DESCRIPTION OF GOODS/SERVICES]

## 3. PRICE AND PAYMENT
The price is [PRICE] plus applicable taxes, payable under [PAYMENT TERMS].

## 4. DELIVERY
Seller delivers on or before [DELIVERY DATE] at [DELIVERY LOCATION].

## 5. WARRANTIES
Goods/services are free from defects for [WARRANTY PERIOD] from delivery.

## 6. GOVERNING LAW
This Agreement is governed by the laws of [JURISDICTION].
"""

PURCHASE_ORDER_CONTENT = """# PURCHASE ORDER

## 1. PARTIES
Buyer: [BUYER]
Vendor: [VENDOR]

## 2. ORDER DETAILS
PO Number: [PO NUMBER]
Items: [ITEM LIST]
Total: [TOTAL AMOUNT]

## 3. DELIVERY
Deliver to [SHIPPING ADDRESS] no later than [DELIVERY DATE].

## 4. PAYMENT TERMS
[PAYMENT TERMS]

## 5. TERMS AND CONDITIONS
Acceptance of this order constitutes agreement to the Buyer's standard terms.
"""

DEFAULT_TEMPLATES: List[Dict[str, str]] = [
    {
        "name": "Non-Disclosure Agreement",
        "description": "Standard Non-Disclosure Agreement for protecting confidential information.",
        "content": NDA_CONTENT,
    },
    {
        "name": "Sales Agreement",
        "description": "Standard Sales Agreement for the sale of goods or services.",
        "content": SALES_AGREEMENT_CONTENT,
    },
    {
        "name": "Purchase Order",
        "description": "Standard Purchase Order for procuring goods or services.",
        "content": PURCHASE_ORDER_CONTENT,
    },
]

DEFAULT_USERS = [
    UserCreate(username="author@example.com", full_name="Author User", role=UserRole.AUTHOR, initials="AU"),
    UserCreate(username="approver@example.com", full_name="Approver User", role=UserRole.APPROVER, initials="AP"),
]


def seed_templates(repo: ContractRepository) -> int:
    if repo.list_templates():
        return 0
    with repo.transaction():
        for item in DEFAULT_TEMPLATES:
            repo.add_template(ContractTemplate(**item))
    logger.info("seeded %s default templates", len(DEFAULT_TEMPLATES))
    return len(DEFAULT_TEMPLATES)


def seed_users(repo: ContractRepository) -> int:
    if repo.list_users():
        return 0
    for data in DEFAULT_USERS:
        user_service.register_user(repo, data)
    logger.info("seeded %s default users", len(DEFAULT_USERS))
    return len(DEFAULT_USERS)


def seed_defaults(repo: ContractRepository) -> None:
    seed_users(repo)
    seed_templates(repo)
