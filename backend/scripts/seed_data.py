"""Seed the database with default users, templates and a sample contract."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date, timedelta
from contract_lifecycle.database import SessionLocal, engine, Base
import contract_lifecycle.models  # noqa: F401

from contract_lifecycle.repositories.sqlalchemy_repository import SqlAlchemyContractRepository
from contract_lifecycle.schemas.contract import ContractCreate
from contract_lifecycle.services import seed_service
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.services.lifecycle_service import LifecycleEngine


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        repo = SqlAlchemyContractRepository(db)
        if repo.list_contracts():
            print("Database already seeded. Skipping.")
            return

        seed_service.seed_defaults(repo)
        author = repo.get_user_by_username("author@example.com")
        nda = repo.get_template_by_name("Non-Disclosure Agreement")

        lifecycle = LifecycleEngine(repo)
        today = date.today()
        contract = lifecycle.create_contract(
            Actor.from_user(author),
            ContractCreate(
                name="Acme NDA",
                description="Mutual NDA for the Acme integration project",
                parties="Example Corp, Acme Inc.",
                effective_date=today,
                expiry_date=today + timedelta(days=365),
                template_id=nda.template_id,
            ),
        )
        print(f"Seeded users, templates and contract #{contract.contract_id}.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
