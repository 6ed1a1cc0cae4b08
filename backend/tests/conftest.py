import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from contract_lifecycle.database import Base, get_db
from contract_lifecycle.dependencies import get_clock
from contract_lifecycle.main import app
from contract_lifecycle.models.enums import UserRole
from contract_lifecycle.repositories.sqlalchemy_repository import SqlAlchemyContractRepository
from contract_lifecycle.schemas.contract import ContractCreate
from contract_lifecycle.schemas.user import UserCreate
from contract_lifecycle.services import user_service
from contract_lifecycle.services.actor import Actor
from contract_lifecycle.services.lifecycle_service import LifecycleEngine
from contract_lifecycle.utils.clock import FixedClock

TEST_DB_URL = "sqlite:///./test_contracts.db"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 3, 2, 9, 0, 0))


@pytest.fixture
def repo(db):
    return SqlAlchemyContractRepository(db)


@pytest.fixture
def lifecycle(repo, clock):
    return LifecycleEngine(repo, clock)


@pytest.fixture
def client(clock):
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.pop(get_clock, None)


@pytest.fixture
def seed_users(repo, clock):
    specs = {
        "author": ("author@example.com", "Author User", UserRole.AUTHOR),
        "author2": ("second.author@example.com", "Second Author", UserRole.AUTHOR),
        "approver1": ("approver1@example.com", "First Approver", UserRole.APPROVER),
        "approver2": ("approver2@example.com", "Second Approver", UserRole.APPROVER),
    }
    return {
        key: user_service.register_user(repo, UserCreate(username=u, full_name=n, role=r), clock)
        for key, (u, n, r) in specs.items()
    }


@pytest.fixture
def actors(seed_users):
    return {key: Actor.from_user(user) for key, user in seed_users.items()}


@pytest.fixture
def draft(lifecycle, actors):
    return lifecycle.create_contract(
        actors["author"],
        ContractCreate(name="Supply Agreement", parties="Example Corp, Acme Inc.", content="v1 text"),
    )


def make_contract(lifecycle, actor, **overrides):
    payload = {"name": "Service Agreement", "parties": "A, B", "content": "initial"}
    payload.update(overrides)
    return lifecycle.create_contract(actor, ContractCreate(**payload))


def get_token(client, username: str) -> str:
    resp = client.post("/api/auth/login", json={"username": username})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, username: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, username)}"}
