import os

# Settings are read at import time, so point them at a throwaway database first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models import Organization, OrganizationStaff, User
from app.utils.security import create_access_token, hash_password
from main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

PASSWORD = "password123"
# bcrypt is slow; hash once for every test user
PASSWORD_HASH = hash_password(PASSWORD)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(name, email=None, role="user", is_active=True):
        user = User(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            hashed_password=PASSWORD_HASH,
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_staff(db):
    def _make_staff(organization, user, role="Member", access_level=2, reports_to=None, position=None, department=None):
        staff = OrganizationStaff(
            organization_id=organization.id,
            user_id=user.id,
            position=position or role,
            department=department,
            role=role,
            access_level=access_level,
            status="Active",
            reports_to=reports_to.id if reports_to is not None else None,
        )
        db.add(staff)
        db.commit()
        db.refresh(staff)
        return staff
    return _make_staff


@pytest.fixture
def auth():
    def _auth(user):
        token = create_access_token(data={"sub": user.email})
        return {"Authorization": f"Bearer {token}"}
    return _auth


@pytest.fixture
def owner(make_user):
    return make_user("Olivia Owner")


@pytest.fixture
def organization(db, owner, make_staff):
    org = Organization(name="Acme Corp", description="Widgets", owner_id=owner.id)
    db.add(org)
    db.commit()
    db.refresh(org)
    make_staff(org, owner, role="Owner", access_level=5, position="CEO")
    return org


@pytest.fixture
def owner_staff(db, organization, owner):
    return db.query(OrganizationStaff).filter(
        OrganizationStaff.organization_id == organization.id,
        OrganizationStaff.user_id == owner.id
    ).one()


@pytest.fixture
def session_factory(db):
    return TestingSessionLocal
