"""Pytest configuration and fixtures."""

import os

# Must be set before config.py is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["RECEIPT_EMAIL_DELIVERY"] = "false"

from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import sessionmaker

from database import get_session, make_engine
from models import Base, Buyer, Property, Subdivision, PaymentPlanType, SubdivisionStatus

USER_ID = 1


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database per test."""
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    """Database session for service-level tests."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def user_id() -> int:
    return USER_ID


@pytest.fixture
def auth_headers() -> dict:
    """Bearer token signed with the test secret."""
    token = jwt.encode({"id": USER_ID}, "test-secret", algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(session_factory):
    """API client with the session dependency pointed at the test database."""
    from main import app

    def override_get_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_buyer(db):
    def _make(name: str = "Maria Santos", email: str = "maria@example.com", phone: str = "555-0100") -> Buyer:
        buyer = Buyer(user_id=USER_ID, name=name, email=email, phone=phone)
        db.add(buyer)
        db.commit()
        return buyer

    return _make


@pytest.fixture
def make_property(db):
    def _make(title: str = "Riverside Estate", sale_price: Decimal = Decimal("0"), **fields) -> Property:
        prop = Property(user_id=USER_ID, title=title, sale_price=sale_price, **fields)
        db.add(prop)
        db.commit()
        return prop

    return _make


@pytest.fixture
def make_lot(db, make_property):
    def _make(
        property_id: int = None,
        title: str = "Lot 1",
        sale_price: Decimal = Decimal("0"),
        **fields,
    ) -> Subdivision:
        if property_id is None:
            property_id = make_property().id
        lot = Subdivision(
            property_id=property_id,
            user_id=USER_ID,
            title=title,
            sale_price=sale_price,
            **fields,
        )
        db.add(lot)
        db.commit()
        return lot

    return _make


@pytest.fixture
def mortgage_lot(make_lot, make_buyer):
    """Lot sold on a mortgage: 10,000 at 0.1% per day, last paid 2026-01-01."""
    buyer = make_buyer()
    return make_lot(
        title="Lot 4",
        sale_price=Decimal("10000.00"),
        buyer_id=buyer.id,
        status=SubdivisionStatus.MORTGAGE,
        payment_plan_type=PaymentPlanType.MORTGAGE,
        daily_interest_rate=Decimal("0.001"),
        last_payment_date=date(2026, 1, 1),
    )
