"""Tests against the schema built by the Alembic migrations."""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import event, inspect

from database import make_engine
from models import Payment, Property, Subdivision
from services.payment_service import add_payment

ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def engine(tmp_path, monkeypatch):
    """File-backed SQLite database upgraded to head, with foreign keys enforced."""
    url = f"sqlite:///{tmp_path / 'land.db'}"
    monkeypatch.setattr("config.DATABASE_URL", url)

    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(ROOT / "alembic"))
    command.upgrade(alembic_cfg, "head")

    engine = make_engine(url)

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    yield engine
    engine.dispose()


class TestUpgrade:
    def test_tables_created(self, engine) -> None:
        tables = set(inspect(engine).get_table_names())

        assert {"buyers", "properties", "subdivisions", "payments", "documents", "receipts"} <= tables


class TestDeleteBuyer:
    def test_buyer_with_lot_and_payments(
        self, client, auth_headers, db, user_id, make_buyer, make_property, make_lot
    ) -> None:
        buyer = make_buyer()
        prop = make_property(buyer_id=buyer.id)
        lot = make_lot(property_id=prop.id, sale_price=Decimal("10000"), buyer_id=buyer.id)
        payment = add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=lot.id)
        assert payment.buyer_id == buyer.id

        response = client.delete(f"/api/buyers/{buyer.id}", headers=auth_headers)

        assert response.status_code == 204
        db.expire_all()
        assert db.get(Subdivision, lot.id).buyer_id is None
        assert db.get(Payment, payment.id).buyer_id is None
        assert db.get(Property, prop.id).buyer_id is None
