"""Tests for lot search and per-user settings."""

from datetime import date
from decimal import Decimal

import pytest

from models import GLOBAL_DAILY_INTEREST_RATE, SystemSetting
from services.exceptions import ValidationError
from services.settings_service import get_global_daily_rate, set_global_daily_rate
from services.subdivision_service import SubdivisionService


class TestSearch:
    def test_exact_and_contains(self, make_property, make_lot, db) -> None:
        prop = make_property(title="Hillside")
        make_lot(property_id=prop.id, title="A", sale_price=Decimal("2500"), registration_number="REG-77-X")
        make_lot(property_id=prop.id, title="B", sale_price=Decimal("2500"), submission_date=date(2026, 2, 1))
        make_lot(property_id=prop.id, title="C", sale_price=Decimal("9000"))

        by_price = SubdivisionService.search(db, sale_price=Decimal("2500"))
        by_text = SubdivisionService.search(db, registration_number="reg-77")
        by_date = SubdivisionService.search(db, submission_date=date(2026, 2, 1))

        assert [r["subdivision"].title for r in by_price] == ["B", "A"]
        assert [r["subdivision"].title for r in by_text] == ["A"]
        assert by_text[0]["property_title"] == "Hillside"
        assert [r["subdivision"].title for r in by_date] == ["B"]

    def test_blank_filters_are_ignored(self, make_lot, db) -> None:
        make_lot(title="A")

        assert len(SubdivisionService.search(db, lot_number="  ", owner_last_name=None)) == 1

    def test_unknown_filter(self, db) -> None:
        with pytest.raises(TypeError):
            SubdivisionService.search(db, colour="green")

    def test_get_loads_buyer(self, make_lot, make_buyer, db) -> None:
        buyer = make_buyer()
        lot = make_lot(buyer_id=buyer.id)

        assert SubdivisionService.get(db, lot.id).buyer.name == "Maria Santos"
        assert SubdivisionService.get(db, 999) is None


class TestSettings:
    def test_unset(self, db, user_id) -> None:
        assert get_global_daily_rate(db, user_id) is None

    def test_set_then_update(self, db, user_id) -> None:
        set_global_daily_rate(db, user_id, Decimal("0.002"))
        set_global_daily_rate(db, user_id, Decimal("0.0025"))

        assert get_global_daily_rate(db, user_id) == Decimal("0.0025")
        assert db.query(SystemSetting).count() == 1

    def test_rates_are_per_user(self, db, user_id) -> None:
        set_global_daily_rate(db, user_id, Decimal("0.002"))

        assert get_global_daily_rate(db, user_id + 1) is None

    def test_invalid_stored_value_is_ignored(self, db, user_id) -> None:
        db.add(SystemSetting(user_id=user_id, setting_key=GLOBAL_DAILY_INTEREST_RATE, setting_value="lots"))
        db.commit()

        assert get_global_daily_rate(db, user_id) is None

    def test_negative_rate(self, db, user_id) -> None:
        with pytest.raises(ValidationError):
            set_global_daily_rate(db, user_id, Decimal("-0.001"))
