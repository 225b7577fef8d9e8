"""Tests for selling lots, holds and property sales."""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from models import (
    Payment,
    PaymentPlanType,
    PaymentType,
    PropertyStatus,
    SubdivisionStatus,
)
from services.exceptions import NotFoundError, ValidationError
from services.payment_service import add_payment
from services.sale_service import (
    FULL_PAYMENT_NOTE,
    hold_deposit_note,
    place_hold,
    sell_property,
    sell_subdivision,
)

TODAY = date(2026, 3, 15)


def _lot_payments(db, lot):
    return db.query(Payment).filter(Payment.subdivision_id == lot.id).all()


class TestSellSubdivision:
    """Tests for the three payment plans."""

    def test_full_plan(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        result = sell_subdivision(
            db, user_id, lot.id, buyer.id, Decimal("25000"), PaymentPlanType.FULL, today=TODAY
        )

        assert result.status == SubdivisionStatus.PAID_IN_FULL
        assert result.payment_type == PaymentType.FULL
        assert result.payment_plan_type == PaymentPlanType.FULL
        assert result.buyer_id == buyer.id

        payments = _lot_payments(db, lot)
        assert len(payments) == 1
        assert payments[0].amount == Decimal("25000.00")
        assert payments[0].principal_amount == Decimal("25000.00")
        assert payments[0].notes == FULL_PAYMENT_NOTE
        assert payments[0].payment_date == TODAY
        assert payments[0].buyer_id == buyer.id

    def test_mortgage_plan(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        result = sell_subdivision(
            db, user_id, lot.id, buyer.id, Decimal("10000"), "mortgage",
            daily_interest_rate=Decimal("0.0015"), grace_period_days=10, today=TODAY,
        )

        assert result.status == SubdivisionStatus.MORTGAGE
        assert result.payment_type == PaymentType.MORTGAGE
        assert result.daily_interest_rate == Decimal("0.0015")
        assert result.interest_grace_period_days == 10
        assert _lot_payments(db, lot) == []

    def test_mortgage_then_first_payment_has_no_interest(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()
        sell_subdivision(db, user_id, lot.id, buyer.id, Decimal("10000"), PaymentPlanType.MORTGAGE, today=TODAY)

        payment = add_payment(db, user_id, Decimal("1000"), date(2026, 4, 15), subdivision_id=lot.id)

        assert payment.days_since_last_payment == 0
        assert payment.principal_amount == Decimal("1000.00")

    def test_hold_plan(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        result = sell_subdivision(
            db, user_id, lot.id, buyer.id, Decimal("10000"), PaymentPlanType.HOLD,
            hold_amount=Decimal("500"), hold_until_date=date(2026, 4, 30), today=TODAY,
        )

        assert result.status == SubdivisionStatus.ON_HOLD
        assert result.payment_type == PaymentType.INSTALLMENT
        assert result.hold_amount == Decimal("500.00")
        assert result.hold_until_date == date(2026, 4, 30)

        payments = _lot_payments(db, lot)
        assert len(payments) == 1
        assert payments[0].amount == Decimal("500.00")
        assert payments[0].notes == "Hold deposit - Hold until 2026-04-30"

    def test_hold_plan_with_zero_deposit(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        sell_subdivision(
            db, user_id, lot.id, buyer.id, Decimal("10000"), PaymentPlanType.HOLD,
            hold_amount=Decimal("0"), hold_until_date=date(2026, 4, 30), today=TODAY,
        )

        assert _lot_payments(db, lot) == []

    def test_hold_plan_requires_hold_fields(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        with pytest.raises(ValidationError):
            sell_subdivision(db, user_id, lot.id, buyer.id, Decimal("10000"), PaymentPlanType.HOLD)

    def test_negative_price(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        with pytest.raises(ValidationError):
            sell_subdivision(db, user_id, lot.id, buyer.id, Decimal("-1"), PaymentPlanType.FULL)

    def test_unknown_lot_or_buyer(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        with pytest.raises(NotFoundError):
            sell_subdivision(db, user_id, 999, buyer.id, Decimal("1"), PaymentPlanType.FULL)
        with pytest.raises(NotFoundError):
            sell_subdivision(db, user_id, lot.id, 999, Decimal("1"), PaymentPlanType.FULL)

    def test_unknown_plan(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        with pytest.raises(ValueError):
            sell_subdivision(db, user_id, lot.id, buyer.id, Decimal("1"), "lease")

    def test_database_failure_returns_none(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        with patch.object(db, "commit", side_effect=SQLAlchemyError("boom")):
            result = sell_subdivision(db, user_id, lot.id, buyer.id, Decimal("1"), PaymentPlanType.FULL)

        assert result is None


class TestPlaceHold:
    def test_hold_with_default_note(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot(sale_price=Decimal("8000"))
        buyer = make_buyer()

        result = place_hold(db, user_id, lot.id, buyer.id, Decimal("250"), date(2026, 5, 1), today=TODAY)

        assert result.status == SubdivisionStatus.ON_HOLD
        assert result.buyer_id == buyer.id
        assert result.hold_amount == Decimal("250.00")
        payments = _lot_payments(db, lot)
        assert len(payments) == 1
        assert payments[0].notes == hold_deposit_note(date(2026, 5, 1))
        assert payments[0].principal_amount is None
        assert payments[0].payment_date == TODAY

    def test_hold_with_custom_note(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()

        place_hold(db, user_id, lot.id, buyer.id, Decimal("250"), date(2026, 5, 1), notes="Bank transfer", today=TODAY)

        assert _lot_payments(db, lot)[0].notes == "Bank transfer"

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10")])
    def test_amount_must_be_positive(self, db, user_id, make_lot, make_buyer, amount) -> None:
        lot = make_lot()
        buyer = make_buyer()

        with pytest.raises(ValidationError):
            place_hold(db, user_id, lot.id, buyer.id, amount, date(2026, 5, 1))

    def test_failed_deposit_keeps_hold(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot()
        buyer = make_buyer()
        real_commit = db.commit
        calls = []

        def flaky_commit():
            calls.append(1)
            if len(calls) == 2:
                raise SQLAlchemyError("deposit failed")
            real_commit()

        with patch.object(db, "commit", side_effect=flaky_commit):
            result = place_hold(db, user_id, lot.id, buyer.id, Decimal("250"), date(2026, 5, 1), today=TODAY)

        assert result is not None
        db.refresh(lot)
        assert lot.status == SubdivisionStatus.ON_HOLD
        assert _lot_payments(db, lot) == []


class TestSellProperty:
    def test_pending_until_paid(self, db, make_property, make_buyer) -> None:
        prop = make_property()
        buyer = make_buyer()

        result = sell_property(db, prop.id, buyer.id, Decimal("75000"))

        assert result.status == PropertyStatus.PENDING
        assert result.sale_price == Decimal("75000.00")
        assert result.buyer_id == buyer.id

    def test_unknown_property(self, db, make_buyer) -> None:
        buyer = make_buyer()

        with pytest.raises(NotFoundError):
            sell_property(db, 999, buyer.id, Decimal("1"))
