"""Tests for recording payments against properties and lots."""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from models import (
    Payment,
    PaymentPlanType,
    PropertyStatus,
    Receipt,
    ReceiptEmail,
    SubdivisionStatus,
)
from services.exceptions import NotFoundError, ValidationError
from services.payment_service import (
    add_payment,
    delete_payment,
    interest_preview,
    list_payments,
    payment_summary,
)
from services.settings_service import set_global_daily_rate


class TestMortgagePayments:
    """Payments against a lot on a mortgage plan."""

    def test_interest_then_principal(self, db, user_id, mortgage_lot) -> None:
        payment = add_payment(
            db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id
        )

        assert payment is not None
        assert payment.interest_amount == Decimal("300.00")
        assert payment.principal_amount == Decimal("200.00")
        assert payment.days_since_last_payment == 30
        assert payment.interest_rate_used == Decimal("0.001")
        assert payment.interest_calculation_date == date(2026, 1, 31)
        assert payment.grace_period_days == 30
        assert payment.buyer_id == mortgage_lot.buyer_id

        db.refresh(mortgage_lot)
        assert mortgage_lot.last_payment_date == date(2026, 1, 31)
        assert mortgage_lot.total_interest_charged == Decimal("300.00")
        assert mortgage_lot.status == SubdivisionStatus.MORTGAGE

    def test_second_payment_uses_reduced_balance(self, db, user_id, mortgage_lot) -> None:
        add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)
        # 9,800 * 0.001 * 10 = 98.00
        payment = add_payment(db, user_id, Decimal("1000"), date(2026, 2, 10), subdivision_id=mortgage_lot.id)

        assert payment.days_since_last_payment == 10
        assert payment.interest_amount == Decimal("98.00")
        assert payment.principal_amount == Decimal("902.00")
        assert mortgage_lot.total_interest_charged == Decimal("398.00")

    def test_payment_absorbed_by_interest(self, db, user_id, mortgage_lot) -> None:
        payment = add_payment(db, user_id, Decimal("250"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        assert payment.interest_amount == Decimal("300.00")
        assert payment.principal_amount == Decimal("0.00")
        summary = payment_summary(db, subdivision_id=mortgage_lot.id)
        assert summary["remaining_balance"] == Decimal("10000.00")
        assert summary["interest_paid"] == Decimal("300.00")

    def test_same_day_payment_has_no_interest(self, db, user_id, mortgage_lot) -> None:
        payment = add_payment(db, user_id, Decimal("100"), date(2026, 1, 1), subdivision_id=mortgage_lot.id)

        assert payment.interest_amount is None
        assert payment.principal_amount == Decimal("100.00")
        assert mortgage_lot.total_interest_charged is None

    def test_paid_in_full(self, db, user_id, mortgage_lot) -> None:
        add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)
        add_payment(db, user_id, Decimal("9800"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        db.refresh(mortgage_lot)
        assert mortgage_lot.status == SubdivisionStatus.PAID_IN_FULL
        assert payment_summary(db, subdivision_id=mortgage_lot.id)["remaining_balance"] == Decimal("0.00")

    def test_global_rate_applies_without_lot_rate(self, db, user_id, mortgage_lot) -> None:
        mortgage_lot.daily_interest_rate = None
        db.commit()
        set_global_daily_rate(db, user_id, Decimal("0.002"))

        payment = add_payment(db, user_id, Decimal("1000"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        assert payment.interest_rate_used == Decimal("0.002")
        assert payment.interest_amount == Decimal("600.00")

    def test_lot_grace_period_is_recorded(self, db, user_id, mortgage_lot) -> None:
        mortgage_lot.interest_grace_period_days = 5
        db.commit()

        payment = add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        # Recorded only; the day count is unchanged
        assert payment.grace_period_days == 5
        assert payment.days_since_last_payment == 30


class TestOtherPayments:
    """Payments that are all principal."""

    def test_lot_without_mortgage_plan(self, db, user_id, make_lot) -> None:
        lot = make_lot(
            sale_price=Decimal("3000"),
            payment_plan_type=PaymentPlanType.HOLD,
            status=SubdivisionStatus.ON_HOLD,
            last_payment_date=date(2025, 6, 1),
        )

        payment = add_payment(db, user_id, Decimal("1000"), date(2026, 1, 31), subdivision_id=lot.id)

        assert payment.principal_amount == Decimal("1000.00")
        assert payment.interest_amount is None
        assert lot.last_payment_date == date(2026, 1, 31)
        assert lot.status == SubdivisionStatus.ON_HOLD

    def test_property_payment_completes_pending_sale(self, db, user_id, make_property, make_buyer) -> None:
        buyer = make_buyer()
        prop = make_property(sale_price=Decimal("50000"), status=PropertyStatus.PENDING, buyer_id=buyer.id)

        add_payment(db, user_id, Decimal("20000"), date(2026, 1, 5), property_id=prop.id)
        assert prop.status == PropertyStatus.PENDING

        payment = add_payment(db, user_id, Decimal("30000"), date(2026, 2, 5), property_id=prop.id)
        assert payment.buyer_id == buyer.id
        assert payment.principal_amount == Decimal("30000.00")
        db.refresh(prop)
        assert prop.status == PropertyStatus.SOLD

    def test_available_property_stays_available(self, db, user_id, make_property) -> None:
        prop = make_property(sale_price=Decimal("100"))

        add_payment(db, user_id, Decimal("100"), date(2026, 1, 5), property_id=prop.id)

        assert prop.status == PropertyStatus.AVAILABLE

    def test_notes_are_trimmed(self, db, user_id, make_property) -> None:
        prop = make_property()

        blank = add_payment(db, user_id, Decimal("10"), date(2026, 1, 5), property_id=prop.id, notes="   ")
        noted = add_payment(db, user_id, Decimal("10"), date(2026, 1, 5), property_id=prop.id, notes=" cash ")

        assert blank.notes is None
        assert noted.notes == "cash"


class TestValidation:
    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    def test_amount_must_be_positive(self, db, user_id, mortgage_lot, amount) -> None:
        with pytest.raises(ValidationError):
            add_payment(db, user_id, amount, date(2026, 1, 31), subdivision_id=mortgage_lot.id)

    def test_needs_exactly_one_target(self, db, user_id, mortgage_lot) -> None:
        with pytest.raises(ValidationError):
            add_payment(db, user_id, Decimal("10"), date(2026, 1, 31))
        with pytest.raises(ValidationError):
            add_payment(
                db, user_id, Decimal("10"), date(2026, 1, 31),
                property_id=mortgage_lot.property_id, subdivision_id=mortgage_lot.id,
            )

    def test_unknown_target(self, db, user_id) -> None:
        with pytest.raises(NotFoundError):
            add_payment(db, user_id, Decimal("10"), date(2026, 1, 31), subdivision_id=999)
        with pytest.raises(NotFoundError):
            add_payment(db, user_id, Decimal("10"), date(2026, 1, 31), property_id=999)

    def test_database_failure_returns_none(self, db, user_id, mortgage_lot) -> None:
        with patch.object(db, "commit", side_effect=SQLAlchemyError("boom")):
            result = add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        assert result is None
        assert db.query(Payment).count() == 0


class TestReceiptOnPayment:
    def test_send_receipt_to_creates_receipt_and_email_record(self, db, user_id, mortgage_lot) -> None:
        payment = add_payment(
            db, user_id, Decimal("500"), date(2026, 1, 31),
            subdivision_id=mortgage_lot.id, send_receipt_to="buyer@example.com",
        )

        receipt = db.query(Receipt).filter(Receipt.payment_id == payment.id).one()
        emails = db.query(ReceiptEmail).filter(ReceiptEmail.receipt_id == receipt.id).all()
        assert [e.email_address for e in emails] == ["buyer@example.com"]

    def test_no_receipt_by_default(self, db, user_id, mortgage_lot) -> None:
        add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        assert db.query(Receipt).count() == 0


class TestListingAndSummary:
    def test_newest_first(self, db, user_id, make_property) -> None:
        prop = make_property(sale_price=Decimal("1000"))
        first = add_payment(db, user_id, Decimal("100"), date(2026, 1, 1), property_id=prop.id)
        second = add_payment(db, user_id, Decimal("100"), date(2026, 3, 1), property_id=prop.id)
        third = add_payment(db, user_id, Decimal("100"), date(2026, 3, 1), property_id=prop.id)

        assert [p.id for p in list_payments(db, property_id=prop.id)] == [third.id, second.id, first.id]

    def test_summary(self, db, user_id, mortgage_lot) -> None:
        add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)
        add_payment(db, user_id, Decimal("100"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        summary = payment_summary(db, subdivision_id=mortgage_lot.id)

        assert summary == {
            "sale_price": Decimal("10000.00"),
            "payment_count": 2,
            "total_paid": Decimal("600.00"),
            "principal_paid": Decimal("300.00"),
            "interest_paid": Decimal("300.00"),
            "remaining_balance": Decimal("9700.00"),
        }

    def test_delete_payment(self, db, user_id, mortgage_lot) -> None:
        payment = add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        assert delete_payment(db, payment.id) is True
        assert list_payments(db, subdivision_id=mortgage_lot.id) == []
        assert payment_summary(db, subdivision_id=mortgage_lot.id)["remaining_balance"] == Decimal("10000.00")

    def test_delete_unknown_payment(self, db) -> None:
        with pytest.raises(NotFoundError):
            delete_payment(db, 12345)


class TestInterestPreview:
    def test_preview(self, db, user_id, mortgage_lot) -> None:
        preview = interest_preview(db, user_id, mortgage_lot.id, date(2026, 1, 31))

        assert preview.days == 30
        assert preview.interest == Decimal("300.00")
        assert preview.total_due == Decimal("10300.00")

    def test_unknown_lot(self, db, user_id) -> None:
        with pytest.raises(NotFoundError):
            interest_preview(db, user_id, 404, date(2026, 1, 31))

    def test_hold_lot_accrues_nothing(self, db, user_id, make_lot, make_buyer) -> None:
        lot = make_lot(
            sale_price=Decimal("10000.00"),
            buyer_id=make_buyer().id,
            status=SubdivisionStatus.ON_HOLD,
            payment_plan_type=PaymentPlanType.HOLD,
            daily_interest_rate=Decimal("0.001"),
            last_payment_date=date(2026, 1, 1),
        )

        preview = interest_preview(db, user_id, lot.id, date(2026, 1, 31))
        payment = add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=lot.id)

        assert preview.days == 0
        assert preview.interest == Decimal("0")
        assert preview.total_due == Decimal("10000.00")
        assert payment.interest_amount is None
        assert payment.principal_amount == Decimal("500.00")
