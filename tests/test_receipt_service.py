"""Tests for receipts and the receipt e-mail log."""

import re
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
import requests

from models import Receipt, ReceiptEmail
from services.exceptions import NotFoundError, ValidationError
from services.payment_service import add_payment
from services.receipt_service import (
    build_receipt_view,
    generate_receipt_number,
    get_or_create_receipt,
    send_receipt,
    total_paid_before,
)
from utils.email import EmailDeliveryError


class TestReceiptNumber:
    def test_format(self) -> None:
        number = generate_receipt_number(now_ms=1760659200000)

        assert re.fullmatch(r"RCP-[0-9A-Z]+-[0-9A-Z]{4}", number)
        assert number.split("-")[1] == "MGU311C0"

    def test_zero_timestamp(self) -> None:
        assert generate_receipt_number(now_ms=0).startswith("RCP-0-")


class TestGetOrCreate:
    def test_created_once(self, db, user_id, mortgage_lot) -> None:
        payment = add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)

        first = get_or_create_receipt(db, user_id, payment.id)
        second = get_or_create_receipt(db, user_id, payment.id)

        assert first.id == second.id
        assert first.receipt_number.startswith("RCP-")
        assert db.query(Receipt).count() == 1

    def test_unknown_payment(self, db, user_id) -> None:
        with pytest.raises(NotFoundError):
            get_or_create_receipt(db, user_id, 999)


class TestReceiptView:
    def test_lot_receipt_balances(self, db, user_id, mortgage_lot) -> None:
        add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)
        second = add_payment(db, user_id, Decimal("1000"), date(2026, 2, 10), subdivision_id=mortgage_lot.id)
        add_payment(db, user_id, Decimal("700"), date(2026, 3, 1), subdivision_id=mortgage_lot.id)

        view = build_receipt_view(db, get_or_create_receipt(db, user_id, second.id))

        assert view["sale_price"] == Decimal("10000.00")
        assert view["total_paid_before"] == Decimal("500.00")
        # Gross amounts, not principal
        assert view["balance_after"] == Decimal("8500.00")
        assert view["subdivision_title"] == "Lot 4"
        assert view["property_title"] == "Riverside Estate"
        assert view["buyer"].name == "Maria Santos"
        assert view["payment"].id == second.id
        assert view["emails"] == []

    def test_same_day_payments_ordered_by_record(self, db, user_id, make_property) -> None:
        prop = make_property(sale_price=Decimal("1000"))
        first = add_payment(db, user_id, Decimal("100"), date(2026, 1, 1), property_id=prop.id)
        second = add_payment(db, user_id, Decimal("200"), date(2026, 1, 1), property_id=prop.id)

        assert total_paid_before(db, first) == Decimal("0")
        assert total_paid_before(db, second) == Decimal("100")

    def test_property_receipt(self, db, user_id, make_property) -> None:
        prop = make_property(sale_price=Decimal("1000"))
        payment = add_payment(db, user_id, Decimal("250"), date(2026, 1, 1), property_id=prop.id)

        view = build_receipt_view(db, get_or_create_receipt(db, user_id, payment.id))

        assert view["property_title"] == "Riverside Estate"
        assert view["subdivision_title"] is None
        assert view["balance_after"] == Decimal("750.00")
        assert view["buyer"] is None


class TestSendReceipt:
    @pytest.fixture
    def receipt(self, db, user_id, mortgage_lot):
        payment = add_payment(db, user_id, Decimal("500"), date(2026, 1, 31), subdivision_id=mortgage_lot.id)
        return get_or_create_receipt(db, user_id, payment.id)

    def test_records_email_without_delivery(self, db, user_id, receipt) -> None:
        with patch("services.receipt_service.deliver_receipt_email") as deliver:
            record = send_receipt(db, user_id, receipt.id, " buyer@example.com ")

        assert record.email_address == "buyer@example.com"
        assert record.receipt_id == receipt.id
        deliver.assert_not_called()

    def test_history_newest_first(self, db, user_id, receipt) -> None:
        send_receipt(db, user_id, receipt.id, "one@example.com")
        send_receipt(db, user_id, receipt.id, "two@example.com")

        view = build_receipt_view(db, receipt)

        assert [e.email_address for e in view["emails"]] == ["two@example.com", "one@example.com"]

    def test_delivers_when_enabled(self, db, user_id, receipt) -> None:
        with patch("config.RECEIPT_EMAIL_DELIVERY", True), \
                patch("services.receipt_service.deliver_receipt_email") as deliver:
            send_receipt(db, user_id, receipt.id, "buyer@example.com")

        deliver.assert_called_once()
        kwargs = deliver.call_args.kwargs
        assert kwargs["to_email"] == "buyer@example.com"
        assert kwargs["receipt_number"] == receipt.receipt_number
        assert kwargs["amount"] == "500.00"
        assert kwargs["payment_date"] == "2026-01-31"
        assert kwargs["balance"] == "9,500.00"

    @pytest.mark.parametrize(
        "error", [EmailDeliveryError("rejected"), requests.ConnectionError("offline")]
    )
    def test_delivery_failure_keeps_record(self, db, user_id, receipt, error) -> None:
        with patch("config.RECEIPT_EMAIL_DELIVERY", True), \
                patch("services.receipt_service.deliver_receipt_email", side_effect=error):
            record = send_receipt(db, user_id, receipt.id, "buyer@example.com")

        assert record is not None
        assert db.query(ReceiptEmail).count() == 1

    @pytest.mark.parametrize("address", ["", "   ", None])
    def test_address_required(self, db, user_id, receipt, address) -> None:
        with pytest.raises(ValidationError):
            send_receipt(db, user_id, receipt.id, address)

    def test_unknown_receipt(self, db, user_id) -> None:
        with pytest.raises(NotFoundError):
            send_receipt(db, user_id, 999, "buyer@example.com")
