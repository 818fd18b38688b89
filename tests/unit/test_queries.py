from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal

import psycopg
import pytest

from invoice_dashboard.errors import DataFetchError
from invoice_dashboard.queries import (
    ITEMS_PER_PAGE,
    fetch_card_data,
    fetch_customers,
    fetch_filtered_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    fetch_revenue,
)
from invoice_dashboard.queries.invoices import page_offset, strip_commas

INVOICE_ID = "5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0001"
CUSTOMER_ID = "d6e15727-9fe1-4961-8c5b-ea44a9bd81aa"
MATCHING_ROWS = 13
EXPECTED_PAGES = 3


def _table_row(**overrides):
    row = {
        "id": INVOICE_ID,
        "customer_id": CUSTOMER_ID,
        "amount": 15795,
        "date": date(2022, 12, 6),
        "status": "pending",
        "name": "Evil Rabbit",
        "email": "evil@rabbit.com",
        "image_url": "/customers/evil-rabbit.png",
    }
    row.update(overrides)
    return row


class TestPagination:
    def test_page_offset(self):
        assert page_offset(1) == 0
        assert page_offset(3) == 2 * ITEMS_PER_PAGE

    @pytest.mark.asyncio
    async def test_pages_round_up(self, fake_db):
        fake_db.queue("fetch_value", MATCHING_ROWS)
        assert await fetch_invoices_pages(fake_db, "") == EXPECTED_PAGES

    @pytest.mark.asyncio
    async def test_pages_zero_when_nothing_matches(self, fake_db):
        fake_db.queue("fetch_value", 0)
        assert await fetch_invoices_pages(fake_db, "nobody") == 0

    @pytest.mark.asyncio
    async def test_pages_keep_commas_in_search(self, fake_db):
        fake_db.queue("fetch_value", 1)
        await fetch_invoices_pages(fake_db, "1,250")
        _, sql, params = fake_db.calls[0]
        assert params == {"pattern": "%1,250%"}
        assert "amount::text ILIKE" in sql


class TestFilteredInvoices:
    def test_strip_commas_removes_every_comma(self):
        assert strip_commas("1,234,567") == "1234567"

    @pytest.mark.asyncio
    async def test_search_strips_commas_and_pages(self, fake_db):
        fake_db.queue("fetch_all", [_table_row()])

        rows = await fetch_filtered_invoices(fake_db, "1,57,95", 3)

        _, sql, params = fake_db.calls[0]
        assert params == {"pattern": "%15795%", "limit": ITEMS_PER_PAGE, "offset": 12}
        assert "ORDER BY invoices.date DESC" in sql
        assert "TO_CHAR(invoices.amount, 'FM$999999999D00') ILIKE" in sql
        assert len(rows) == 1
        assert rows[0].amount == 15795
        assert rows[0].name == "Evil Rabbit"

    @pytest.mark.asyncio
    async def test_comma_and_plain_search_send_same_parameters(self, fake_db):
        await fetch_filtered_invoices(fake_db, "1,234", 1)
        await fetch_filtered_invoices(fake_db, "1234", 1)
        assert fake_db.calls[0][2] == fake_db.calls[1][2]


class TestInvoiceById:
    @pytest.mark.asyncio
    async def test_amount_converted_to_currency_units(self, fake_db):
        fake_db.queue(
            "fetch_one",
            {"id": INVOICE_ID, "customer_id": CUSTOMER_ID, "amount": 5000, "status": "paid"},
        )

        invoice = await fetch_invoice_by_id(fake_db, INVOICE_ID)

        assert invoice is not None
        assert invoice.amount == Decimal("50.00")
        assert str(invoice.amount) == "50.00"
        assert fake_db.calls[0][2] == (INVOICE_ID,)

    @pytest.mark.asyncio
    async def test_missing_invoice_returns_none(self, fake_db):
        assert await fetch_invoice_by_id(fake_db, INVOICE_ID) is None


class _StalledCountsDatabase:
    """Fails the paid count; every other count waits until cancelled."""

    def __init__(self) -> None:
        self.cancelled = 0

    async def fetch_value(self, query, params=None):
        if params == ("paid",):
            raise psycopg.OperationalError("server closed the connection unexpectedly")
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise


class TestDashboard:
    @pytest.mark.asyncio
    async def test_card_data_runs_four_counts(self, fake_db):
        counts = {
            "SELECT COUNT(*) FROM invoices": 13,
            "SELECT COUNT(*) FROM customers": 6,
        }

        def respond(method, sql, params):
            assert method == "fetch_value"
            if params == ("paid",):
                return 8
            if params == ("pending",):
                return 5
            return counts[sql]

        fake_db.responder = respond

        cards = await fetch_card_data(fake_db)

        assert len(fake_db.calls) == 4
        assert cards.number_of_invoices == 13
        assert cards.number_of_customers == 6
        assert cards.total_paid_invoices == 8
        assert cards.total_pending_invoices == 5

    @pytest.mark.asyncio
    async def test_card_data_failure_cancels_pending_counts(self):
        db = _StalledCountsDatabase()

        with pytest.raises(DataFetchError, match="Failed to fetch card data."):
            await fetch_card_data(db)
        for _ in range(3):
            await asyncio.sleep(0)

        assert db.cancelled == 3

    @pytest.mark.asyncio
    async def test_latest_invoices_format_amount(self, fake_db):
        fake_db.queue(
            "fetch_all",
            [
                {
                    "id": INVOICE_ID,
                    "amount": 123456,
                    "name": "Evil Rabbit",
                    "email": "evil@rabbit.com",
                    "image_url": "/customers/evil-rabbit.png",
                }
            ],
        )

        latest = await fetch_latest_invoices(fake_db)

        assert latest[0].amount == "$1,234.56"
        assert fake_db.calls[0][2] == (5,)

    @pytest.mark.asyncio
    async def test_revenue_rows(self, fake_db):
        fake_db.queue("fetch_all", [{"month": "Jan", "revenue": 2000}])
        revenue = await fetch_revenue(fake_db)
        assert [(r.month, r.revenue) for r in revenue] == [("Jan", 2000)]


class TestCustomers:
    @pytest.mark.asyncio
    async def test_customers_without_invoices_are_zero_filled(self, fake_db):
        fake_db.queue(
            "fetch_all",
            [
                {
                    "id": CUSTOMER_ID,
                    "name": "Evil Rabbit",
                    "email": "evil@rabbit.com",
                    "image_url": "/customers/evil-rabbit.png",
                    "total_invoices": 0,
                    "total_pending": 0,
                    "total_paid": None,
                }
            ],
        )

        rows = await fetch_filtered_customers(fake_db, "rabbit")

        assert rows[0].total_invoices == 0
        assert rows[0].total_pending == "$0.00"
        assert rows[0].total_paid == "$0.00"
        _, sql, params = fake_db.calls[0]
        assert params == {"pattern": "%rabbit%"}
        assert "LEFT JOIN invoices" in sql

    @pytest.mark.asyncio
    async def test_customer_totals_formatted(self, fake_db):
        fake_db.queue(
            "fetch_all",
            [
                {
                    "id": CUSTOMER_ID,
                    "name": "Evil Rabbit",
                    "email": "evil@rabbit.com",
                    "image_url": "/customers/evil-rabbit.png",
                    "total_invoices": 2,
                    "total_pending": 16461,
                    "total_paid": 0,
                }
            ],
        )

        rows = await fetch_filtered_customers(fake_db, "")

        assert rows[0].total_pending == "$164.61"

    @pytest.mark.asyncio
    async def test_customer_fields(self, fake_db):
        fake_db.queue("fetch_all", [{"id": CUSTOMER_ID, "name": "Evil Rabbit"}])
        customers = await fetch_customers(fake_db)
        assert customers[0].name == "Evil Rabbit"
        assert "ORDER BY name ASC" in fake_db.calls[0][1]


@pytest.mark.parametrize(
    ("call", "message"),
    [
        (lambda db: fetch_card_data(db), "Failed to fetch card data."),
        (lambda db: fetch_latest_invoices(db), "Failed to fetch the latest invoices."),
        (lambda db: fetch_revenue(db), "Failed to fetch revenue data."),
        (lambda db: fetch_filtered_invoices(db, "", 1), "Failed to fetch invoices."),
        (lambda db: fetch_invoices_pages(db, ""), "Failed to fetch total number of invoices."),
        (lambda db: fetch_invoice_by_id(db, INVOICE_ID), "Failed to fetch invoice."),
        (lambda db: fetch_customers(db), "Failed to fetch all customers."),
        (lambda db: fetch_filtered_customers(db, ""), "Failed to fetch customer table."),
    ],
)
@pytest.mark.asyncio
async def test_store_errors_become_generic_fetch_errors(fake_db, caplog, call, message):
    fake_db.error = psycopg.OperationalError("password authentication failed for user x")

    with pytest.raises(DataFetchError) as excinfo:
        await call(fake_db)

    assert str(excinfo.value) == message
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__ is True
    assert "password authentication failed" in caplog.text


@pytest.mark.asyncio
async def test_non_store_errors_propagate(fake_db):
    fake_db.error = ValueError("bug")
    with pytest.raises(ValueError):
        await fetch_revenue(fake_db)
