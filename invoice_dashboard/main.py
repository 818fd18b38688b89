from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, Awaitable, Callable, Optional, TypeVar

import psycopg
import typer
from pydantic import BaseModel

from invoice_dashboard.actions import ActionContext, create_invoice, delete_invoice, update_invoice
from invoice_dashboard.config import get_settings
from invoice_dashboard.errors import DataFetchError
from invoice_dashboard.infrastructure.db_factory import Database
from invoice_dashboard.infrastructure.views import InMemoryViewCache, RaisingNavigator, Redirect
from invoice_dashboard.queries import (
    fetch_card_data,
    fetch_customers,
    fetch_filtered_customers,
    fetch_filtered_invoices,
    fetch_invoice_by_id,
    fetch_invoices_pages,
    fetch_latest_invoices,
    fetch_revenue,
)
from invoice_dashboard.seed import seed_database
from invoice_dashboard.utils.logging import configure_logging

app = typer.Typer(help="Invoice dashboard CLI.")

T = TypeVar("T")


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value


def _echo_json(value: Any) -> None:
    typer.echo(json.dumps(_to_jsonable(value), indent=2, default=str))


def _run(operation: Callable[[Database], Awaitable[T]]) -> T:
    """Open a database for one command, run `operation`, always close it."""
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    async def _main() -> T:
        async with Database() as db:
            return await operation(db)

    try:
        return asyncio.run(_main())
    except DataFetchError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    except psycopg.OperationalError as exc:
        typer.echo(f"Database unavailable: {exc}", err=True)
        raise typer.Exit(code=1)


def _form(customer_id: Optional[str], amount: Optional[str], status: Optional[str]) -> dict:
    return {"customerId": customer_id, "amount": amount, "status": status}


async def _submit(action: Callable[[ActionContext], Awaitable[Any]], db: Database) -> Any:
    ctx = ActionContext(db=db, cache=InMemoryViewCache(), navigator=RaisingNavigator())
    try:
        return await action(ctx)
    except Redirect as redirect:
        return {"redirect": redirect.location}


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"env={settings.app_env} pool=({settings.db_pool_min_size},{settings.db_pool_max_size})"
    )
    if settings.database_url:
        typer.echo("POSTGRES_URL is set and overrides the DB_* values.")


@app.command()
def seed() -> None:
    """
    Create missing tables and load the demo data (safe to re-run).
    """
    report = _run(seed_database)
    typer.echo("Database seeded successfully")
    _echo_json(dict(report))


@app.command()
def cards() -> None:
    """Invoice and customer counts for the dashboard cards."""
    _echo_json(_run(fetch_card_data))


@app.command()
def latest() -> None:
    """The five most recent invoices."""
    _echo_json(_run(fetch_latest_invoices))


@app.command()
def revenue() -> None:
    """Monthly revenue figures."""
    _echo_json(_run(fetch_revenue))


@app.command()
def invoices(
    query: str = typer.Option("", "--query", "-q", help="Search term."),
    page: int = typer.Option(1, "--page", "-p", min=1, help="1-based page number."),
) -> None:
    """One page of invoices matching the search term."""
    _echo_json(_run(lambda db: fetch_filtered_invoices(db, query, page)))


@app.command()
def pages(query: str = typer.Option("", "--query", "-q", help="Search term.")) -> None:
    """Number of invoice pages for the search term."""
    _echo_json(_run(lambda db: fetch_invoices_pages(db, query)))


@app.command()
def invoice(invoice_id: str = typer.Argument(..., help="Invoice id.")) -> None:
    """One invoice, shaped for the edit form."""
    found = _run(lambda db: fetch_invoice_by_id(db, invoice_id))
    if found is None:
        typer.echo(f"Invoice {invoice_id} not found.", err=True)
        raise typer.Exit(code=1)
    _echo_json(found)


@app.command()
def customers() -> None:
    """Customer ids and names, ordered by name."""
    _echo_json(_run(fetch_customers))


@app.command("customers-table")
def customers_table(query: str = typer.Option("", "--query", "-q", help="Search term.")) -> None:
    """Customers with invoice counts and pending/paid totals."""
    _echo_json(_run(lambda db: fetch_filtered_customers(db, query)))


@app.command("create-invoice")
def create_invoice_command(
    customer_id: Optional[str] = typer.Option(None, "--customer-id", "-c"),
    amount: Optional[str] = typer.Option(None, "--amount", "-a", help="Amount in dollars, e.g. 50.00."),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="pending or paid."),
) -> None:
    """Create an invoice dated today."""
    form = _form(customer_id, amount, status)
    _echo_json(_run(lambda db: _submit(lambda ctx: create_invoice(ctx, form), db)))


@app.command("update-invoice")
def update_invoice_command(
    invoice_id: str = typer.Argument(..., help="Invoice id."),
    customer_id: Optional[str] = typer.Option(None, "--customer-id", "-c"),
    amount: Optional[str] = typer.Option(None, "--amount", "-a"),
    status: Optional[str] = typer.Option(None, "--status", "-s"),
) -> None:
    """Replace customer, amount and status of an invoice."""
    form = _form(customer_id, amount, status)
    _echo_json(_run(lambda db: _submit(lambda ctx: update_invoice(ctx, invoice_id, form), db)))


@app.command("delete-invoice")
def delete_invoice_command(invoice_id: str = typer.Argument(..., help="Invoice id.")) -> None:
    """Delete an invoice; deleting a missing id is not an error."""
    deleted = _run(lambda db: _submit(lambda ctx: delete_invoice(ctx, invoice_id), db))
    _echo_json({"deleted": deleted})


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
