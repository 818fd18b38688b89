"""
Built-in demo data used to populate an empty database.

Invoice ids are fixed so that re-seeding skips rows that already exist.
"""

from __future__ import annotations

from datetime import date
from typing import List, NamedTuple

from invoice_dashboard.domain.models import Customer, Invoice, Revenue, User


class FixtureSet(NamedTuple):
    users: List[User]
    customers: List[Customer]
    invoices: List[Invoice]
    revenue: List[Revenue]


USERS: List[User] = [
    User(
        id="410544b2-4001-4271-9855-fec4b6a6442a",
        name="User",
        email="user@nextmail.com",
        password="123456",
    ),
]

CUSTOMERS: List[Customer] = [
    Customer(
        id="d6e15727-9fe1-4961-8c5b-ea44a9bd81aa",
        name="Evil Rabbit",
        email="evil@rabbit.com",
        image_url="/customers/evil-rabbit.png",
    ),
    Customer(
        id="3958dc9e-712f-4377-85e9-fec4b6a6442a",
        name="Delba de Oliveira",
        email="delba@oliveira.com",
        image_url="/customers/delba-de-oliveira.png",
    ),
    Customer(
        id="3958dc9e-742f-4377-85e9-fec4b6a6442a",
        name="Lee Robinson",
        email="lee@robinson.com",
        image_url="/customers/lee-robinson.png",
    ),
    Customer(
        id="76d65c26-f784-44a2-ac19-586678f7c2f2",
        name="Michael Novotny",
        email="michael@novotny.com",
        image_url="/customers/michael-novotny.png",
    ),
    Customer(
        id="cc27c14a-0acf-4f4a-a6c9-d45682c144b9",
        name="Amy Burns",
        email="amy@burns.com",
        image_url="/customers/amy-burns.png",
    ),
    Customer(
        id="13d07535-c59e-4157-a011-f8d2ef4e0cbb",
        name="Balazs Orban",
        email="balazs@orban.com",
        image_url="/customers/balazs-orban.png",
    ),
]


def _invoice(invoice_id: str, customer: int, amount: int, status: str, issued: str) -> Invoice:
    return Invoice(
        id=invoice_id,
        customer_id=CUSTOMERS[customer].id,
        amount=amount,
        status=status,
        date=date.fromisoformat(issued),
    )


INVOICES: List[Invoice] = [
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0001", 0, 15795, "pending", "2022-12-06"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0002", 1, 20348, "pending", "2022-11-14"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0003", 4, 3040, "paid", "2022-10-29"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0004", 3, 44800, "paid", "2023-09-10"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0005", 5, 34577, "pending", "2023-08-05"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0006", 2, 54246, "pending", "2023-07-16"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0007", 0, 666, "pending", "2023-06-27"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0008", 3, 32545, "paid", "2023-06-09"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0009", 4, 1250, "paid", "2023-06-17"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0010", 5, 8546, "paid", "2023-06-07"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0011", 1, 500, "paid", "2023-08-19"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0012", 5, 8945, "paid", "2023-06-03"),
    _invoice("5f4b4a6e-0c1e-4a53-9d0b-5a0d8e1f0013", 2, 1000, "paid", "2022-06-05"),
]

REVENUE: List[Revenue] = [
    Revenue(month=month, revenue=amount)
    for month, amount in [
        ("Jan", 2000),
        ("Feb", 1800),
        ("Mar", 2200),
        ("Apr", 2500),
        ("May", 2300),
        ("Jun", 3200),
        ("Jul", 3500),
        ("Aug", 3700),
        ("Sep", 2500),
        ("Oct", 2800),
        ("Nov", 3000),
        ("Dec", 4800),
    ]
]


def default_fixtures() -> FixtureSet:
    return FixtureSet(users=USERS, customers=CUSTOMERS, invoices=INVOICES, revenue=REVENUE)


__all__ = ["CUSTOMERS", "INVOICES", "REVENUE", "USERS", "FixtureSet", "default_fixtures"]
