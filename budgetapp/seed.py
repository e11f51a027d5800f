"""
Demo data for local development.

Only runs when SEED_DEMO_DATA is enabled, and only once: if the demo
user already exists nothing is inserted. Rows go through the service
layer so every budget's spent matches its linked transactions.
"""

from datetime import timedelta
from decimal import Decimal

from loguru import logger
from sqlalchemy.orm import Session

from budgetapp.budgets import service as budget_service
from budgetapp.config import settings
from budgetapp.timeutils import utcnow
from budgetapp.transactions import schemas as transaction_schemas
from budgetapp.transactions import service as transaction_service
from budgetapp.transactions.models import TransactionType
from budgetapp.users import crud as user_crud
from budgetapp.users import service as user_service


DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@example.com"

DEMO_BUDGETS = [
    ("Cloud Compute (AWS)", "Infrastructure", Decimal("5000.00")),
    ("Software Licences (Q3)", "Software", Decimal("1500.00")),
    ("Server Hardware Refresh", "Hardware", Decimal("8000.00")),
]

# (description, amount, category, days ago, type, index into DEMO_BUDGETS)
DEMO_TRANSACTIONS = [
    ("AWS EC2 Instance - Monthly", Decimal("450.00"), "Infrastructure", 5, TransactionType.EXPENSE, 0),
    ("Client Payment - Project Alpha", Decimal("5000.00"), "Income", 3, TransactionType.INCOME, None),
    ("Office 365 Subscription", Decimal("150.00"), "Software", 1, TransactionType.EXPENSE, 1),
    ("Dell Server Purchase", Decimal("3200.00"), "Hardware", 10, TransactionType.EXPENSE, 2),
]


def seed_demo_data(db: Session):
    if user_crud.get_user_by_username(db, DEMO_USERNAME):
        logger.info("Demo data already present, skipping seed")
        return None

    auth = user_service.register(db, DEMO_USERNAME, DEMO_EMAIL, settings.DEMO_PASSWORD)
    owner_id = auth.id

    budgets = [
        budget_service.create_budget(db, owner_id, name, category, amount)
        for name, category, amount in DEMO_BUDGETS
    ]

    now = utcnow()
    for description, amount, category, days_ago, trx_type, budget_index in DEMO_TRANSACTIONS:
        transaction_service.create_transaction(
            db,
            owner_id,
            transaction_schemas.TransactionCreate(
                description=description,
                amount=amount,
                category=category,
                occurred_at=now - timedelta(days=days_ago),
                type=trx_type,
                budget_id=budgets[budget_index].id if budget_index is not None else None,
            ),
        )

    logger.info(f"Seeded demo user '{DEMO_USERNAME}' with {len(budgets)} budgets")
    return owner_id
