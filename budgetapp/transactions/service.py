from datetime import datetime

from loguru import logger
from sqlalchemy.orm import Session

from budgetapp.budgets import models as budget_models
from budgetapp.budgets.service import recalculate_budget_spent
from budgetapp.errors import NotFoundError, ValidationError
from budgetapp.money import validate_money
from budgetapp.timeutils import to_naive_utc, utcnow
from budgetapp.transactions import models, schemas
from budgetapp.users.permissions import get_owned_or_404, owned_query


# =========================
# Helper: validation
# =========================
def validate_amount(amount):
    validate_money(amount, "Transaction amount")
    if amount <= 0:
        raise ValidationError("Transaction amount must be greater than zero")


def validate_budget_link(db: Session, owner_id: int, budget_id: int | None):
    """A linked budget must exist and belong to the same owner."""
    if budget_id is None:
        return

    budget = (
        db.query(budget_models.Budget)
        .filter(budget_models.Budget.id == budget_id)
        .first()
    )
    if not budget:
        raise NotFoundError("Budget not found")

    if budget.owner_id != owner_id:
        logger.warning(f"Owner {owner_id} tried to link budget {budget_id} owned by another user")
        raise ValidationError("Budget does not belong to the current user")


def _recalculate(db: Session, budget_ids):
    for budget_id in sorted(b for b in set(budget_ids) if b is not None):
        recalculate_budget_spent(db, budget_id)


# =========================
# Create Transaction
# =========================
def create_transaction(db: Session, owner_id: int, data: schemas.TransactionCreate):
    validate_amount(data.amount)
    validate_budget_link(db, owner_id, data.budget_id)

    new_transaction = models.Transaction(
        owner_id=owner_id,
        description=data.description,
        amount=data.amount,
        category=data.category,
        occurred_at=to_naive_utc(data.occurred_at) or utcnow(),
        type=data.type,
        budget_id=data.budget_id,
        receipt_url=data.receipt_url,
    )
    db.add(new_transaction)
    db.commit()
    db.refresh(new_transaction)

    logger.info(f"Transaction {new_transaction.id} created for owner {owner_id}")

    _recalculate(db, [new_transaction.budget_id])
    db.refresh(new_transaction)
    return new_transaction


# =========================
# Read
# =========================
def get_transaction(db: Session, owner_id: int, transaction_id: int):
    return get_owned_or_404(db, models.Transaction, transaction_id, owner_id, "Transaction")


def list_transactions(
    db: Session,
    owner_id: int,
    category: str | None = None,
    start: datetime | None = None,
    end: datetime | None = None,
    budget_id: int | None = None,
    type: models.TransactionType | None = None,
):
    start = to_naive_utc(start)
    end = to_naive_utc(end)

    if start and end and start > end:
        raise ValidationError("Start date must be before end date")

    query = owned_query(db, models.Transaction, owner_id)

    if category:
        query = query.filter(models.Transaction.category == category)

    if start:
        query = query.filter(models.Transaction.occurred_at >= start)

    if end:
        query = query.filter(models.Transaction.occurred_at <= end)

    if budget_id is not None:
        query = query.filter(models.Transaction.budget_id == budget_id)

    if type:
        query = query.filter(models.Transaction.type == type)

    return (
        query
        .order_by(models.Transaction.occurred_at.desc(), models.Transaction.id.desc())
        .all()
    )


def list_by_category(db: Session, owner_id: int, category: str):
    return list_transactions(db, owner_id, category=category)


def list_by_date_range(db: Session, owner_id: int, start: datetime, end: datetime):
    return list_transactions(db, owner_id, start=start, end=end)


def list_by_budget(db: Session, owner_id: int, budget_id: int):
    return list_transactions(db, owner_id, budget_id=budget_id)


def list_by_type(db: Session, owner_id: int, type: models.TransactionType):
    return list_transactions(db, owner_id, type=type)


# =========================
# Update Transaction
# =========================
def update_transaction(
    db: Session,
    owner_id: int,
    transaction_id: int,
    data: schemas.TransactionUpdate,
):
    transaction = get_owned_or_404(
        db, models.Transaction, transaction_id, owner_id, "Transaction"
    )

    validate_amount(data.amount)
    # An unchanged link to a since-deleted budget is left alone
    if data.budget_id != transaction.budget_id:
        validate_budget_link(db, owner_id, data.budget_id)

    old_key = (transaction.budget_id, transaction.type, transaction.amount)
    old_budget_id = transaction.budget_id

    transaction.description = data.description
    transaction.amount = data.amount
    transaction.category = data.category
    if data.occurred_at is not None:
        transaction.occurred_at = to_naive_utc(data.occurred_at)
    transaction.type = data.type
    transaction.budget_id = data.budget_id
    transaction.receipt_url = data.receipt_url

    db.commit()
    db.refresh(transaction)

    logger.info(f"Transaction {transaction_id} updated by owner {owner_id}")

    new_key = (transaction.budget_id, transaction.type, transaction.amount)
    if new_key != old_key:
        _recalculate(db, [old_budget_id, transaction.budget_id])
        db.refresh(transaction)

    return transaction


# =========================
# Delete Transaction
# =========================
def delete_transaction(db: Session, owner_id: int, transaction_id: int):
    transaction = get_owned_or_404(
        db, models.Transaction, transaction_id, owner_id, "Transaction"
    )
    budget_id = transaction.budget_id

    db.delete(transaction)
    db.commit()

    logger.info(f"Transaction {transaction_id} deleted by owner {owner_id}")

    _recalculate(db, [budget_id])
