from decimal import Decimal

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from budgetapp.budgets import models, schemas
from budgetapp.errors import ValidationError
from budgetapp.money import validate_money
from budgetapp.transactions.models import Transaction, TransactionType
from budgetapp.users.permissions import get_owned_or_404, owned_query


ZERO = Decimal("0")


# =========================
# Helper: amount validation
# =========================
def validate_budget_amount(amount: Decimal | None):
    validate_money(amount, "Budget amount")
    if amount < 0:
        raise ValidationError("Budget amount must be zero or greater")


# =========================
# Read
# =========================
def list_budgets(db: Session, owner_id: int):
    return (
        owned_query(db, models.Budget, owner_id)
        .order_by(models.Budget.id)
        .all()
    )


def get_budget(db: Session, owner_id: int, budget_id: int):
    return get_owned_or_404(db, models.Budget, budget_id, owner_id, "Budget")


# =========================
# Create Budget
# =========================
def create_budget(db: Session, owner_id: int, name: str, category: str, amount: Decimal):
    validate_budget_amount(amount)

    new_budget = models.Budget(
        owner_id=owner_id,
        name=name,
        category=category,
        amount=amount,
        spent=ZERO,
    )
    db.add(new_budget)
    db.commit()
    db.refresh(new_budget)

    logger.info(f"Budget {new_budget.id} created for owner {owner_id}")
    return new_budget


# =========================
# Update Budget
# =========================
def update_budget(
    db: Session,
    owner_id: int,
    budget_id: int,
    name: str,
    category: str,
    amount: Decimal,
):
    budget = get_owned_or_404(db, models.Budget, budget_id, owner_id, "Budget")
    validate_budget_amount(amount)

    budget.name = name
    budget.category = category
    budget.amount = amount

    db.commit()
    db.refresh(budget)

    logger.info(f"Budget {budget_id} updated by owner {owner_id}")
    return budget


# =========================
# Delete Budget
# =========================
def delete_budget(db: Session, owner_id: int, budget_id: int):
    budget = get_owned_or_404(db, models.Budget, budget_id, owner_id, "Budget")

    # Linked transactions keep their budget_id as a dangling reference
    db.delete(budget)
    db.commit()

    logger.info(f"Budget {budget_id} deleted by owner {owner_id}")


# =========================
# Recalculate spent
# =========================
def recalculate_budget_spent(db: Session, budget_id: int | None):
    """
    Re-derive a budget's spent from the EXPENSE transactions linked to it.

    Always a full sum, so running it twice, or concurrently, lands on the
    same value. Does nothing if the budget is gone. Store failures are
    logged and dropped: the write that triggered this has already been
    committed on its own.
    """
    if budget_id is None:
        return None

    try:
        budget = db.query(models.Budget).filter(models.Budget.id == budget_id).first()
        if not budget:
            logger.debug(f"Recalculation skipped, budget {budget_id} no longer exists")
            return None

        amounts = (
            db.query(Transaction.amount)
            .filter(
                Transaction.budget_id == budget_id,
                Transaction.type == TransactionType.EXPENSE,
            )
            .all()
        )
        total_spent = sum((row.amount for row in amounts), ZERO)

        budget.spent = total_spent
        db.commit()
        db.refresh(budget)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning(f"Recalculation of budget {budget_id} failed: {exc}")
        return None

    logger.debug(f"Budget {budget_id} spent recalculated to {total_spent}")
    return budget


def recalculate_owned_budget(db: Session, owner_id: int, budget_id: int):
    get_owned_or_404(db, models.Budget, budget_id, owner_id, "Budget")
    recalculate_budget_spent(db, budget_id)
    return get_budget(db, owner_id, budget_id)


# =========================
# Summary
# =========================
def get_budget_summary(db: Session, owner_id: int) -> schemas.BudgetSummary:
    budgets = list_budgets(db, owner_id)

    total_budgeted = sum((b.amount for b in budgets), ZERO)
    total_spent = sum((b.spent for b in budgets), ZERO)
    over_budget_count = sum(1 for b in budgets if b.spent > b.amount)

    return schemas.BudgetSummary(
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        total_remaining=total_budgeted - total_spent,
        over_budget_count=over_budget_count,
        total_budgets=len(budgets),
    )
