"""
Owner scoping for budgets and transactions.

Every read and write goes through these helpers with the caller's owner
id. A row owned by someone else is reported exactly like a missing row.
"""

from fastapi import Depends
from sqlalchemy.orm import Query, Session

from budgetapp.errors import NotFoundError
from budgetapp.users import schemas as user_schemas
from budgetapp.users.auth import get_current_user


def current_owner_id(
    current_user: user_schemas.UserDisplaySchema = Depends(get_current_user),
) -> int:
    return current_user.id


def owned_query(db: Session, model, owner_id: int) -> Query:
    return db.query(model).filter(model.owner_id == owner_id)


def get_owned_or_404(db: Session, model, entity_id: int, owner_id: int, label: str):
    row = owned_query(db, model, owner_id).filter(model.id == entity_id).first()
    if not row:
        raise NotFoundError(f"{label} not found")
    return row
