from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from budgetapp.database import get_db
from budgetapp.transactions import schemas, service
from budgetapp.transactions.models import TransactionType
from budgetapp.users.permissions import current_owner_id


router = APIRouter()


@router.get("", response_model=List[schemas.TransactionOut])
def list_transactions(
    category: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    budget_id: Optional[int] = None,
    type: Optional[TransactionType] = None,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.list_transactions(
        db,
        owner_id,
        category=category,
        start=start,
        end=end,
        budget_id=budget_id,
        type=type,
    )


@router.post("", response_model=schemas.TransactionOut)
def create_transaction(
    transaction: schemas.TransactionCreate,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.create_transaction(db, owner_id, transaction)


# -------- Filters --------
@router.get("/category/{category}", response_model=List[schemas.TransactionOut])
def list_by_category(
    category: str,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.list_by_category(db, owner_id, category)


@router.get("/date-range", response_model=List[schemas.TransactionOut])
def list_by_date_range(
    start: datetime = Query(..., description="Start of the range, inclusive"),
    end: datetime = Query(..., description="End of the range, inclusive"),
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.list_by_date_range(db, owner_id, start, end)


@router.get("/budget/{budget_id}", response_model=List[schemas.TransactionOut])
def list_by_budget(
    budget_id: int,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.list_by_budget(db, owner_id, budget_id)


@router.get("/type/{type}", response_model=List[schemas.TransactionOut])
def list_by_type(
    type: TransactionType,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.list_by_type(db, owner_id, type)


# -------- Single transaction --------
@router.get("/{transaction_id}", response_model=schemas.TransactionOut)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.get_transaction(db, owner_id, transaction_id)


@router.put("/{transaction_id}", response_model=schemas.TransactionOut)
def update_transaction(
    transaction_id: int,
    transaction: schemas.TransactionUpdate,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.update_transaction(db, owner_id, transaction_id, transaction)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    service.delete_transaction(db, owner_id, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
