from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from budgetapp.budgets import schemas, service
from budgetapp.database import get_db
from budgetapp.users.permissions import current_owner_id


router = APIRouter()


@router.get("", response_model=List[schemas.BudgetOut])
def list_budgets(
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.list_budgets(db, owner_id)


# Declared before /{budget_id} so "summary" is not read as an id
@router.get("/summary", response_model=schemas.BudgetSummary)
def get_budget_summary(
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.get_budget_summary(db, owner_id)


@router.post("", response_model=schemas.BudgetOut)
def create_budget(
    budget: schemas.BudgetCreate,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.create_budget(db, owner_id, budget.name, budget.category, budget.amount)


@router.get("/{budget_id}", response_model=schemas.BudgetOut)
def get_budget(
    budget_id: int,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.get_budget(db, owner_id, budget_id)


@router.put("/{budget_id}", response_model=schemas.BudgetOut)
def update_budget(
    budget_id: int,
    budget: schemas.BudgetUpdate,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.update_budget(
        db, owner_id, budget_id, budget.name, budget.category, budget.amount
    )


@router.delete("/{budget_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_budget(
    budget_id: int,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    service.delete_budget(db, owner_id, budget_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{budget_id}/recalculate", response_model=schemas.BudgetOut)
def recalculate_budget(
    budget_id: int,
    db: Session = Depends(get_db),
    owner_id: int = Depends(current_owner_id),
):
    return service.recalculate_owned_budget(db, owner_id, budget_id)
