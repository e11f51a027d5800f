from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field


# =========================
# Base
# =========================
class BudgetBase(BaseModel):
    name: str
    category: str
    amount: Decimal


# =========================
# Create / Update
# =========================
class BudgetCreate(BudgetBase):
    pass


class BudgetUpdate(BudgetBase):
    # spent is not accepted here; it only moves through recalculation
    pass


# =========================
# Output
# =========================
class BudgetOut(BudgetBase):
    id: int
    owner_id: int
    spent: Decimal
    created_at: Optional[datetime] = None

    @computed_field
    @property
    def remaining(self) -> Decimal:
        return self.amount - self.spent

    model_config = ConfigDict(from_attributes=True)


class BudgetSummary(BaseModel):
    total_budgeted: Decimal
    total_spent: Decimal
    total_remaining: Decimal
    over_budget_count: int
    total_budgets: int
