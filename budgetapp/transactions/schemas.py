from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal
from typing import Optional

from budgetapp.transactions.models import TransactionType


# =========================
# Base
# =========================
class TransactionBase(BaseModel):
    description: Optional[str] = None
    amount: Decimal
    category: str
    occurred_at: Optional[datetime] = None
    type: TransactionType
    budget_id: Optional[int] = None
    receipt_url: Optional[str] = None


# =========================
# Create / Update
# =========================
class TransactionCreate(TransactionBase):
    pass


class TransactionUpdate(TransactionBase):
    # Full replace; occurred_at keeps its stored value when omitted
    pass


# =========================
# Output
# =========================
class TransactionOut(TransactionBase):
    id: int
    owner_id: int
    occurred_at: datetime
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
