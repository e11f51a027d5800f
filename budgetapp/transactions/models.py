import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from budgetapp.database import Base
from budgetapp.timeutils import utcnow


class TransactionType(str, enum.Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    description = Column(String, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    occurred_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    type = Column(Enum(TransactionType), nullable=False, index=True)

    # Plain reference, left dangling when the budget is deleted
    budget_id = Column(Integer, nullable=True, index=True)
    receipt_url = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)

    owner = relationship("User", back_populates="transactions")
