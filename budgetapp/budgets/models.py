from decimal import Decimal

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from budgetapp.database import Base
from budgetapp.timeutils import utcnow


class Budget(Base):
    __tablename__ = "budgets"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    # Derived from linked EXPENSE transactions, written only by recalculation
    spent = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))

    created_at = Column(DateTime, default=utcnow)

    owner = relationship("User", back_populates="budgets")
