from sqlalchemy import Column, Integer, String, DateTime, CheckConstraint
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.money import CentsType


class Account(Base):
    """Account holding a single-currency balance"""
    __tablename__ = "account"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_account_balance_non_negative"),
    )

    # Primary Key
    id = Column(Integer, primary_key=True, index=True)

    # Caller-facing handle
    identifier = Column(String(64), unique=True, nullable=False, index=True)

    currency = Column(String(3), nullable=False)
    balance = Column(CentsType, default=0, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Account(id={self.id}, identifier={self.identifier}, currency={self.currency})>"
