from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, CheckConstraint
from app.core.database import Base
from app.core.money import CentsType


class Payment(Base):
    """
    Completed transfer between two accounts.

    Rows are append-only: written once by the transfer engine and never
    updated or deleted.
    """
    __tablename__ = "payment"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payment_amount_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    from_id = Column(String(64), ForeignKey("account.identifier"), nullable=False, index=True)
    to_id = Column(String(64), ForeignKey("account.identifier"), nullable=False, index=True)
    amount = Column(CentsType, nullable=False)
    currency = Column(String(3), nullable=False)
    occurred_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Payment(id={self.id}, from={self.from_id}, to={self.to_id}, amount={self.amount})>"
