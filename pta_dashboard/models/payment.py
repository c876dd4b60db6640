import enum

from sqlalchemy import Date, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import mapped_column, relationship

from .base import Base


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"
    GCASH = "gcash"
    OTHER = "other"


class Payment(Base):
    __tablename__ = "payments"

    # Foreign Keys
    parent_id = mapped_column(Uuid, ForeignKey("parents.id"), nullable=False, index=True)

    # Payment Details
    amount = mapped_column(Numeric(10, 2), nullable=False)
    payment_method = mapped_column(String(30), nullable=False)
    payment_date = mapped_column(Date, nullable=False, index=True)
    receipt_url = mapped_column(Text, nullable=True)
    notes = mapped_column(Text, nullable=True)

    # Relationships
    parent = relationship("Parent", back_populates="payments", lazy="raise")
