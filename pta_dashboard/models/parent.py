from sqlalchemy import Boolean, Date, Numeric, String, Text
from sqlalchemy.orm import mapped_column, relationship

from .base import Base


class Parent(Base):
    __tablename__ = "parents"

    # Basic Information
    name = mapped_column(String(100), nullable=False, index=True)
    contact_number = mapped_column(String(20), nullable=False)
    email = mapped_column(String(100), nullable=False, index=True)
    address = mapped_column(String(500), nullable=True)

    # Cached payment state, re-derived from the payments table
    payment_status = mapped_column(Boolean, default=False, nullable=False)
    payment_date = mapped_column(Date, nullable=True)
    payment_amount = mapped_column(Numeric(10, 2), nullable=True)
    payment_method = mapped_column(String(30), nullable=True)
    receipt_url = mapped_column(Text, nullable=True)

    # Relationships are loaded explicitly by the services
    students = relationship("Student", back_populates="parent", lazy="raise", passive_deletes=True)
    payments = relationship("Payment", back_populates="parent", lazy="raise", passive_deletes=True)
