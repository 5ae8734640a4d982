# product_service/models.py

"""
SQLAlchemy database models for the Product Service.
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from .db import Base

# Digits kept after the decimal point for prices
PRICE_SCALE = 2

# Range of the INTEGER primary key column
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1


class Product(Base):
    """
    SQLAlchemy model for the 'products' table.
    """

    __tablename__ = "products"

    # Primary Key: assigned by the database, never changed afterwards.
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    name = Column(String(255), nullable=False)

    # Always > 0 once rounded to PRICE_SCALE; the request rules reject anything else.
    price = Column(Numeric(10, PRICE_SCALE), nullable=False)

    availability = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', availability={self.availability})>"
