"""
Modelo de productos
"""
from sqlalchemy import Column, Integer, String, Numeric
from sqlalchemy.orm import relationship
from verduleria.core.database import Base


class Product(Base):
    """
    Productos a la venta
    """
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    unit = Column(String(50), nullable=False)
    sale_price = Column(Numeric(12, 3), nullable=False)

    # Relationships
    order_lines = relationship("OrderLine", back_populates="product")
