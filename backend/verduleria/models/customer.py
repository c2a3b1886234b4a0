"""
Modelo de clientes
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from verduleria.core.database import Base


class Customer(Base):
    """
    Clientes de la verdulería
    """
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)

    # Identificación
    name = Column(String(255), nullable=False, index=True)
    tax_id = Column(String(20), nullable=False)

    # Contacto
    phone = Column(String(50))
    address = Column(String(255), nullable=False)
    email = Column(String(255))

    # Relationships
    orders = relationship("Order", back_populates="customer")
