"""
Modelo de remitos
"""
from sqlalchemy import Column, Integer, BigInteger, String, DateTime, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from verduleria.core.database import Base


class DeliveryNote(Base):
    """
    Remitos - uno por pedido

    order_id es UNIQUE: la base de datos garantiza un único remito por pedido
    aun con generaciones concurrentes.
    """
    __tablename__ = "delivery_notes"

    id = Column(Integer, primary_key=True, index=True)
    note_number = Column(BigInteger, nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, unique=True)

    total_value = Column(Numeric(12, 2), nullable=False)
    issued_at = Column(DateTime, nullable=False, index=True)

    # Confirmación de entrega
    received_by_name = Column(String(255))
    received_by_id_doc = Column(String(50))
    remarks = Column(Text)
    delivered_at = Column(DateTime)

    # Relationships
    order = relationship("Order", back_populates="delivery_note")
