"""
Modelos relacionados con pedidos
"""
from sqlalchemy import Column, Integer, Boolean, DateTime, Enum, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from verduleria.core.database import Base
from verduleria.domain.order import OrderStatus


class Order(Base):
    """
    Tabla principal de pedidos
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    created_at = Column(DateTime, nullable=False, index=True)

    # Relaciones
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    # Estado
    status = Column(
        Enum(OrderStatus, native_enum=False, length=20),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )
    delivery_note_generated = Column(Boolean, nullable=False, default=False)

    # Montos
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)

    # Relationships
    customer = relationship("Customer", back_populates="orders")
    lines = relationship(
        "OrderLine",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderLine.id",
    )
    delivery_note = relationship("DeliveryNote", back_populates="order", uselist=False)


class OrderLine(Base):
    """
    Líneas (detalle) de cada pedido
    """
    __tablename__ = "order_lines"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=False)

    # Cantidades (la verdura se vende por kg, admite decimales)
    quantity = Column(Numeric(12, 3), nullable=False)
    unit_price = Column(Numeric(12, 3), nullable=False)

    # Relationships
    order = relationship("Order", back_populates="lines")
    product = relationship("Product", back_populates="order_lines")
