"""
Order Domain Models

Represents orders, their lines and the order status lifecycle.

Author: Verduleria
Date: 2025-11-03
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Dict, FrozenSet, List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum

from verduleria.domain.money import line_subtotal, total_of


class OrderStatus(str, Enum):
    """Order lifecycle status (wire format is the member name)"""
    PENDING = "PENDING"
    IN_PREPARATION = "IN_PREPARATION"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# ================================================================================
# STATUS TRANSITIONS
# ================================================================================
# PENDING -> IN_PREPARATION -> SHIPPED -> DELIVERED
# CANCELLED is reachable from every non-terminal status.
# Staying in the same status is always allowed.
# ================================================================================

ORDER_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.IN_PREPARATION, OrderStatus.CANCELLED}),
    OrderStatus.IN_PREPARATION: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(s for s, targets in ORDER_TRANSITIONS.items() if not targets)

# A remito can only be issued once preparation started and before delivery
DELIVERY_NOTE_STATUSES = frozenset({OrderStatus.IN_PREPARATION, OrderStatus.SHIPPED})


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Check a status change against ORDER_TRANSITIONS"""
    return current == target or target in ORDER_TRANSITIONS[current]


class OrderLine(BaseModel):
    """
    Order line domain model - one product entry of an order

    The line refers to its order only by order_id; lines are owned by the
    Order that holds them and have no life of their own.

    Fields:
        id: Internal line ID
        order_id: Owning order ID
        product_id: Referenced product
        quantity: Quantity in the product's unit of measure (kg may be fractional)
        unit_price: Price per unit agreed for this order
    """

    id: Optional[int] = Field(None, description="Order line ID")
    order_id: Optional[int] = Field(None, description="Owning order ID")
    product_id: int = Field(..., description="Product ID")
    quantity: Decimal = Field(..., description="Quantity ordered", gt=0)
    unit_price: Decimal = Field(..., description="Sale price per unit", gt=0)

    model_config = ConfigDict(from_attributes=True)

    @property
    def subtotal(self) -> Decimal:
        """quantity x unit_price (not rounded)"""
        return line_subtotal(self.quantity, self.unit_price)

    def to_dict(self) -> dict:
        """Convert to dictionary with Decimal to float conversion"""
        data = self.model_dump()
        for field in ['quantity', 'unit_price']:
            data[field] = float(data[field])
        data['subtotal'] = float(self.subtotal)
        return data


class Order(BaseModel):
    """
    Order domain model - a customer's order

    Fields:
        id: Internal order ID (primary key)
        created_at: When the order was created
        customer_id: Owning customer (required)
        status: Lifecycle status
        delivery_note_generated: Whether a remito was generated / the order delivered
        lines: Order lines, in insertion order
        total_amount: Order total as last computed on save
    """

    id: Optional[int] = Field(None, description="Internal order ID")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    customer_id: int = Field(..., description="Customer ID")
    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    delivery_note_generated: bool = Field(False, description="Delivery note generated flag")
    lines: List[OrderLine] = Field(default_factory=list, description="Order lines")
    total_amount: Decimal = Field(Decimal('0'), description="Total order amount", ge=0)

    model_config = ConfigDict(from_attributes=True)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def lines_total(self) -> Decimal:
        """Rounded sum of line subtotals as the lines stand now"""
        return total_of(line.subtotal for line in self.lines)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def to_dict(self) -> dict:
        """
        Convert to dictionary with computed fields

        Returns dict with all fields plus computed properties
        """
        data = self.model_dump()
        data['status'] = self.status.value
        data['total_amount'] = float(self.total_amount)
        data['line_count'] = self.line_count
        if data.get('created_at'):
            data['created_at'] = self.created_at.isoformat()
        data['lines'] = [line.to_dict() for line in self.lines]
        return data


class OrderLineInput(BaseModel):
    """Line as supplied when saving an order (three decimals, as stored)"""
    product_id: int
    quantity: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)
    unit_price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=3)


class OrderSave(BaseModel):
    """
    Schema for creating or updating an order

    customer_id is required by the lifecycle manager; it is Optional here so
    that a missing customer is reported as an invalid argument by the service
    rather than as a schema error.
    """
    customer_id: Optional[int] = None
    status: Optional[OrderStatus] = None
    delivery_note_generated: Optional[bool] = None
    total_amount: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    lines: Optional[List[OrderLineInput]] = None


class OrderStatusUpdate(BaseModel):
    """Schema for a status change"""
    status: OrderStatus
