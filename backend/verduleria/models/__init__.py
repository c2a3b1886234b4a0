"""
Modelos de base de datos
"""
from .customer import Customer
from .product import Product
from .order import Order, OrderLine
from .delivery_note import DeliveryNote

__all__ = [
    "Customer",
    "Product",
    "Order",
    "OrderLine",
    "DeliveryNote",
]
