"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.

Author: Verduleria
Date: 2025-11-03
"""
from verduleria.domain.customer import Customer
from verduleria.domain.product import Product
from verduleria.domain.order import Order, OrderLine, OrderStatus
from verduleria.domain.delivery_note import DeliveryNote

__all__ = ['Customer', 'Product', 'Order', 'OrderLine', 'OrderStatus', 'DeliveryNote']
