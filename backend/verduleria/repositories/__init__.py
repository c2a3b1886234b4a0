"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.

Author: Verduleria
Date: 2025-11-03
"""
from verduleria.repositories.customer_repository import CustomerRepository
from verduleria.repositories.product_repository import ProductRepository
from verduleria.repositories.order_repository import OrderRepository
from verduleria.repositories.delivery_note_repository import DeliveryNoteRepository

__all__ = [
    'CustomerRepository',
    'ProductRepository',
    'OrderRepository',
    'DeliveryNoteRepository'
]
