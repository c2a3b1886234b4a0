"""
Service Layer - business workflows

Services own the transaction of each operation and talk to the
repositories; the API layer only talks to services.
"""
from verduleria.services.catalog_service import CustomerService, ProductService
from verduleria.services.order_service import OrderService
from verduleria.services.delivery_note_service import DeliveryNoteService

__all__ = ['CustomerService', 'ProductService', 'OrderService', 'DeliveryNoteService']
