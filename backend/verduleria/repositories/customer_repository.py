"""
Customer Repository - Data Access Layer for Customers

Author: Verduleria
Date: 2025-11-03
"""
from verduleria.core.criteria import CriteriaFilter, FieldKind, FilterField
from verduleria.domain.customer import Customer
from verduleria.models.customer import Customer as CustomerRow
from verduleria.repositories.base import SqlRepository


CUSTOMER_CRITERIA = CriteriaFilter(
    fields={
        "id": FilterField("id", FieldKind.INTEGER),
        "name": FilterField("name", FieldKind.TEXT),
        "phone": FilterField("phone", FieldKind.TEXT),
        "address": FilterField("address", FieldKind.TEXT),
        "email": FilterField("email", FieldKind.TEXT),
        "tax_id": FilterField("tax_id", FieldKind.TEXT),
    },
    aliases={
        "nombre": "name",
        "razonSocial": "name",
        "telefono": "phone",
        "direccion": "address",
        "cuitDni": "tax_id",
    },
)


class CustomerRepository(SqlRepository[Customer]):
    """Repository for Customer data access"""

    model = CustomerRow
    domain = Customer
    criteria = CUSTOMER_CRITERIA
