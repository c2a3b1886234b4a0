"""
Product Repository - Data Access Layer for Products

Author: Verduleria
Date: 2025-11-03
"""
from verduleria.core.criteria import CriteriaFilter, FieldKind, FilterField
from verduleria.domain.product import Product
from verduleria.models.product import Product as ProductRow
from verduleria.repositories.base import SqlRepository


PRODUCT_CRITERIA = CriteriaFilter(
    fields={
        "id": FilterField("id", FieldKind.INTEGER),
        "name": FilterField("name", FieldKind.TEXT),
        "unit": FilterField("unit", FieldKind.TEXT),
        "sale_price": FilterField("sale_price", FieldKind.DECIMAL),
    },
    aliases={
        "nombre": "name",
        "unidadMedida": "unit",
        "precioVenta": "sale_price",
    },
)


class ProductRepository(SqlRepository[Product]):
    """Repository for Product data access"""

    model = ProductRow
    domain = Product
    criteria = PRODUCT_CRITERIA
