"""
Criteria Filter - compact query language for list operations

A filter is a comma separated list of clauses ``field<op>value``:

    nombre:lechuga,precioVenta>100,precioVenta<500

    field:value   TEXT fields -> case-insensitive "contains"; others -> equality
    field>value   field >= value
    field<value   field <= value

Field and value are word characters only. A trailing comma is implied, empty
segments are ignored and all clauses are ANDed. An empty or missing filter
matches everything.

Each repository declares the fields it accepts as a whitelist of
``FilterField`` entries. Values are converted to the field's type when the
filter is parsed, so unknown fields, unsupported operators and values of the
wrong type are reported as CriteriaParseError before any query runs.

The resulting Predicate can be evaluated in memory (``predicate(record)``) or
rendered as a SQLAlchemy expression (``predicate.to_sql(Model)``).

Author: Verduleria
Date: 2025-11-03
"""
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type

from sqlalchemy import and_, func, true

from verduleria.core.exceptions import CriteriaParseError
from verduleria.domain.order import OrderStatus

CLAUSE_PATTERN = re.compile(r"(\w+)([:<>])(\w+)")

MATCH = ":"
AT_MOST = "<"
AT_LEAST = ">"

DATE_FORMAT = "%Y%m%d"
DATETIME_FORMAT = "%Y%m%dT%H%M%S"

# BIGINT range
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

TRUE_TOKENS = {"true", "1", "si", "yes"}
FALSE_TOKENS = {"false", "0", "no"}


class FieldKind(str, Enum):
    """How a filter value is typed and compared"""
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    STATUS = "status"


# Kinds without a meaningful order only support ':'
UNORDERED_KINDS = {FieldKind.BOOLEAN, FieldKind.STATUS}


@dataclass(frozen=True)
class FilterField:
    """A filterable attribute (same name on the ORM model and the domain model)"""
    attribute: str
    kind: FieldKind

    def coerce(self, name: str, token: str) -> Any:
        """Convert a raw token to this field's type"""
        try:
            if self.kind == FieldKind.TEXT:
                return token
            if self.kind == FieldKind.INTEGER:
                value = int(token)
                if not INT64_MIN <= value <= INT64_MAX:
                    raise ValueError(token)
                return value
            if self.kind == FieldKind.DECIMAL:
                value = Decimal(token)
                if not value.is_finite():
                    raise ValueError(token)
                return value
            if self.kind == FieldKind.DATETIME:
                fmt = DATE_FORMAT if len(token) == 8 else DATETIME_FORMAT
                return datetime.strptime(token, fmt)
            if self.kind == FieldKind.BOOLEAN:
                lowered = token.lower()
                if lowered in TRUE_TOKENS:
                    return True
                if lowered in FALSE_TOKENS:
                    return False
                raise ValueError(token)
            if self.kind == FieldKind.STATUS:
                return OrderStatus(token.upper())
        except (ValueError, InvalidOperation):
            raise CriteriaParseError(
                f"Valor '{token}' inválido para el campo '{name}' ({self.kind.value})",
                extra={"field": name, "value": token},
            )
        raise CriteriaParseError(f"Tipo de campo no soportado: {self.kind}")


@dataclass(frozen=True)
class Clause:
    """One parsed ``field<op>value`` clause"""
    field: str
    attribute: str
    kind: FieldKind
    operation: str
    value: Any
    whole_day: bool = False

    def matches(self, record: Any) -> bool:
        actual = getattr(record, self.attribute)
        if actual is None:
            return False

        if self.operation == AT_LEAST:
            return actual >= self.value
        if self.operation == AT_MOST:
            return actual <= self.value

        if self.kind == FieldKind.TEXT:
            return self.value.lower() in str(actual).lower()
        if self.whole_day:
            return self.value <= actual < self.value + timedelta(days=1)
        return actual == self.value

    def to_sql(self, model: Type):
        column = getattr(model, self.attribute)

        if self.operation == AT_LEAST:
            return column >= self.value
        if self.operation == AT_MOST:
            return column <= self.value

        if self.kind == FieldKind.TEXT:
            return func.lower(column).contains(self.value.lower(), autoescape=True)
        if self.whole_day:
            return and_(column >= self.value, column < self.value + timedelta(days=1))
        return column == self.value


class Predicate:
    """Conjunction of clauses; no clauses means match-all"""

    def __init__(self, clauses: Tuple[Clause, ...] = ()):
        self.clauses = tuple(clauses)

    @property
    def is_empty(self) -> bool:
        return not self.clauses

    def __call__(self, record: Any) -> bool:
        return all(clause.matches(record) for clause in self.clauses)

    def to_sql(self, model: Type):
        if self.is_empty:
            return true()
        return and_(*(clause.to_sql(model) for clause in self.clauses))

    def __repr__(self) -> str:
        return f"Predicate({', '.join(f'{c.field}{c.operation}{c.value}' for c in self.clauses)})"


MATCH_ALL = Predicate()


class CriteriaFilter:
    """
    Parser bound to one entity's whitelist of filterable fields

    Args:
        fields: public field name -> FilterField
        aliases: alternative names (legacy client names) -> public field name
    """

    def __init__(self, fields: Dict[str, FilterField], aliases: Optional[Dict[str, str]] = None):
        self.fields = dict(fields)
        self.aliases = dict(aliases or {})
        for alias, target in self.aliases.items():
            if target not in self.fields:
                raise ValueError(f"Alias '{alias}' points to unknown field '{target}'")

    @property
    def field_names(self):
        return sorted(self.fields) + sorted(self.aliases)

    def resolve(self, name: str) -> Tuple[str, FilterField]:
        canonical = self.aliases.get(name, name)
        field = self.fields.get(canonical)
        if field is None:
            raise CriteriaParseError(
                f"Campo de filtro desconocido: '{name}'",
                extra={"field": name, "allowed_fields": self.field_names},
            )
        return canonical, field

    def parse(self, search: Optional[str]) -> Predicate:
        """Parse a filter string into a Predicate"""
        if not search:
            return MATCH_ALL

        clauses = []
        for segment in (search + ",").split(","):
            segment = segment.strip()
            if not segment:
                continue

            match = CLAUSE_PATTERN.fullmatch(segment)
            if match is None:
                raise CriteriaParseError(
                    f"Cláusula de filtro mal formada: '{segment}'",
                    extra={"clause": segment},
                )

            name, operation, token = match.groups()
            canonical, field = self.resolve(name)

            if operation != MATCH and field.kind in UNORDERED_KINDS:
                raise CriteriaParseError(
                    f"El operador '{operation}' no se admite para el campo '{name}'",
                    extra={"field": name, "operation": operation},
                )

            value = field.coerce(name, token)
            whole_day = (
                field.kind == FieldKind.DATETIME and operation == MATCH and len(token) == 8
            )
            clauses.append(Clause(canonical, field.attribute, field.kind, operation, value, whole_day))

        return Predicate(tuple(clauses))
