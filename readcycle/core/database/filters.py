"""
Query building utilities.

This module holds the helpers repositories use to shape ``select`` statements:
equality filters, pagination, sorting and the small ``filter`` expression
language accepted by the v1 list endpoints.

Filter expressions
------------------

An expression is one or more clauses joined with ``and``::

    title ~ 'harry' and quantity > 0 and isActive : true

Each clause is ``field operator value``. Supported operators:

- ``:``  equals
- ``!``  not equals
- ``~``  case-insensitive contains (strings only)
- ``>`` / ``<``  greater / less than
- ``>:`` / ``<:``  greater or equal / less or equal

Values are single-quoted strings, integers, decimals, ``true``, ``false`` or
``null``. Field names may be given in camelCase or snake_case.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field
from sqlalchemy import String, cast
from sqlmodel import SQLModel

from readcycle.core.exceptions import InvalidError

EntityType = TypeVar("EntityType", bound=SQLModel)

_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<string>'(?:[^']|'')*')
      | (?P<op>>:|<:|[:!~<>])
      | (?P<number>-?\d+(?:\.\d+)?)
      | (?P<word>[A-Za-z_][A-Za-z0-9_]*)
    )""",
    re.VERBOSE,
)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class PageRequest(BaseModel):
    """Pagination and sorting requested by a client (1-based pages)."""

    page: int = Field(default=1, ge=1)
    size: int = Field(default=20, ge=1, le=100)
    sort: Optional[str] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


@dataclass(frozen=True)
class FilterClause:
    """One ``field operator value`` clause of a filter expression."""

    field: str
    op: str
    value: Any


def to_snake(name: str) -> str:
    """Convert ``camelCase`` to ``snake_case``; snake_case passes through."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _tokenize(expression: str) -> List[tuple[str, str]]:
    tokens: List[tuple[str, str]] = []
    pos = 0
    text = expression.rstrip()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match or match.end() == pos:
            raise InvalidError(f"Invalid filter: unexpected input at position {pos}")
        kind = match.lastgroup
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens


def _literal(kind: str, raw: str) -> Any:
    if kind == "string":
        return raw[1:-1].replace("''", "'")
    if kind == "number":
        return float(raw) if "." in raw else int(raw)
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    raise InvalidError(f"Invalid filter: unsupported value {raw!r}")


def parse_filter(expression: Optional[str]) -> List[FilterClause]:
    """Parse a filter expression into clauses.

    Args:
        expression: Filter text, e.g. ``"title ~ 'dune' and quantity > 0"``

    Returns:
        Parsed clauses in the order written; empty for a blank expression

    Raises:
        InvalidError: If the expression is malformed
    """
    if not expression or not expression.strip():
        return []

    tokens = _tokenize(expression)
    clauses: List[FilterClause] = []
    index = 0
    while True:
        if index + 3 > len(tokens):
            raise InvalidError("Invalid filter: incomplete clause")
        (field_kind, field), (op_kind, op), (value_kind, raw_value) = tokens[index : index + 3]
        if field_kind != "word":
            raise InvalidError(f"Invalid filter: expected a field name, got {field!r}")
        if op_kind != "op":
            raise InvalidError(f"Invalid filter: expected an operator after {field!r}")
        if value_kind not in ("string", "number", "word"):
            raise InvalidError(f"Invalid filter: expected a value after {field}{op}")
        clauses.append(FilterClause(field=field, op=op, value=_literal(value_kind, raw_value)))
        index += 3

        if index == len(tokens):
            return clauses
        joiner_kind, joiner = tokens[index]
        if joiner_kind != "word" or joiner.lower() != "and":
            raise InvalidError(f"Invalid filter: expected 'and', got {joiner!r}")
        index += 1


def _coerce(column, value: Any) -> Any:
    """Convert a literal to the Python type of the column it is compared with."""
    if value is None:
        return None
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    try:
        if isinstance(value, python_type):
            return value
        if issubclass(python_type, enum.Enum):
            try:
                return python_type(value)
            except ValueError:
                return python_type[str(value).upper()]
        if python_type is bool:
            return str(value).lower() in ("true", "1", "yes")
        if python_type is datetime:
            return datetime.fromisoformat(str(value))
        if python_type is date:
            return date.fromisoformat(str(value))
        return python_type(value)
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidError(f"Invalid filter: bad value {value!r} for {column.name}") from e


def _clause_expression(model: Type[EntityType], clause: FilterClause):
    attr_name = to_snake(clause.field)
    columns = model.__table__.columns
    if attr_name not in columns:
        raise InvalidError(f"Invalid filter: unknown field {clause.field!r}")
    column = getattr(model, attr_name)

    if clause.op == "~":
        return cast(column, String).ilike(f"%{clause.value}%")

    value = _coerce(columns[attr_name], clause.value)
    if clause.op == ":":
        return column.is_(None) if value is None else column == value
    if clause.op == "!":
        return column.is_not(None) if value is None else column != value
    if clause.op == ">":
        return column > value
    if clause.op == "<":
        return column < value
    if clause.op == ">:":
        return column >= value
    if clause.op == "<:":
        return column <= value
    raise InvalidError(f"Invalid filter: unsupported operator {clause.op!r}")


class QueryBuilder:
    """Utility class for building SQLModel-based database queries."""

    @staticmethod
    def apply_filters(stmt, model: Type[EntityType], filters: Dict[str, Any]):
        """Apply equality filters to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            model: SQLModel entity class
            filters: Dictionary of field filters; ``None`` values are skipped

        Returns:
            Modified select statement with filters applied
        """
        for key, value in filters.items():
            if value is not None and hasattr(model, key):
                stmt = stmt.where(getattr(model, key) == value)
        return stmt

    @staticmethod
    def apply_expression(stmt, model: Type[EntityType], expression: Optional[str]):
        """Apply a filter expression (see module docstring) to a select statement.

        Raises:
            InvalidError: If the expression is malformed or names an unknown field
        """
        for clause in parse_filter(expression):
            stmt = stmt.where(_clause_expression(model, clause))
        return stmt

    @staticmethod
    def apply_sort(stmt, model: Type[EntityType], sort: Optional[str], default=None):
        """Apply ``"field"`` / ``"field,asc"`` / ``"field,desc"`` ordering.

        Falls back to ``default`` (a column expression) when no sort is given.
        """
        if not sort:
            return stmt.order_by(default) if default is not None else stmt
        field, _, direction = sort.partition(",")
        attr_name = to_snake(field.strip())
        if attr_name not in model.__table__.columns:
            raise InvalidError(f"Invalid sort: unknown field {field.strip()!r}")
        column = getattr(model, attr_name)
        if direction.strip().lower() == "desc":
            return stmt.order_by(column.desc())
        return stmt.order_by(column.asc())

    @staticmethod
    def apply_pagination(stmt, limit: Optional[int], offset: Optional[int]):
        """Apply pagination to a SQLModel select statement.

        Args:
            stmt: SQLModel select statement
            limit: Maximum number of records
            offset: Number of records to skip

        Returns:
            Modified select statement with pagination applied
        """
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return stmt
