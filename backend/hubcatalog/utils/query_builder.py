"""
QueryBuilder Utility - Fluent SELECT Construction
Builds parameterized SELECT statements for the catalog tables

Security Features:
- Automatic parameter binding (values never reach the SQL text)
- Table and column identifiers checked against a plain-identifier pattern

Usage:
    builder = (QueryBuilder("tags")
        .select("id")
        .where("name = :name", tag_name, "name")
    )

    query, params = builder.build()
    row = db.execute(text(query), params).fetchone()
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def validate_identifier(name: str) -> str:
    """
    Reject anything that is not a bare SQL identifier.

    Raises:
        ValueError: If name contains characters outside [A-Za-z0-9_]
    """
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


@dataclass
class QueryBuilder:
    """
    Fluent interface for building SELECT queries

    Attributes:
        table: Table name
        _select: Columns to select
        _where: WHERE conditions with their parameter names
        _params: Bound parameters
    """

    table: str
    _select: List[str] = field(default_factory=lambda: ["*"])
    _where: List[Tuple[str, Optional[str]]] = field(default_factory=list)
    _params: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        validate_identifier(self.table)

    def select(self, *columns: str) -> "QueryBuilder":
        """
        Specify columns to select

        Example:
            builder.select("id", "name")
        """
        self._select = [validate_identifier(c) for c in columns] if columns else ["*"]
        return self

    def where(self, condition: str, value: Any = None, param_name: Optional[str] = None) -> "QueryBuilder":
        """
        Add WHERE condition with parameterization

        Args:
            condition: SQL condition with :param_name placeholders
            value: Value to bind (None for conditions without params)
            param_name: Parameter name (auto-generated if not provided)

        Example:
            builder.where("name = :name", "productivity", "name")
        """
        if value is not None:
            if param_name is None:
                param_name = f"param_{len(self._params)}"
            self._where.append((condition, param_name))
            self._params[param_name] = value
        else:
            self._where.append((condition, None))
        return self

    def build(self) -> Tuple[str, Dict[str, Any]]:
        """
        Build final SQL query with parameters

        Returns:
            Tuple of (sql_query, parameters_dict)
        """
        query_parts = [f"SELECT {', '.join(self._select)}", f"FROM {self.table}"]

        if self._where:
            query_parts.append(f"WHERE {' AND '.join(cond for cond, _ in self._where)}")

        return " ".join(query_parts), self._params.copy()

