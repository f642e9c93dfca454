"""
Mutation Builder Utilities - Fluent INSERT Construction

Complements QueryBuilder for the write side of the catalog. Records are
immutable once created, so only INSERT is needed.

Usage:
    # Plugin row, identity returned by the database
    query, params = (InsertBuilder("plugins")
        .values_dict({"name": "Dark Mode", "author": "ada", "version": "1.0", "rating": 4.5})
        .returning("id")
        .build())

    # Tag row, silently skipped when the name already exists
    query, params = (InsertBuilder("tags")
        .columns("name")
        .values("productivity")
        .on_conflict_do_nothing("name")
        .build())
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .query_builder import validate_identifier


@dataclass
class InsertBuilder:
    """
    Fluent interface for building single-row INSERT statements.

    Attributes:
        table: Table name to insert into
        _columns: Column names
        _values: Row values, in column order
        _returning: Columns to return
        _conflict_columns: Conflict target for ON CONFLICT DO NOTHING
    """

    table: str
    _columns: List[str] = field(default_factory=list)
    _values: Optional[Tuple[Any, ...]] = None
    _returning: List[str] = field(default_factory=list)
    _conflict_columns: Optional[List[str]] = None

    def __post_init__(self) -> None:
        validate_identifier(self.table)

    def columns(self, *cols: str) -> "InsertBuilder":
        """Specify columns for the INSERT."""
        self._columns = [validate_identifier(c) for c in cols]
        return self

    def values(self, *vals: Any) -> "InsertBuilder":
        """Set the row's values, in column order."""
        self._values = vals
        return self

    def values_dict(self, data: Dict[str, Any]) -> "InsertBuilder":
        """
        Set the row's values from a dictionary.

        If columns haven't been set, they are taken from the dict keys.
        """
        if not self._columns:
            self.columns(*data.keys())
        self._values = tuple(data.get(col) for col in self._columns)
        return self

    def returning(self, *cols: str) -> "InsertBuilder":
        """
        Add RETURNING clause (PostgreSQL, SQLite 3.35+).

        Example:
            builder.returning("id")
        """
        self._returning = [validate_identifier(c) for c in cols]
        return self

    def on_conflict_do_nothing(self, *conflict_cols: str) -> "InsertBuilder":
        """
        Turn a unique-constraint violation on conflict_cols into a no-op.

        The statement then reports zero affected rows instead of raising.
        """
        self._conflict_columns = [validate_identifier(c) for c in conflict_cols]
        return self

    def build(self) -> Tuple[str, Dict[str, Any]]:
        """
        Build final INSERT query with parameters.

        Returns:
            Tuple of (sql_query, parameters_dict), one parameter per column.

        Raises:
            ValueError: If no columns or values are specified, or the value
                count does not match the column count.
        """
        if not self._columns:
            raise ValueError("InsertBuilder requires columns to be specified")
        if self._values is None:
            raise ValueError("InsertBuilder requires a row of values")
        if len(self._values) != len(self._columns):
            raise ValueError(f"Got {len(self._values)} values but {len(self._columns)} columns specified")

        params = dict(zip(self._columns, self._values))
        placeholders = ", ".join(f":{column}" for column in self._columns)

        query_parts = [
            f"INSERT INTO {self.table} ({', '.join(self._columns)})",
            f"VALUES ({placeholders})",
        ]

        if self._conflict_columns:
            query_parts.append(f"ON CONFLICT ({', '.join(self._conflict_columns)}) DO NOTHING")

        if self._returning:
            query_parts.append(f"RETURNING {', '.join(self._returning)}")

        return " ".join(query_parts), params
