"""
Base Repository for catalog SQL operations

Runs builder-produced statements on a SQLAlchemy session with consistent
error translation, logging and slow-query warnings.
"""

import logging
import time
from datetime import date, datetime
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import PersistenceError


def serialize_row(row: Any) -> Dict[str, Any]:
    """Row mapping as a JSON-ready dict (datetimes become ISO strings)"""
    data = dict(row._mapping)
    for key, value in data.items():
        if isinstance(value, (datetime, date)):
            data[key] = value.isoformat()
    return data


class SQLRepository:
    """
    Base repository providing statement execution for catalog tables.

    Features:
    - Storage failures surface as PersistenceError with a caller-chosen message
    - Performance logging for slow statements

    Example:
        class MyRepository(SQLRepository):
            def names(self):
                result = self._execute("names", "SELECT name FROM tags", {})
                return [row.name for row in result]
    """

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(f"{__name__}.{type(self).__name__}")
        self._slow_query_threshold = 1.0  # seconds

    def _execute(
        self,
        operation: str,
        query: str,
        params: Dict[str, Any],
        failure_message: Optional[str] = None,
    ) -> Result:
        """
        Execute a parameterized statement.

        Args:
            operation: Short name used in logs
            query: SQL text with :name placeholders
            params: Bound parameters
            failure_message: Client-facing message if the statement fails

        Raises:
            PersistenceError: If the storage engine rejects or fails the statement
        """
        start_time = time.time()
        try:
            result = self.db.execute(text(query), params)
        except SQLAlchemyError as e:
            self.logger.error(f"Error in {operation}: {e}")
            raise PersistenceError(failure_message or f"{operation} failed") from e

        self._log_query_performance(operation, query, time.time() - start_time)
        return result

    def commit(self, failure_message: str = "Failed to save changes") -> None:
        """
        Commit the session's open transaction.

        Raises:
            PersistenceError: If the commit fails; the session is rolled back.
        """
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.logger.error(f"Commit failed: {e}")
            self.rollback()
            raise PersistenceError(failure_message) from e

    def rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            self.logger.error(f"Rollback failed: {e}")

    def _log_query_performance(self, operation: str, query: str, duration: float) -> None:
        log_msg = f"{operation} completed in {duration:.3f}s"

        if duration > self._slow_query_threshold:
            self.logger.warning(f"SLOW QUERY: {log_msg} - Query: {query}")
        else:
            self.logger.debug(log_msg)
