"""
Catalog table access: full-table reads and single-row inserts
"""

from typing import Any, Dict, List

from ..services.prometheus_metrics import get_metrics_instance
from ..utils.mutation_builders import InsertBuilder
from ..utils.query_builder import QueryBuilder
from .base_repository import SQLRepository, serialize_row

READABLE_TABLES = ("plugins", "tags", "plugin_tags", "issues", "faqs")


class CatalogRepository(SQLRepository):
    """Reads and inserts for plugins, tags, issues, FAQs and plugin/tag links"""

    def list_rows(self, table: str, failure_message: str = "Failed to fetch rows") -> List[Dict[str, Any]]:
        """
        Every row of table, all columns, in storage order.

        Raises:
            ValueError: If table is not a catalog table
            PersistenceError: If the read fails
        """
        if table not in READABLE_TABLES:
            raise ValueError(f"Unknown catalog table: {table}")

        query, params = QueryBuilder(table).build()
        result = self._execute(f"list_{table}", query, params, failure_message)
        return [serialize_row(row) for row in result]

    def _insert_returning_id(self, table: str, data: Dict[str, Any], failure_message: str) -> int:
        query, params = InsertBuilder(table).values_dict(data).returning("id").build()
        row_id = self._execute(f"insert_{table}", query, params, failure_message).scalar_one()
        get_metrics_instance().record_insert(table)
        return row_id

    def insert_plugin(self, name: str, author: str, version: str, rating: float) -> int:
        return self._insert_returning_id(
            "plugins",
            {"name": name, "author": author, "version": version, "rating": rating},
            "Failed to add plugin",
        )

    def link_plugin_tag(self, plugin_id: int, tag_id: int) -> None:
        """Append one association row; existing identical rows are not checked"""
        query, params = InsertBuilder("plugin_tags").columns("plugin_id", "tag_id").values(plugin_id, tag_id).build()
        self._execute("link_plugin_tag", query, params, "Failed to link plugin and tag")
        get_metrics_instance().record_insert("plugin_tags")

    def insert_issue(self, title: str, severity: str, status: str) -> int:
        # created_at comes from the column default
        return self._insert_returning_id(
            "issues",
            {"title": title, "severity": severity, "status": status},
            "Failed to add issue",
        )

    def insert_faq(self, question: str, answer: str) -> int:
        return self._insert_returning_id("faqs", {"question": question, "answer": answer}, "Failed to add FAQ")
