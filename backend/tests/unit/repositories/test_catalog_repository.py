"""
Unit tests for CatalogRepository reads and inserts.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from hubcatalog.exceptions import PersistenceError
from hubcatalog.repositories.catalog_repository import CatalogRepository


@pytest.mark.unit
class TestInserts:
    """Test single-row inserts"""

    def test_insert_plugin_returns_increasing_ids(self, db_session) -> None:
        repo = CatalogRepository(db_session)

        first = repo.insert_plugin("A", "ada", "1.0", 4.0)
        second = repo.insert_plugin("B", "bob", "2.0", 3.0)

        assert second > first

    def test_issue_gets_timestamp(self, db_session, read_table) -> None:
        repo = CatalogRepository(db_session)

        issue_id = repo.insert_issue("Crash on launch", "high", "open")
        repo.commit()

        [row] = read_table("issues")
        assert row["id"] == issue_id
        assert row["created_at"] is not None

    def test_link_allows_duplicates(self, db_session, read_table) -> None:
        repo = CatalogRepository(db_session)

        repo.link_plugin_tag(1, 1)
        repo.link_plugin_tag(1, 1)
        repo.commit()

        assert read_table("plugin_tags") == [{"plugin_id": 1, "tag_id": 1}] * 2

    def test_ids_not_reused_after_delete(self, db_session) -> None:
        repo = CatalogRepository(db_session)
        kept = repo.insert_faq("Q1", "A1")
        repo.commit()

        repo.insert_faq("Q2", "A2")
        repo.commit()
        db_session.execute(text("DELETE FROM faqs WHERE question = 'Q2'"))
        db_session.commit()

        assert repo.insert_faq("Q3", "A3") > kept + 1


@pytest.mark.unit
class TestListRows:
    """Test full-table reads"""

    def test_empty_table(self, db_session) -> None:
        assert CatalogRepository(db_session).list_rows("plugins") == []

    def test_rows_include_all_columns(self, db_session) -> None:
        repo = CatalogRepository(db_session)
        plugin_id = repo.insert_plugin("Dark Mode", "ada", "1.2.0", 4.5)

        assert repo.list_rows("plugins") == [
            {"id": plugin_id, "name": "Dark Mode", "author": "ada", "version": "1.2.0", "rating": 4.5}
        ]

    def test_unknown_table_rejected(self, db_session) -> None:
        with pytest.raises(ValueError, match="Unknown catalog table"):
            CatalogRepository(db_session).list_rows("sqlite_master")

    def test_read_failure_uses_caller_message(self) -> None:
        db = MagicMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("no such table"))

        with pytest.raises(PersistenceError, match="Failed to fetch plugins"):
            CatalogRepository(db).list_rows("plugins", "Failed to fetch plugins")

    def test_commit_failure_rolls_back(self) -> None:
        db = MagicMock()
        db.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk full"))

        with pytest.raises(PersistenceError, match="Failed to add FAQ"):
            CatalogRepository(db).commit("Failed to add FAQ")

        db.rollback.assert_called_once()
