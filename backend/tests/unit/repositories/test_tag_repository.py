"""
Unit tests for TagRepository get-or-create.

Runs against a real SQLite store; storage failures are injected with a
mocked session.
"""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from hubcatalog.exceptions import PersistenceError, ResolutionInconsistency, ValidationError
from hubcatalog.repositories.tag_repository import TagRepository


@pytest.mark.unit
class TestResolveTag:
    """Test resolve_tag against a real store"""

    def test_new_name_creates_one_row(self, db_session, read_table) -> None:
        repo = TagRepository(db_session)

        tag_id = repo.resolve_tag("productivity")
        db_session.commit()

        assert read_table("tags") == [{"id": tag_id, "name": "productivity"}]

    def test_existing_name_returns_same_id(self, db_session, read_table) -> None:
        repo = TagRepository(db_session)

        first = repo.resolve_tag("productivity")
        second = repo.resolve_tag("productivity")
        db_session.commit()

        assert first == second
        assert len(read_table("tags")) == 1

    def test_names_are_trimmed_before_matching(self, db_session) -> None:
        repo = TagRepository(db_session)

        assert repo.resolve_tag("  themes ") == repo.resolve_tag("themes")

    def test_names_are_case_sensitive(self, db_session) -> None:
        repo = TagRepository(db_session)

        assert repo.resolve_tag("UI") != repo.resolve_tag("ui")

    def test_find_id_unknown_name(self, db_session) -> None:
        assert TagRepository(db_session).find_id("never-used") is None

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_blank_name_rejected(self, db_session, read_table, name) -> None:
        with pytest.raises(ValidationError):
            TagRepository(db_session).resolve_tag(name)

        assert read_table("tags") == []


@pytest.mark.unit
class TestResolveTagFailures:
    """Storage failures and inconsistent lookups surface as catalog errors"""

    def _failing_session(self, *effects) -> MagicMock:
        db = MagicMock()
        db.execute.side_effect = list(effects)
        return db

    def test_insert_failure(self) -> None:
        db = self._failing_session(OperationalError("INSERT", {}, Exception("disk I/O error")))

        with pytest.raises(PersistenceError, match="Failed to add tag"):
            TagRepository(db).resolve_tag("ui")

    def test_lookup_failure(self) -> None:
        db = self._failing_session(MagicMock(rowcount=0), OperationalError("SELECT", {}, Exception("locked")))

        with pytest.raises(PersistenceError, match="Tag lookup failed"):
            TagRepository(db).resolve_tag("ui")

    def test_lookup_miss_after_noop_insert(self) -> None:
        lookup = MagicMock()
        lookup.fetchone.return_value = None
        db = self._failing_session(MagicMock(rowcount=0), lookup)

        with pytest.raises(ResolutionInconsistency, match="could not be resolved"):
            TagRepository(db).resolve_tag("ui")

    def test_lookup_miss_is_never_defaulted(self, db_session) -> None:
        repo = TagRepository(db_session)

        with patch.object(TagRepository, "find_id", return_value=None):
            with pytest.raises(ResolutionInconsistency):
                repo.resolve_tag("ui")
