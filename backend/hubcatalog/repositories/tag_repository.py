"""
Tag vocabulary: get-or-create over the tags table

Tag names are matched exactly (case-sensitive) after trimming surrounding
whitespace. Deduplication relies on the UNIQUE constraint on tags.name:
the insert is a no-op when the name exists, so concurrent first uses of a
name from separate requests still produce a single row.
"""

from typing import Optional

from ..exceptions import ResolutionInconsistency, ValidationError
from ..services.prometheus_metrics import get_metrics_instance
from ..utils.mutation_builders import InsertBuilder
from ..utils.query_builder import QueryBuilder
from .base_repository import SQLRepository


class TagRepository(SQLRepository):
    """Get-or-create access to the shared tag vocabulary"""

    def resolve_tag(self, name: str) -> int:
        """
        Identity of the tag named name, creating the tag on first use.

        Args:
            name: Tag text

        Returns:
            Tag id

        Raises:
            ValidationError: If name is blank
            PersistenceError: If the insert or the lookup fails
            ResolutionInconsistency: If the lookup finds no row after the insert
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Tag name is required.", field="tname")

        created = self._insert_if_absent(name)

        tag_id = self.find_id(name)
        if tag_id is None:
            self.logger.error(f"Tag '{name}' not found after insert (inserted={created})")
            raise ResolutionInconsistency(f"Tag '{name}' could not be resolved")

        if created:
            get_metrics_instance().record_tag_created()
            self.logger.info(f"Created tag '{name}' with id {tag_id}")
        return tag_id

    def _insert_if_absent(self, name: str) -> bool:
        """True when a new row was written, False when the name already existed"""
        query, params = InsertBuilder("tags").columns("name").values(name).on_conflict_do_nothing("name").build()
        result = self._execute("insert_tag", query, params, "Failed to add tag")
        return result.rowcount == 1

    def find_id(self, name: str) -> Optional[int]:
        query, params = QueryBuilder("tags").select("id").where("name = :name", name, "name").build()
        row = self._execute("find_tag", query, params, "Tag lookup failed").fetchone()
        return row.id if row is not None else None
