"""
Plugin Registration Workflow

Registers a plugin and attaches one tag from the shared vocabulary:

    1. insert the plugin row and take its id
    2. resolve the tag id (get-or-create, see TagRepository.resolve_tag)
    3. insert the (plugin id, tag id) association row

In atomic mode (the default) the three writes share one transaction and a
failure at any step rolls all of them back, so no plugin is left without
its tag link. In sequential mode every step commits on its own and a
failure after step 1 leaves the plugin row in place.

Validation happens before the first write; an invalid request never
touches storage. No step is retried.
"""

import logging
from typing import Any

from sqlalchemy.orm import Session

from ..exceptions import CatalogError, PersistenceError, ResolutionInconsistency, ValidationError
from ..repositories.catalog_repository import CatalogRepository
from ..repositories.tag_repository import TagRepository
from ..schemas.catalog_schemas import PluginCreate, parse_payload
from .prometheus_metrics import get_metrics_instance

logger = logging.getLogger(__name__)

PLUGIN_FIELDS_REQUIRED = "All plugin fields are required."


class PluginRegistrationService:
    """
    Orchestrates the plugin/tag/association writes for one registration.

    Example:
        service = PluginRegistrationService(db, atomic=True)
        plugin_id = service.register_plugin("Dark Mode", "ada", "1.2.0", 4.5, "appearance")
    """

    def __init__(self, db: Session, atomic: bool = True):
        self.db = db
        self.atomic = atomic
        self.catalog = CatalogRepository(db)
        self.tags = TagRepository(db)
        self.metrics = get_metrics_instance()

    def register_plugin(self, name: Any, author: Any, version: Any, rating: Any, tag_name: Any) -> int:
        """
        Create a plugin and associate it with tag_name.

        Returns:
            The new plugin's id

        Raises:
            ValidationError: If a field is missing, blank or rating is not a number
            PersistenceError: If any of the three writes fails
            ResolutionInconsistency: If the tag cannot be found after its insert
        """
        try:
            payload = parse_payload(
                PluginCreate,
                {"name": name, "author": author, "version": version, "rating": rating, "tname": tag_name},
                PLUGIN_FIELDS_REQUIRED,
            )
        except ValidationError as e:
            self.metrics.record_registration("validation_error")
            logger.info(f"Rejected plugin registration: invalid field '{e.field}'")
            raise

        try:
            plugin_id = self.catalog.insert_plugin(payload.name, payload.author, payload.version, payload.rating)
            self._checkpoint("Failed to add plugin")

            tag_id = self.tags.resolve_tag(payload.tname)
            self._checkpoint("Failed to add tag")

            self.catalog.link_plugin_tag(plugin_id, tag_id)
            self.catalog.commit("Failed to link plugin and tag")
        except CatalogError as e:
            self.catalog.rollback()
            self.metrics.record_registration(self._outcome(e))
            logger.error(f"Plugin registration for '{payload.name}' failed: {e.message}")
            raise

        self.metrics.record_registration("success")
        logger.info(f"Registered plugin {plugin_id} '{payload.name}' with tag {tag_id} '{payload.tname}'")
        return plugin_id

    def _checkpoint(self, failure_message: str) -> None:
        """Commit the step just written when running in sequential mode"""
        if not self.atomic:
            self.catalog.commit(failure_message)

    @staticmethod
    def _outcome(error: CatalogError) -> str:
        if isinstance(error, ResolutionInconsistency):
            return "resolution_inconsistency"
        if isinstance(error, PersistenceError):
            return "persistence_error"
        return "validation_error"
