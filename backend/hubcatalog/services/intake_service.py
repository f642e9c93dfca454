"""Issue and FAQ intake: validated single-row inserts."""

import logging
from typing import Any

from sqlalchemy.orm import Session

from ..exceptions import PersistenceError
from ..repositories.catalog_repository import CatalogRepository
from ..schemas.catalog_schemas import FaqCreate, IssueCreate, parse_payload

logger = logging.getLogger(__name__)

ISSUE_FIELDS_REQUIRED = "All issue fields are required."
FAQ_FIELDS_REQUIRED = "FAQ question and answer required."


class IntakeService:
    def __init__(self, db: Session):
        self.catalog = CatalogRepository(db)

    def create_issue(self, title: Any, severity: Any, status: Any) -> int:
        """Store an issue; created_at is assigned by the store"""
        payload = parse_payload(
            IssueCreate, {"title": title, "severity": severity, "status": status}, ISSUE_FIELDS_REQUIRED
        )
        try:
            issue_id = self.catalog.insert_issue(payload.title, payload.severity, payload.status)
            self.catalog.commit("Failed to add issue")
        except PersistenceError:
            self.catalog.rollback()
            raise

        logger.info(f"Created issue {issue_id} ({payload.severity}/{payload.status})")
        return issue_id

    def create_faq(self, question: Any, answer: Any) -> int:
        payload = parse_payload(FaqCreate, {"question": question, "answer": answer}, FAQ_FIELDS_REQUIRED)
        try:
            faq_id = self.catalog.insert_faq(payload.question, payload.answer)
            self.catalog.commit("Failed to add FAQ")
        except PersistenceError:
            self.catalog.rollback()
            raise

        logger.info(f"Created FAQ {faq_id}")
        return faq_id
