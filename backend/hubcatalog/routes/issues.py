"""
Issue routes
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories.catalog_repository import CatalogRepository
from ..schemas.catalog_schemas import IssueCreate, IssueCreated
from ..services.intake_service import IntakeService

router = APIRouter(prefix="/api/issues", tags=["Issues"])


@router.get("")
def list_issues(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    """Every issue row, including its creation timestamp"""
    return CatalogRepository(db).list_rows("issues", "Failed to fetch issues")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=IssueCreated)
def create_issue(body: IssueCreate, db: Session = Depends(get_db)) -> IssueCreated:
    issue_id = IntakeService(db).create_issue(body.title, body.severity, body.status)
    return IssueCreated(issueId=issue_id)
