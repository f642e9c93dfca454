"""
FAQ routes
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories.catalog_repository import CatalogRepository
from ..schemas.catalog_schemas import FaqCreate, FaqCreated
from ..services.intake_service import IntakeService

router = APIRouter(prefix="/api/faqs", tags=["FAQs"])


@router.get("")
def list_faqs(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    return CatalogRepository(db).list_rows("faqs", "Failed to fetch FAQs")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FaqCreated)
def create_faq(body: FaqCreate, db: Session = Depends(get_db)) -> FaqCreated:
    faq_id = IntakeService(db).create_faq(body.question, body.answer)
    return FaqCreated(faqId=faq_id)
