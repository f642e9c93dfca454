"""Tag vocabulary listing"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories.catalog_repository import CatalogRepository

router = APIRouter(prefix="/api/tags", tags=["Tags"])


@router.get("")
def list_tags(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    return CatalogRepository(db).list_rows("tags", "Failed to fetch tags")
