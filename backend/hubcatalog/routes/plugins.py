"""
Plugin catalog routes
Listing and registration (plugin + tag + association)
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import get_db
from ..repositories.catalog_repository import CatalogRepository
from ..schemas.catalog_schemas import PluginCreate, PluginCreated
from ..services.plugin_registration_service import PluginRegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plugins", tags=["Plugins"])


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@router.get("")
def list_plugins(db: Session = Depends(get_db)) -> List[Dict[str, Any]]:
    """Every plugin row"""
    return CatalogRepository(db).list_rows("plugins", "Failed to fetch plugins")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PluginCreated)
def create_plugin(
    body: PluginCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> PluginCreated:
    """
    Register a plugin and attach the tag named by `tname`.

    The tag is created on first use and shared afterwards.
    """
    service = PluginRegistrationService(db, atomic=settings.atomic_registration)
    plugin_id = service.register_plugin(body.name, body.author, body.version, body.rating, body.tname)
    return PluginCreated(pluginId=plugin_id)
