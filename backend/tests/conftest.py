"""
Pytest configuration and fixtures for Hub Catalog tests.

Every test gets its own SQLite file under tmp_path, so tests never share
catalog rows.
"""

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from hubcatalog.config import Settings
from hubcatalog.database import StorageEngine
from hubcatalog.main import create_app
from hubcatalog.repositories.catalog_repository import CatalogRepository

VALID_PLUGIN = {
    "name": "Dark Mode",
    "author": "ada",
    "version": "1.2.0",
    "rating": 4.5,
    "tname": "appearance",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway store and public directory"""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'catalog.db'}",
        public_dir=str(tmp_path / "public"),
        storage_timeout=10.0,
    )


@pytest.fixture
def storage(settings: Settings):
    """Initialized storage engine, disposed after the test"""
    engine = StorageEngine.from_settings(settings)
    assert engine.initialize()
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(storage: StorageEngine) -> Session:
    session = storage.session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(settings: Settings):
    """FastAPI test client with the lifespan (store setup) running"""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def table_rows(storage: StorageEngine, table: str) -> List[Dict[str, Any]]:
    """Read a table through a fresh session so only committed rows show up"""
    with storage.session() as db:
        return CatalogRepository(db).list_rows(table)


@pytest.fixture
def valid_plugin() -> Dict[str, Any]:
    return dict(VALID_PLUGIN)


@pytest.fixture
def read_table(storage: StorageEngine):
    """Callable returning the committed rows of a table in the test store"""
    return lambda table: table_rows(storage, table)


@pytest.fixture
def api_rows(client: TestClient):
    """Callable returning the committed rows of a table behind the test client"""
    return lambda table: table_rows(client.app.state.storage, table)
