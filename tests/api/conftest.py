"""Shared fixtures for API tests."""

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from storefront.api.dependencies import get_catalog_service
from storefront.catalog.service import CatalogService
from storefront.main import app


@pytest.fixture
def client(catalog_service: CatalogService) -> Iterator[TestClient]:
    """Create test client backed by the mocked catalog service."""
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    yield TestClient(app)
    app.dependency_overrides.clear()
