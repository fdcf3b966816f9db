import os

# Pas de Redis en tests: le lifespan n'initialise pas FastAPILimiter
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from storefront.app import app as fastapi_app

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

# Catalogue simulé (produits/services) pour les tests panier et checkout
CATALOG: Dict[str, Dict[str, Any]] = {
    "p1": {
        "id": "p1", "name": "Bolo de pote", "price": 50.0, "image_url": "https://img.test/p1.png",
        "is_active": True, "seller": {"id": "s-ana", "name": "Ana"},
    },
    "p2": {
        "id": "p2", "name": "Caderno", "price": "12.90", "image_url": "",
        "is_active": True, "seller": {"id": "s-bia", "name": "Bia"},
    },
    "p-off": {
        "id": "p-off", "name": "Retirado", "price": 5, "is_active": False, "seller": None,
    },
    "p-noprice": {
        "id": "p-noprice", "name": "Sem preço", "price": None, "is_active": True, "seller": None,
    },
}
SERVICES: Dict[str, Dict[str, Any]] = {
    "s1": {
        "id": "s1", "name": "Formatação de PC", "price_from": 30.0, "price_type": "from",
        "is_active": True, "seller": {"id": "s-caio", "name": "Caio"},
    },
}

@pytest.fixture
def catalog(monkeypatch):
    monkeypatch.setattr("storefront.catalog.repository.get_product", lambda pid: CATALOG.get(pid))
    monkeypatch.setattr("storefront.catalog.repository.get_service", lambda sid: SERVICES.get(sid))
    # Reconstruction du panier de session (une requête par type)
    monkeypatch.setattr("storefront.catalog.repository.get_products_by_ids", lambda ids: [CATALOG[i] for i in ids if i in CATALOG])
    monkeypatch.setattr("storefront.catalog.repository.get_services_by_ids", lambda ids: [SERVICES[i] for i in ids if i in SERVICES])
    return {"products": CATALOG, "services": SERVICES}

# Aucun test n'atteint une vraie base Supabase
@pytest.fixture(scope="function", autouse=True)
def mock_db_dependency(monkeypatch):
    monkeypatch.setattr("storefront.infra.supabase_client.get_supabase", lambda: MagicMock())
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: MagicMock())
    monkeypatch.setattr("storefront.admin.repository.get_service_supabase", lambda: MagicMock())
