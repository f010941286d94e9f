import mongomock
import pytest
from fastapi.testclient import TestClient

import config
import database
import main


@pytest.fixture
def db(monkeypatch):
    mock_db = mongomock.MongoClient()["storefront_test"]
    monkeypatch.setattr(database, "db", mock_db)
    return mock_db


@pytest.fixture
def client(db, tmp_path, monkeypatch):
    monkeypatch.setattr(config, "UPLOAD_DIR", str(tmp_path))
    monkeypatch.setattr(config, "RESEND_API_KEY", "")
    return TestClient(main.app)


@pytest.fixture
def product_payload():
    return {
        "name": "Elegant Floral Three-Piece",
        "description": "Floral three-piece",
        "price": 3200,
        "image": "/images/p1.png",
        "category": "three-piece",
        "stock": 3,
    }


@pytest.fixture
def make_product(client, product_payload):
    def _make(**overrides):
        payload = {**product_payload, **overrides}
        resp = client.post("/api/products", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]
    return _make
