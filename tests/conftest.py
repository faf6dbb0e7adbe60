import copy
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from transactions_api.common.Schemas.transaction_schemas import TransactionIn
from transactions_api.db.CRUD import upsert_transaction
from transactions_api.db.database import Store
from transactions_api.main import create_app

# Формат как у product_transaction.json. Месяцы считаются по UTC.
SEED_TRANSACTIONS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Fjallraven Backpack",
        "price": 329.85,
        "description": "Your perfect pack for everyday use",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/81fPKd-2AYL._AC_SL1500_.jpg",
        "sold": False,
        "dateOfSale": "2021-11-27T20:29:54+05:30",
    },
    {
        "id": 2,
        "title": "Mens Casual Slim Fit T-Shirts",
        "price": 22.3,
        "description": "Slim-fitting style",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/71-3HjGNDUL._AC_SY879._SX._UX._SY._UY_.jpg",
        "sold": False,
        "dateOfSale": "2021-10-27T20:29:54+05:30",
    },
    {
        "id": 3,
        "title": "Mens Cotton Jacket",
        "price": 615.89,
        "description": "great outerwear jackets",
        "category": "men's clothing",
        "image": "https://fakestoreapi.com/img/71li-ujtlUL._AC_UX679_.jpg",
        "sold": True,
        "dateOfSale": "2022-10-27T20:29:54+05:30",
    },
    {
        "id": 4,
        "title": "Solid Gold Petite Micropave",
        "price": 168,
        "description": "Satisfaction Guaranteed",
        "category": "jewelery",
        "image": "https://fakestoreapi.com/img/61sbMiUnoGL._AC_UL640_QL65_ML3_.jpg",
        "sold": True,
        "dateOfSale": "2022-03-27T20:29:54+05:30",
    },
    {
        "id": 5,
        "title": "Samsung Ultrawide Monitor",
        "price": 999.99,
        "description": "Super ultrawide screen",
        "category": "electronics",
        "image": "https://fakestoreapi.com/img/81Zt42ioCgL._AC_SX679_.jpg",
        "sold": False,
        "dateOfSale": "2022-03-16T20:29:54+05:30",
    },
    {
        "id": 6,
        "title": "WD Gaming Drive",
        "price": 114,
        "description": "Expand your console storage",
        "category": "electronics",
        "image": "https://fakestoreapi.com/img/61mtL65D4cL._AC_SX679_.jpg",
        "sold": True,
        "dateOfSale": "2022-01-15T10:00:00+05:30",
    },
    {
        "id": 7,
        "title": "Pro Camera Rig",
        "price": 12500,
        "description": "Studio grade kit",
        "category": "electronics",
        "image": "https://fakestoreapi.com/img/camera.jpg",
        "sold": True,
        "dateOfSale": "2021-03-05T10:00:00+05:30",
    },
]


@pytest.fixture
def seed_payload() -> List[Dict[str, Any]]:
    return copy.deepcopy(SEED_TRANSACTIONS)


@pytest.fixture
def fake_seed(monkeypatch, seed_payload):
    """Подменяет requests.get в CRUD, возвращает мок для проверок вызовов."""
    response = MagicMock()
    response.json.return_value = seed_payload
    response.raise_for_status.return_value = None
    get = MagicMock(return_value=response)
    monkeypatch.setattr("transactions_api.db.CRUD.requests.get", get)
    return get


@pytest.fixture
def store(tmp_path):
    store = Store(f"sqlite:///{tmp_path / 'test.db'}")
    store.ensure_schema()
    yield store
    store.dispose()


@pytest.fixture
def db(store):
    yield from store.session()


@pytest.fixture
def add_rows():
    def _add(db, *rows: Dict[str, Any]) -> None:
        for row in rows:
            upsert_transaction(db, TransactionIn.model_validate(row))

    return _add


@pytest.fixture
def seeded_db(db, add_rows, seed_payload):
    add_rows(db, *seed_payload)
    return db


@pytest.fixture
def client(tmp_path):
    app = create_app(f"sqlite:///{tmp_path / 'api.db'}")
    with TestClient(app) as c:
        yield c


@pytest.fixture
def client_db(client):
    yield from client.app.state.store.session()
