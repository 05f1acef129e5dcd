import os

# must be set before perkhub.database builds its engine
os.environ["ENV"] = "test"

import pytest
from sqlmodel import Session

from perkhub.database import recreate_tables, engine, drop_all_tables
from perkhub.models import PerkCategory


@pytest.fixture(scope="function", autouse=True)
def setup_test_db():
    recreate_tables()  # Fresh tables in in-memory SQLite
    yield
    drop_all_tables()


@pytest.fixture(name="session")
def session_fixture():
    with Session(engine) as session:
        yield session


@pytest.fixture
def test_user_data():
    return {
        "name": "Test Runner",
        "email": "Test.Runner@Example.com",
        "password": "P@ssw0rd-123",
    }


@pytest.fixture
def test_perk_data():
    return {
        "title": "Half Price Burritos",
        "description": "Every Tuesday after 5pm.",
        "category": PerkCategory.FOOD.value,
        "discount_percent": 50,
        "merchant": "Casa Verde",
    }


@pytest.fixture
def network_codes():
    return {
        "success": [200, 201, 204],
        "error": [400, 401, 403, 404, 409]
    }
