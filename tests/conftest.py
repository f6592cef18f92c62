from datetime import datetime

import pytest

from loadx import create_app
from loadx.db import get_store
from loadx.models.account import AccountRepository, Role
from loadx.services import identity
from loadx.services.timestamps import LocaleFormatter

STRONG_PASSWORD = "Forte@123"


@pytest.fixture
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test",
            "SQLALCHEMY_DATABASE_URI": "sqlite:///" + str(tmp_path / "loadx-test.db"),
        }
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield get_store()


@pytest.fixture
def formatter():
    return LocaleFormatter(clock=lambda: datetime(2024, 5, 3, 14, 7))


@pytest.fixture
def accounts(store):
    return AccountRepository(store)


@pytest.fixture
def athlete(accounts):
    return identity.register(
        accounts,
        Role.ATHLETE,
        {"name": "Ana", "email": "ana@example.com", "password": STRONG_PASSWORD},
    )


@pytest.fixture
def coach(accounts):
    return identity.register(
        accounts,
        Role.COACH,
        {
            "name": "Carlos",
            "lastName": "Silva",
            "email": "carlos@example.com",
            "cref": "012345-G/SP",
            "password": STRONG_PASSWORD,
            "confirmPassword": STRONG_PASSWORD,
        },
    )
