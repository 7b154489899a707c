from typing import List
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.schemas.geo import Coordinates
from app.schemas.place import Place
from app.services.position_provider import StaticPositionProvider
from app.services.session import PlacePickerSession
from tests.fakes import FakePlacesStore, make_place


@pytest.fixture
def helsinki() -> Coordinates:
    return Coordinates(latitude=60.1699, longitude=24.9384)


@pytest.fixture
def suomenlinna() -> Place:
    return make_place("p1", "Suomenlinna", 60.1454, 24.9881)


@pytest.fixture
def nuuksio() -> Place:
    return make_place("p2", "Nuuksio National Park", 60.3167, 24.5333)


@pytest.fixture
def porvoo() -> Place:
    return make_place("p3", "Old Porvoo", 60.3932, 25.6650)


@pytest.fixture
def tallinn() -> Place:
    return make_place("p4", "Tallinn Old Town", 59.4370, 24.7536)


@pytest.fixture
def candidates(tallinn, porvoo, suomenlinna, nuuksio) -> List[Place]:
    """Available places, deliberately not in distance order."""
    return [tallinn, porvoo, suomenlinna, nuuksio]


@pytest.fixture
def fake_store(candidates) -> FakePlacesStore:
    return FakePlacesStore(candidates=candidates)


@pytest.fixture
def session(fake_store, helsinki) -> PlacePickerSession:
    return PlacePickerSession(store=fake_store, position_provider=StaticPositionProvider(helsinki))


@pytest.fixture(scope="function")
def client(session):
    """Provides a FastAPI test client whose lifespan starts an in-memory session."""
    with patch("app.main.build_session", return_value=session):
        with TestClient(app) as c:
            yield c
