import pytest
import requests

from company_finder.core.errors import NotFoundError, TransportError
from company_finder.models import GeoPoint
from company_finder.vendors import nominatim
from conftest import DummyResponse, DummySession


@pytest.fixture
def session(monkeypatch):
    session = DummySession()
    monkeypatch.setattr(nominatim, "_SESSION", session)
    return session


def test_resolve_uses_first_result(session):
    session.response = DummyResponse(
        payload=[
            {"lat": "23.0225", "lon": "72.5714", "display_name": "Ahmedabad"},
            {"lat": "10.0", "lon": "10.0", "display_name": "Elsewhere"},
        ]
    )

    point = nominatim.resolve("  Ahmedabad ")

    assert point == GeoPoint(23.0225, 72.5714)
    call = session.calls[0]
    assert call["params"]["q"] == "Ahmedabad"
    assert call["params"]["format"] == "json"
    assert call["timeout"] == 10
    assert call["headers"]["User-Agent"] == "ITCompanyFinder/1.0"


def test_resolve_zero_matches_raises_not_found(session):
    session.response = DummyResponse(payload=[])
    with pytest.raises(NotFoundError):
        nominatim.resolve("Atlantis")


def test_resolve_http_error_raises_transport(session):
    session.response = DummyResponse(status_code=503, payload=[])
    with pytest.raises(TransportError):
        nominatim.resolve("Ahmedabad")


def test_resolve_timeout_raises_transport(session):
    session.error = requests.Timeout("timed out")
    with pytest.raises(TransportError):
        nominatim.resolve("Ahmedabad")


def test_resolve_malformed_coordinates(session):
    session.response = DummyResponse(payload=[{"lat": "north", "lon": "72.5"}])
    with pytest.raises(TransportError):
        nominatim.resolve("Ahmedabad")


def test_resolve_rejects_blank_text(session):
    with pytest.raises(ValueError):
        nominatim.resolve("   ")
    assert session.calls == []
