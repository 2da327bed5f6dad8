import random

import pytest

from precofacil.geo.models import Coordinates
from precofacil.places import osm
from precofacil.places.models import Category

ORIGIN = Coordinates(lat=-23.5505, lng=-46.6333)


class DummyResponse:
    def __init__(self, payload=None, status_code=200):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError("http error")

    def json(self):
        return self._payload


class DummySession:
    def __init__(self):
        self.calls = []
        self.response = None

    def post(self, url, data=None, timeout=None):
        self.calls.append((url, data, timeout))
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


@pytest.fixture
def session(monkeypatch):
    s = DummySession()
    monkeypatch.setattr(osm, "_SESSION", s)
    return s


def _element(idx, lat_offset, tags):
    return {"id": idx, "lat": ORIGIN.lat + lat_offset, "lon": ORIGIN.lng, "tags": tags}


# ── Category mapping ─────────────────────────────────────────────────────


@pytest.mark.parametrize("tags, expected", [
    ({"shop": "supermarket"}, Category.mercado),
    ({"shop": "convenience"}, Category.mercado),
    ({"amenity": "pharmacy"}, Category.farmacia),
    ({"shop": "chemist"}, Category.farmacia),
    ({"amenity": "fast_food"}, Category.lanchonete),
    ({"amenity": "cafe"}, Category.cafeteria),
    ({"shop": "bakery"}, Category.padaria),
    ({"shop": "hardware"}, Category.outros),
    ({}, Category.outros),
])
def test_category_from_tags(tags, expected):
    assert osm.category_from_tags(tags) == expected


def test_restaurant_maps_to_first_listing_category():
    # "restaurant" is listed under Lanchonete before Restaurante
    assert osm.category_from_tags({"amenity": "restaurant"}) == Category.lanchonete


def test_category_mapping_is_deterministic_for_all_known_tags():
    for tag in osm.all_tags():
        first = osm.category_from_tags({"shop": tag})
        assert first == osm.category_from_tags({"shop": tag})
        assert first != Category.outros


def test_all_tags_are_unique():
    tags = osm.all_tags()
    assert len(tags) == len(set(tags))
    assert "restaurant" in tags


def test_format_address():
    tags = {"addr:street": "Rua Augusta", "addr:housenumber": "100", "addr:city": "São Paulo"}
    assert osm.format_address(tags) == "Rua Augusta, 100, São Paulo"
    assert osm.format_address({}) == osm.NO_ADDRESS


def test_build_overpass_query():
    query = osm.build_overpass_query(ORIGIN, 5)
    assert query.startswith("[out:json]")
    assert "around:5000,-23.5505,-46.6333" in query
    assert 'node["shop"="supermarket"]' in query
    assert 'node["amenity"="pharmacy"]' in query
    assert query.count('node["shop"=') == len(osm.all_tags())


# ── Overpass search ─────────────────────────────────────────────────────


def test_search_nearby_places_sorts_and_caps(session):
    elements = [
        _element(i, 0.001 * (30 - i), {"name": f"Loja {i}", "shop": "supermarket"})
        for i in range(30)
    ]
    session.response = DummyResponse({"elements": elements})

    places = osm.search_nearby_places(ORIGIN, 5)

    assert len(places) == 20
    distances = [p.distance for p in places]
    assert distances == sorted(distances)
    assert places[0].name == "Loja 29"
    assert all(p.category == Category.mercado for p in places)


def test_search_nearby_places_skips_unnamed_and_duplicates(session):
    elements = [
        _element(1, 0.01, {"name": "Padaria Central", "shop": "bakery"}),
        _element(1, 0.01, {"name": "Padaria Central", "shop": "bakery"}),
        _element(2, 0.02, {"shop": "bakery"}),
        _element(3, 0.03, {"name": "Ferragens", "shop": "hardware"}),
    ]
    session.response = DummyResponse({"elements": elements})

    places = osm.search_nearby_places(ORIGIN, 5)

    assert [p.id for p in places] == ["1", "3"]
    assert places[0].category == Category.padaria
    assert places[1].category == Category.outros
    assert places[0].address == osm.NO_ADDRESS


def test_search_nearby_places_posts_query(session):
    session.response = DummyResponse({"elements": []})
    assert osm.search_nearby_places(ORIGIN, 2) == []
    url, data, timeout = session.calls[0]
    assert "overpass" in url
    assert b"around:2000" in data
    assert timeout == 25.0


@pytest.mark.parametrize("failure", [
    ConnectionError("down"),
    DummyResponse(status_code=504),
    DummyResponse({"remark": "runtime error"}),
])
def test_search_nearby_places_falls_back_to_mock(session, failure):
    session.response = failure

    places = osm.search_nearby_places(ORIGIN, 5, rng=random.Random(1))

    assert len(places) == 8
    assert all(p.id.startswith("mock-") for p in places)
    distances = [p.distance for p in places]
    assert distances == sorted(distances)


def test_mock_places_jitter_coordinates():
    places = osm.get_mock_places(ORIGIN, rng=random.Random(42))
    for place in places:
        assert abs(place.coordinates.lat - ORIGIN.lat) <= 0.01
        assert abs(place.coordinates.lng - ORIGIN.lng) <= 0.01


def test_mock_places_reproducible_with_seed():
    first = osm.get_mock_places(ORIGIN, rng=random.Random(7))
    second = osm.get_mock_places(ORIGIN, rng=random.Random(7))
    assert first == second
