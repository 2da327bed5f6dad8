import pytest

from precofacil.geo.distance import calculate_distance
from precofacil.geo.models import Coordinates

SAO_PAULO = Coordinates(lat=-23.5505, lng=-46.6333)
RIO = Coordinates(lat=-22.9068, lng=-43.1729)
CAMPINAS = Coordinates(lat=-22.9056, lng=-47.0608)


def test_distance_to_self_is_zero():
    assert calculate_distance(SAO_PAULO, SAO_PAULO) == 0.0


@pytest.mark.parametrize("a, b", [(SAO_PAULO, RIO), (RIO, CAMPINAS), (CAMPINAS, SAO_PAULO)])
def test_distance_is_symmetric(a, b):
    assert calculate_distance(a, b) == calculate_distance(b, a)


def test_distance_is_rounded_to_one_decimal():
    d = calculate_distance(SAO_PAULO, CAMPINAS)
    assert d == round(d, 1)


def test_sao_paulo_to_rio_is_roughly_360_km():
    assert 350 < calculate_distance(SAO_PAULO, RIO) < 370


def test_short_distance():
    a = Coordinates(lat=-23.5505, lng=-46.6333)
    b = Coordinates(lat=-23.5595, lng=-46.6333)  # ~1 km south
    assert calculate_distance(a, b) == 1.0
