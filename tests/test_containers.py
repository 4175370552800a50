"""Tests for the container table and recommendation."""

import pytest

from size_carton.core.containers import (
    CONTAINERS,
    ContainerSpec,
    available_containers,
    get_container,
    recommend_container,
)
from size_carton.core.errors import PackingError, UnknownContainer


class TestContainerTable:
    def test_available(self):
        assert available_containers() == ("20ft", "40ft")

    def test_20ft_interior(self):
        c = get_container("20ft")
        assert (c.width, c.height, c.length) == (2340.0, 2280.0, 5898.0)
        assert c.volume == pytest.approx(31.44)

    def test_40ft_interior(self):
        c = get_container("40ft")
        assert (c.width, c.height, c.length) == (2340.0, 2585.0, 12032.0)
        assert c.volume == pytest.approx(64.15)

    def test_usable_dimensions(self):
        usable = get_container("20ft").usable_dimensions(0.98)
        assert usable == pytest.approx((2293.2, 2234.4, 5780.04))

    def test_unknown_container(self):
        with pytest.raises(UnknownContainer) as exc_info:
            get_container("53ft")
        assert isinstance(exc_info.value, PackingError)
        assert exc_info.value.name == "53ft"
        assert exc_info.value.available == ("20ft", "40ft")

    def test_dict_roundtrip(self):
        spec = CONTAINERS["40ft"]
        assert ContainerSpec.from_dict(spec.to_dict()) == spec


class TestRecommendation:
    @pytest.mark.parametrize("cbm,expected", [
        (0.0, "20ft"),
        (27.0, "20ft"),
        (27.01, "40ft"),
        (60.0, "40ft"),
    ])
    def test_threshold(self, cbm, expected):
        assert recommend_container(cbm) == expected
