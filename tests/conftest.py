"""Shared fixtures for the size_carton test suite."""

import itertools

import pytest

from size_carton.core.containers import ContainerSpec, get_container
from size_carton.core.models import Category, Product


@pytest.fixture
def make_product():
    """Factory for products with sensible defaults and unique ids."""
    ids = itertools.count(101)

    def _make(width=1000.0, height=1000.0, length=1000.0, weight=10.0, cbm=1.0,
              name=None, category=Category.CONDENSER, product_id=None):
        pid = next(ids) if product_id is None else product_id
        return Product(
            id=pid,
            name=name or f"product-{pid}",
            category=category,
            width=width,
            height=height,
            length=length,
            weight=weight,
            cbm=cbm,
        )

    return _make


@pytest.fixture
def cube(make_product):
    """1 m cube, 10 kg, 1.0 m³."""
    return make_product(name="AC-CUBE", product_id=1)


@pytest.fixture
def container_20ft():
    return get_container("20ft")


@pytest.fixture
def container_40ft():
    return get_container("40ft")


@pytest.fixture
def unit_cube_container():
    """1 m³ container, handy for exact-volume scenarios."""
    return ContainerSpec("test-1m", width=1000.0, height=1000.0, length=1000.0, volume=1.0)

