"""pytest configuration and shared fixtures."""

from collections import namedtuple
from dataclasses import dataclass
from datetime import datetime

import pytest

from liquid_filters import FilterConfig, RestrictedView, build_default_filters

FIXED_NOW = datetime(2024, 3, 15, 9, 30, 0)

Point = namedtuple("Point", ["x", "y"])


@dataclass
class Product:
    title: str
    price: float
    secret: str = "hidden"


@pytest.fixture
def fixed_config():
    """Config with a frozen clock and the en-US culture."""
    return FilterConfig(clock=lambda: FIXED_NOW)


@pytest.fixture
def registry(fixed_config):
    """Default filter registry built from ``fixed_config``."""
    return build_default_filters(fixed_config)


@pytest.fixture
def products():
    """Structural objects for member-resolution tests."""
    return [
        Product(title="Widget", price=9.5),
        Product(title="Anvil", price=120.0),
        Product(title="Gadget", price=19.99),
    ]


@pytest.fixture
def restricted_product():
    """A view exposing only the product title."""
    return RestrictedView(Product(title="Widget", price=9.5), {"title"})


@pytest.fixture
def sample_data():
    """Assigns for expression rendering."""
    return {
        "user": {"name": "Alice", "age": 30},
        "items": [
            {"title": "b", "price": 20},
            {"title": "a", "price": 10},
            {"title": "c", "price": 15},
        ],
        "greeting": "hello world",
        "empty": "",
    }
