"""
size_carton: container loading planner for product cartons.

Public API:
    from size_carton import Product, Category, ProductCatalog
    from size_carton import get_container, GridPacker, compute_statistics

    catalog = ProductCatalog(products)
    catalog.set_selection(product_id, True)
    result = GridPacker().pack(catalog.expand(), get_container("20ft"))
    stats = compute_statistics(result)     # None when nothing was placed
"""

from size_carton.algorithms.grid_packer import GridPacker
from size_carton.core.catalog import CatalogEntry, ProductCatalog
from size_carton.core.containers import (
    CONTAINERS,
    ContainerSpec,
    available_containers,
    get_container,
    recommend_container,
)
from size_carton.core.errors import (
    ConfigError,
    InvalidUnit,
    PackingError,
    RepositoryError,
    SizeCartonError,
    SpreadsheetError,
    UnknownContainer,
)
from size_carton.core.models import (
    Category,
    PlaceableUnit,
    PlacedItem,
    PlacementResult,
    Product,
)
from size_carton.monitoring.metrics import Efficiency, LoadStatistics, compute_statistics

__version__ = "0.1.0"

__all__ = [
    "CONTAINERS",
    "CatalogEntry",
    "Category",
    "ConfigError",
    "ContainerSpec",
    "Efficiency",
    "GridPacker",
    "InvalidUnit",
    "LoadStatistics",
    "PackingError",
    "PlaceableUnit",
    "PlacedItem",
    "PlacementResult",
    "Product",
    "ProductCatalog",
    "RepositoryError",
    "SizeCartonError",
    "SpreadsheetError",
    "UnknownContainer",
    "available_containers",
    "compute_statistics",
    "get_container",
    "recommend_container",
]
