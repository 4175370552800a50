"""
Core data models for container loading.

Classes:
    Category        — product kind (condenser / evaporator)
    Product         — immutable catalog entry with dimensions, weight, cbm
    PlaceableUnit   — one physical instance of a product to be loaded
    PlacedItem      — a unit with its position inside the container
    PlacementResult — placed items + unplaced units of one packing run

Axis convention (fixed, no rotation):
    x spans the unit's width, y its height, z its length.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from size_carton.core.containers import ContainerSpec


# ─────────────────────────────────────────────────────────────────────────────
# Product
# ─────────────────────────────────────────────────────────────────────────────

class Category(str, Enum):
    """The two mutually exclusive product kinds."""

    CONDENSER = "CONDENSER"
    EVAPORATOR = "EVAPORATOR"

    @classmethod
    def parse(cls, value) -> "Category":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().upper())


@dataclass(frozen=True)
class Product:
    """
    A product type that can be loaded.

    Attributes:
        id:       Unique identifier (repository id or spreadsheet row order).
        name:     Product name.
        category: CONDENSER or EVAPORATOR.
        width:    X-axis extent (mm).
        height:   Y-axis extent (mm).
        length:   Z-axis extent (mm).
        weight:   Weight (kg).
        cbm:      Volume (m³) as supplied. Not derived from the dimensions.
    """
    id: int
    name: str
    category: Category
    width: float
    height: float
    length: float
    weight: float
    cbm: float

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return (self.width, self.height, self.length)

    def to_dict(self) -> dict:
        return {"id": self.id, "productname": self.name,
                "type": self.category.value, "width": self.width,
                "height": self.height, "length": self.length,
                "weight": self.weight, "cbm": self.cbm}

    @classmethod
    def from_dict(cls, d: dict) -> "Product":
        return cls(id=d["id"], name=d["productname"],
                   category=Category.parse(d["type"]),
                   width=d["width"], height=d["height"], length=d["length"],
                   weight=d["weight"], cbm=d["cbm"])


# ─────────────────────────────────────────────────────────────────────────────
# PlaceableUnit
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlaceableUnit:
    """
    One physical instance of a product requested for loading.

    Attributes:
        product: Source product; all physical attributes come from it.
        index:   0-based copy number within the product's quantity.
    """
    product: Product
    index: int

    @property
    def unit_id(self) -> str:
        return f"{self.product.id}-{self.index + 1}"

    @property
    def width(self) -> float:
        return self.product.width

    @property
    def height(self) -> float:
        return self.product.height

    @property
    def length(self) -> float:
        return self.product.length

    @property
    def weight(self) -> float:
        return self.product.weight

    @property
    def cbm(self) -> float:
        return self.product.cbm

    def to_dict(self) -> dict:
        d = self.product.to_dict()
        d["product_id"] = d.pop("id")
        d["unit_id"] = self.unit_id
        return d


# ─────────────────────────────────────────────────────────────────────────────
# PlacedItem
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlacedItem:
    """
    A unit placed inside the container.

    Attributes:
        unit:     The placed unit.
        x, y, z:  Corner of the bounding box nearest the container origin (mm).
        sequence: 1-based placement order, used for numbering in displays.
        rotation: Always 0; units keep the orientation of their product.
    """
    unit: PlaceableUnit
    x: float
    y: float
    z: float
    sequence: int
    rotation: int = 0

    @property
    def x_max(self) -> float:
        return self.x + self.unit.width

    @property
    def y_max(self) -> float:
        return self.y + self.unit.height

    @property
    def z_max(self) -> float:
        return self.z + self.unit.length

    def overlaps(self, other: "PlacedItem", eps: float = 1e-6) -> bool:
        """True if the two boxes overlap on all three axes (touching is fine)."""
        return (self.x < other.x_max - eps and other.x < self.x_max - eps and
                self.y < other.y_max - eps and other.y < self.y_max - eps and
                self.z < other.z_max - eps and other.z < self.z_max - eps)

    def to_dict(self) -> dict:
        d = self.unit.to_dict()
        d.update({
            "sequence": self.sequence,
            "position": [self.x, self.y, self.z],
            "rotation": self.rotation,
        })
        return d


# ─────────────────────────────────────────────────────────────────────────────
# PlacementResult
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PlacementResult:
    """
    Outcome of one packing run.

    Every input unit appears in exactly one of ``placed`` / ``unplaced``.

    Attributes:
        container: Container the units were packed into.
        usable:    Usable (width, height, length) after the safety margin.
        placed:    Placed items in placement order.
        unplaced:  Units that found no position.
    """
    container: ContainerSpec
    usable: Tuple[float, float, float]
    placed: Tuple[PlacedItem, ...] = ()
    unplaced: Tuple[PlaceableUnit, ...] = ()

    @property
    def total_units(self) -> int:
        return len(self.placed) + len(self.unplaced)

    def find(self, unit_id: str) -> Optional[PlacedItem]:
        for item in self.placed:
            if item.unit.unit_id == unit_id:
                return item
        return None

    def unplaced_by_product(self) -> list[tuple[Product, int]]:
        """Unplaced units counted per product, in first-appearance order."""
        counts: dict[Product, int] = {}
        for unit in self.unplaced:
            counts[unit.product] = counts.get(unit.product, 0) + 1
        return list(counts.items())

    def to_dict(self) -> dict:
        return {
            "container": self.container.to_dict(),
            "usable": list(self.usable),
            "placed": [item.to_dict() for item in self.placed],
            "unplaced": [unit.to_dict() for unit in self.unplaced],
        }
