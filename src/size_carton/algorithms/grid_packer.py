"""
Grid first-fit container packer.

Units are grouped by product (groups in first-appearance order, units in
input order).  Products are compared by value, so two records that share
an id but differ in size form separate groups.  Each group scans its own
candidate grid whose pitch is the product's own dimensions:

    x = i * width,  y = j * height,  z = k * length
    i < floor(usable_w / width), j < floor(usable_h / height), k < floor(usable_l / length)

x varies fastest, then y, then z.  A unit takes the first candidate whose
box does not overlap any box already placed (by this or an earlier
group).  The scan cursor of a group only moves forward, so when the grid
is exhausted the group's remaining units are unplaced and packing moves on
to the next group.  No rotation, no randomness.

A smaller usable space keeps every grid in the same order and only drops
candidates from the far end of each axis, so a single-product load never
places more units.  With several products this does not carry
over: units of an earlier group that no longer fit leave room for a later
group, and the total can go up.
"""

import math
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from size_carton.core.containers import ContainerSpec
from size_carton.core.errors import InvalidUnit
from size_carton.core.models import PlaceableUnit, PlacedItem, PlacementResult
from size_carton.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SHRINK_FACTOR = 0.98

# Boxes sharing a face are adjacent, not overlapping.
EPS = 1e-6


class _Occupancy:
    """Min/max corners of every placed box, for vectorised collision tests."""

    __slots__ = ("mins", "maxs", "count")

    def __init__(self, capacity: int) -> None:
        self.mins = np.zeros((capacity, 3), dtype=np.float64)
        self.maxs = np.zeros((capacity, 3), dtype=np.float64)
        self.count = 0

    def collides(self, lo: np.ndarray, hi: np.ndarray) -> bool:
        """True if [lo, hi) overlaps any placed box on all three axes."""
        if self.count == 0:
            return False
        mins = self.mins[:self.count]
        maxs = self.maxs[:self.count]
        overlap = (lo < maxs - EPS) & (hi > mins + EPS)
        return bool(np.any(np.all(overlap, axis=1)))

    def add(self, lo: np.ndarray, hi: np.ndarray) -> None:
        self.mins[self.count] = lo
        self.maxs[self.count] = hi
        self.count += 1


def _check_number(unit: PlaceableUnit, name: str, value, positive: bool) -> None:
    if value is None:
        raise InvalidUnit(unit, f"missing {name}")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidUnit(unit, f"{name} is not a number: {value!r}")
    if not math.isfinite(value):
        raise InvalidUnit(unit, f"{name} is not finite: {value!r}")
    if positive and value <= 0:
        raise InvalidUnit(unit, f"{name} must be > 0, got {value}")
    if not positive and value < 0:
        raise InvalidUnit(unit, f"{name} must be >= 0, got {value}")


def validate_unit(unit: PlaceableUnit) -> None:
    """
    Raise InvalidUnit unless the unit can be packed.

    Dimensions must be finite and > 0; weight and cbm present, finite, >= 0.
    """
    try:
        product_id = unit.product.id
        values = {
            "width": unit.width,
            "height": unit.height,
            "length": unit.length,
            "weight": unit.weight,
            "cbm": unit.cbm,
        }
    except AttributeError as exc:
        raise InvalidUnit(unit, f"missing attribute ({exc})") from exc
    if product_id is None:
        raise InvalidUnit(unit, "missing product id")
    for name in ("width", "height", "length"):
        _check_number(unit, name, values[name], positive=True)
    for name in ("weight", "cbm"):
        _check_number(unit, name, values[name], positive=False)


def group_by_product(units: Sequence[PlaceableUnit]) -> List[List[PlaceableUnit]]:
    """Units grouped by product; groups in first-appearance order."""
    groups: dict = {}
    for unit in units:
        groups.setdefault(unit.product, []).append(unit)
    return list(groups.values())


def grid_positions(
    dims: Tuple[float, float, float],
    usable: Tuple[float, float, float],
) -> Iterator[Tuple[float, float, float]]:
    """Candidate corners for a box of ``dims``, x fastest, then y, then z."""
    w, h, l = dims
    nx = math.floor(usable[0] / w)
    ny = math.floor(usable[1] / h)
    nz = math.floor(usable[2] / l)
    for k in range(nz):
        for j in range(ny):
            for i in range(nx):
                yield (float(i * w), float(j * h), float(k * l))


class GridPacker:
    """
    Deterministic grid first-fit packer.

    Args:
        shrink_factor: Uniform scale applied to the container interior to
                       leave clearance from the walls (0 < f <= 1).
    """

    def __init__(self, shrink_factor: float = DEFAULT_SHRINK_FACTOR):
        if not 0.0 < shrink_factor <= 1.0:
            raise ValueError(f"shrink_factor must be in (0, 1], got {shrink_factor}")
        self.shrink_factor = shrink_factor

    def pack(self, units: Sequence[PlaceableUnit], container: ContainerSpec) -> PlacementResult:
        """
        Place as many units as possible inside the container.

        Args:
            units:     Units to load, typically from ProductCatalog.expand().
            container: Target container class.

        Returns:
            PlacementResult with every unit either placed or unplaced.

        Raises:
            InvalidUnit: A unit has a non-positive dimension or a missing
                         attribute.  Raised before anything is placed.
        """
        usable = container.usable_dimensions(self.shrink_factor)
        if not units:
            return PlacementResult(container=container, usable=usable)

        for unit in units:
            validate_unit(unit)

        limit = np.array(usable, dtype=np.float64) + EPS
        occupancy = _Occupancy(len(units))
        placed: List[PlacedItem] = []
        unplaced: List[PlaceableUnit] = []

        for group in group_by_product(units):
            product = group[0].product
            dims = np.array(product.dimensions, dtype=np.float64)
            cursor = grid_positions(product.dimensions, usable)
            group_placed = 0

            for unit in group:
                for position in cursor:
                    lo = np.array(position, dtype=np.float64)
                    hi = lo + dims
                    if np.any(hi > limit) or occupancy.collides(lo, hi):
                        continue
                    occupancy.add(lo, hi)
                    placed.append(PlacedItem(unit, *position, sequence=len(placed) + 1))
                    group_placed += 1
                    break
                else:
                    unplaced.append(unit)

            logger.debug(
                "Product %s (%s): placed %d of %d",
                product.id, product.name, group_placed, len(group),
            )

        logger.info(
            "Packed %d units into %s: %d placed, %d unplaced",
            len(units), container.name, len(placed), len(unplaced),
        )
        return PlacementResult(
            container=container,
            usable=usable,
            placed=tuple(placed),
            unplaced=tuple(unplaced),
        )
