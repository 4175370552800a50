"""Assertion helpers for placement invariants."""

from size_carton.core.models import PlaceableUnit


def units_of(product, quantity):
    return [PlaceableUnit(product, i) for i in range(quantity)]


def positions(result):
    return [(item.x, item.y, item.z) for item in result.placed]


def assert_within(usable, placed):
    """Every box lies inside the usable space."""
    for item in placed:
        assert item.x >= 0 and item.y >= 0 and item.z >= 0
        assert item.x_max <= usable[0] + 1e-6
        assert item.y_max <= usable[1] + 1e-6
        assert item.z_max <= usable[2] + 1e-6


def assert_no_overlaps(placed):
    """No two boxes overlap on all three axes."""
    items = list(placed)
    for i, a in enumerate(items):
        for b in items[i + 1:]:
            assert not a.overlaps(b), f"{a.unit.unit_id} overlaps {b.unit.unit_id}"


def assert_partition(units, result):
    """Every input unit is either placed or unplaced, exactly once."""
    placed_ids = [item.unit.unit_id for item in result.placed]
    unplaced_ids = [unit.unit_id for unit in result.unplaced]
    assert len(placed_ids) + len(unplaced_ids) == len(units)
    assert not set(placed_ids) & set(unplaced_ids)
    assert set(placed_ids) | set(unplaced_ids) == {u.unit_id for u in units}
