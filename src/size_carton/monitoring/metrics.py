"""Load statistics and export for container packing results.

Derives volume, weight and utilization figures from a PlacementResult and
provides utilities for exporting results to JSON and CSV formats.
"""

from __future__ import annotations

import csv
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from size_carton.core.containers import ContainerSpec
from size_carton.core.models import PlacementResult

OPTIMAL_THRESHOLD_PCT = 90.0
GOOD_THRESHOLD_PCT = 70.0

CSV_FIELDS = [
    "sequence", "unit_id", "product_id", "productname", "type",
    "width", "height", "length", "weight", "cbm", "x", "y", "z",
]


class Efficiency(str, Enum):
    """Three-tier loading efficiency label."""

    OPTIMAL = "optimal"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs improvement"


def rate_efficiency(
    utilization_pct: float,
    optimal_threshold: float = OPTIMAL_THRESHOLD_PCT,
    good_threshold: float = GOOD_THRESHOLD_PCT,
) -> Efficiency:
    """Map a utilization percentage onto an efficiency label.

    Example:
        >>> rate_efficiency(95.0)
        <Efficiency.OPTIMAL: 'optimal'>
        >>> rate_efficiency(70.0).value
        'needs improvement'
    """
    if utilization_pct > optimal_threshold:
        return Efficiency.OPTIMAL
    if utilization_pct > good_threshold:
        return Efficiency.GOOD
    return Efficiency.NEEDS_IMPROVEMENT


@dataclass(frozen=True)
class LoadStatistics:
    """Aggregate figures for the placed items of one packing run.

    Attributes:
        total_items: Number of placed items.
        total_volume: Sum of the placed products' cbm (m³).
        total_weight: Sum of the placed products' weight (kg).
        utilization_pct: total_volume / container interior volume * 100.
        efficiency: Label derived from utilization_pct.
    """

    total_items: int
    total_volume: float
    total_weight: float
    utilization_pct: float
    efficiency: Efficiency

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with the efficiency label as a string.

        Example:
            >>> s = LoadStatistics(3, 3.0, 30.0, 9.54, Efficiency.NEEDS_IMPROVEMENT)
            >>> s.to_dict()["efficiency"]
            'needs improvement'
        """
        return {
            "total_items": self.total_items,
            "total_volume": self.total_volume,
            "total_weight": self.total_weight,
            "utilization_pct": self.utilization_pct,
            "efficiency": self.efficiency.value,
        }


def compute_statistics(
    result: PlacementResult,
    container: ContainerSpec | None = None,
    optimal_threshold: float = OPTIMAL_THRESHOLD_PCT,
    good_threshold: float = GOOD_THRESHOLD_PCT,
) -> LoadStatistics | None:
    """Derive load statistics from a placement result.

    The denominator is the container's full interior volume, not the usable
    space left after the wall-clearance margin.

    Args:
        result: Output of GridPacker.pack().
        container: Container to rate against. Defaults to result.container.
        optimal_threshold: Utilization above which the load is "optimal".
        good_threshold: Utilization above which the load is "good".

    Returns:
        LoadStatistics, or None when nothing was placed.
    """
    if not result.placed:
        return None

    container = container or result.container
    total_volume = sum(item.unit.cbm for item in result.placed)
    total_weight = sum(item.unit.weight for item in result.placed)
    utilization_pct = total_volume / container.volume * 100

    return LoadStatistics(
        total_items=len(result.placed),
        total_volume=total_volume,
        total_weight=total_weight,
        utilization_pct=utilization_pct,
        efficiency=rate_efficiency(utilization_pct, optimal_threshold, good_threshold),
    )


def export_to_json(
    result: PlacementResult,
    stats: LoadStatistics | None,
    output_path: Path | str,
) -> None:
    """Export a placement result and its statistics to a JSON file.

    Args:
        result: PlacementResult to export.
        stats: Statistics for the result, or None ("no data").
        output_path: Path to output JSON file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = result.to_dict()
    data["statistics"] = stats.to_dict() if stats else None

    with output_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def export_to_csv(result: PlacementResult, output_path: Path | str) -> None:
    """Export placed items to a CSV file, one row per item.

    Writes only the header when nothing was placed.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for item in result.placed:
            product = item.unit.product
            writer.writerow({
                "sequence": item.sequence,
                "unit_id": item.unit.unit_id,
                "product_id": product.id,
                "productname": product.name,
                "type": product.category.value,
                "width": product.width,
                "height": product.height,
                "length": product.length,
                "weight": product.weight,
                "cbm": product.cbm,
                "x": item.x,
                "y": item.y,
                "z": item.z,
            })


def print_summary(result: PlacementResult, stats: LoadStatistics | None) -> str:
    """Generate human-readable summary of a packing run.

    Returns:
        Formatted multi-line summary string.
    """
    c = result.container
    lines = [
        "=" * 60,
        f"Container: {c.name} ({c.width:.0f} x {c.height:.0f} x {c.length:.0f} mm, {c.volume:.2f} m³)",
        f"Usable space: {result.usable[0]:.1f} x {result.usable[1]:.1f} x {result.usable[2]:.1f} mm",
        "=" * 60,
        f"Placed:   {len(result.placed)}",
        f"Unplaced: {len(result.unplaced)}",
    ]
    for product, count in result.unplaced_by_product():
        lines.append(f"  - {product.name} ({product.category.value}): {count}")

    lines.append("")
    if stats is None:
        lines.append("Statistics: No data")
    else:
        lines.extend([
            "Statistics:",
            f"  Volume:      {stats.total_volume:.2f} m³",
            f"  Weight:      {stats.total_weight:.1f} kg",
            f"  Utilization: {stats.utilization_pct:.1f}%",
            f"  Efficiency:  {stats.efficiency.value}",
        ])
    lines.append("=" * 60)
    return "\n".join(lines)
