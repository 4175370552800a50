"""
Load planner: runs packing attempts for a catalog and keeps the latest.

Each call to plan() is an independent unit of work over an immutable
snapshot of the selected units.  The packing itself runs in a worker
thread so an event loop (CLI, web handler) stays responsive.  A newer
plan() supersedes older ones: when an older run finishes after a newer
one has started, its outcome is returned to its caller marked stale and
is never stored as the latest result.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Sequence

from size_carton.algorithms.grid_packer import GridPacker
from size_carton.config import PackingConfig
from size_carton.core.catalog import ProductCatalog
from size_carton.core.containers import ContainerSpec, get_container
from size_carton.core.models import PlaceableUnit, PlacementResult
from size_carton.monitoring.metrics import LoadStatistics, compute_statistics
from size_carton.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlanOutcome:
    """Result of one plan() call.

    Attributes:
        generation: Sequence number of the run (1-based).
        result: Placement result.
        stats: Load statistics, or None when nothing was placed.
        stale: True if a newer run started before this one finished.
    """

    generation: int
    result: PlacementResult
    stats: LoadStatistics | None
    stale: bool = False


def run_packing(
    units: Sequence[PlaceableUnit],
    container: ContainerSpec,
    config: PackingConfig,
) -> tuple[PlacementResult, LoadStatistics | None]:
    """Pack units and derive statistics (synchronous, pure)."""
    packer = GridPacker(shrink_factor=config.shrink_factor)
    result = packer.pack(units, container)
    stats = compute_statistics(
        result,
        container,
        optimal_threshold=config.optimal_threshold_pct,
        good_threshold=config.good_threshold_pct,
    )
    return result, stats


class LoadPlanner:
    """
    Orchestrates packing runs for a product catalog.

    Args:
        catalog: Catalog whose current selection is packed.
        config: Packing constants.
    """

    def __init__(self, catalog: ProductCatalog, config: PackingConfig | None = None):
        self.catalog = catalog
        self.config = config or PackingConfig()
        self.latest: PlanOutcome | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> None:
        """Drop the latest result, e.g. after the container class changed."""
        self.latest = None

    async def plan(self, container_name: str | None = None) -> PlanOutcome:
        """
        Pack the catalog's current selection.

        Raises:
            UnknownContainer: Before any computation is attempted.
            InvalidUnit: A selected product has invalid dimensions.
        """
        container = get_container(container_name or self.config.container)
        units = tuple(self.catalog.expand())

        self._generation += 1
        generation = self._generation
        logger.info(
            "Run %d: packing %d units into %s", generation, len(units), container.name
        )

        result, stats = await asyncio.to_thread(run_packing, units, container, self.config)

        stale = generation != self._generation
        outcome = PlanOutcome(generation, result, stats, stale=stale)
        if stale:
            logger.info("Run %d superseded by run %d; discarding", generation, self._generation)
        else:
            self.latest = outcome
        return outcome
