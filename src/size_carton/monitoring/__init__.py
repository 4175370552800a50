"""Monitoring module for size_carton.

Provides load statistics and result export for packing runs.
"""

from .metrics import (
    Efficiency,
    LoadStatistics,
    compute_statistics,
    export_to_csv,
    export_to_json,
    print_summary,
    rate_efficiency,
)

__all__ = [
    "Efficiency",
    "LoadStatistics",
    "compute_statistics",
    "export_to_csv",
    "export_to_json",
    "print_summary",
    "rate_efficiency",
]
