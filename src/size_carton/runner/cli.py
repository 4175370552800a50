"""Command-line entry point for container load planning."""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime
from pathlib import Path
from typing import Sequence

from size_carton.config import AppConfig, PackingConfig, load_config
from size_carton.core.catalog import ProductCatalog
from size_carton.core.containers import available_containers, recommend_container
from size_carton.core.errors import SizeCartonError
from size_carton.core.models import Product
from size_carton.data.repository import ProductRepository
from size_carton.data.spreadsheet import read_products
from size_carton.monitoring.metrics import export_to_csv, export_to_json, print_summary
from size_carton.runner.planner import LoadPlanner
from size_carton.utils.logger import set_level


def parse_quantity(value: str) -> tuple[int, int]:
    """Parse an ``ID=N`` pair for --qty."""
    try:
        product_id, qty = value.split("=", 1)
        return int(product_id), int(qty)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ID=N, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="size-carton",
        description="Plan how many product cartons fit into a shipping container",
    )
    parser.add_argument("--products", type=Path,
                        help="Spreadsheet (.csv or .xlsx) of products; omit to read the repository")
    parser.add_argument("--api-url", help="Product repository URL (default: from config)")
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Replace the repository's products with the spreadsheet's before planning",
    )
    parser.add_argument(
        "--container",
        default=None,
        choices=[*available_containers(), "auto"],
        help="Container class, or 'auto' to pick by selected CBM (default: from config)",
    )
    parser.add_argument(
        "--qty",
        type=parse_quantity,
        action="append",
        default=[],
        metavar="ID=N",
        help="Select product ID with quantity N (repeatable)",
    )
    parser.add_argument("--all", type=int, default=None, metavar="N",
                        help="Select every product with quantity N")
    parser.add_argument("--search", default="", help="Only list products matching this term")
    parser.add_argument("--shrink", type=float, default=None,
                        help="Usable-space shrink factor (default: from config)")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--results-dir", type=Path, default=None,
                        help="Write JSON and CSV results here")
    parser.add_argument("--log-level", default=None, help="Logging level (e.g. DEBUG)")
    return parser


async def load_products(args: argparse.Namespace, config: AppConfig) -> list[Product]:
    if args.products is not None:
        products = read_products(args.products)
        if args.upload:
            async with ProductRepository(args.api_url or config.api_url, config.timeout) as repo:
                message = await repo.replace_products(products)
            print(f"Uploaded: {message or len(products)}")
        return products

    async with ProductRepository(args.api_url or config.api_url, config.timeout) as repo:
        return await repo.list_products()


def apply_selection(catalog: ProductCatalog, args: argparse.Namespace) -> None:
    if args.all is not None:
        catalog.select_all(args.all > 0)
        for entry in catalog.entries:
            catalog.set_quantity(entry.product.id, args.all)
    for product_id, qty in args.qty:
        catalog.set_selection(product_id, qty > 0)
        catalog.set_quantity(product_id, qty)


def print_catalog(catalog: ProductCatalog, term: str) -> None:
    entries = catalog.search(term)
    print(f"{'ID':>5}  {'Name':<30} {'Type':<10} {'W x H x L (mm)':<22} {'kg':>8} {'cbm':>8} {'Qty':>5}")
    for e in entries:
        p = e.product
        dims = f"{p.width:g} x {p.height:g} x {p.length:g}"
        qty = e.quantity if e.selected else "-"
        print(f"{p.id:>5}  {p.name:<30} {p.category.value:<10} {dims:<22} {p.weight:>8g} {p.cbm:>8.3f} {qty:>5}")
    print(f"Selected: {len(catalog.expand())} units ({catalog.selected_kinds()} kinds), "
          f"{catalog.total_cbm():.2f} m³")


async def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    set_level(args.log_level or config.log_level)

    packing = config.packing
    if args.shrink is not None:
        packing = PackingConfig(**{**packing.to_dict(), "shrink_factor": args.shrink})

    catalog = ProductCatalog(await load_products(args, config))
    apply_selection(catalog, args)
    print_catalog(catalog, args.search)

    container_name = args.container or packing.container
    if container_name == "auto":
        container_name = recommend_container(catalog.total_cbm())
        print(f"Recommended container: {container_name}")
    elif container_name == "20ft" and recommend_container(catalog.total_cbm()) == "40ft":
        print(f"Selected CBM {catalog.total_cbm():.2f} m³ exceeds the 20ft guideline; consider 40ft")

    planner = LoadPlanner(catalog, packing)
    outcome = await planner.plan(container_name)
    print(print_summary(outcome.result, outcome.stats))

    if args.results_dir is not None:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base = args.results_dir / f"load_{container_name}_{stamp}"
        export_to_json(outcome.result, outcome.stats, base.with_suffix(".json"))
        export_to_csv(outcome.result, f"{base}_placed.csv")
        print(f"✓ Saved results to {base}.json and {base}_placed.csv")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    try:
        return asyncio.run(run(argv))
    except SizeCartonError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
