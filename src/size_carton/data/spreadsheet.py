"""
Spreadsheet ingestion of product rows from .csv or .xlsx files.

Expected header (case-insensitive, order free):
    productname, type, width, height, length, weight, cbm

Every row is validated with the ProductRow schema.  Errors are collected
across the whole sheet and reported together; products are numbered
1..n in row order.

Usage:
    from size_carton.data.spreadsheet import read_products
    products = read_products("products.xlsx")
"""

import csv
import zipfile
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import ValidationError

from size_carton.core.errors import SpreadsheetError
from size_carton.core.models import Product
from size_carton.data.schemas import ProductRow
from size_carton.utils.logger import get_logger

logger = get_logger(__name__)

COLUMNS = ("productname", "type", "width", "height", "length", "weight", "cbm")


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err["loc"]) or "row"
        parts.append(f"{field}: {err['msg']}")
    return ", ".join(parts)


def _is_blank(values: Sequence) -> bool:
    return all(v is None or (isinstance(v, str) and not v.strip()) for v in values)


def parse_rows(rows: Iterable[Sequence]) -> List[Product]:
    """
    Validate raw rows (header first) and convert them to products.

    Args:
        rows: Iterable of cell sequences; the first is the header row.

    Returns:
        Products with ids 1..n in row order.

    Raises:
        SpreadsheetError: Empty sheet, missing columns, or invalid rows.
    """
    rows = iter(rows)
    try:
        header = next(rows)
    except StopIteration:
        raise SpreadsheetError("Spreadsheet is empty") from None

    names = [str(h).strip().lower() if h is not None else "" for h in header]
    missing = [c for c in COLUMNS if c not in names]
    if missing:
        raise SpreadsheetError(f"Missing columns: {', '.join(missing)}")
    index = {c: names.index(c) for c in COLUMNS}

    products: List[Product] = []
    row_errors: list[tuple[int, str]] = []
    # Row numbers follow the sheet: header is row 1.
    for row_number, values in enumerate(rows, start=2):
        values = list(values)
        if _is_blank(values):
            continue
        record = {c: values[i] if i < len(values) else None for c, i in index.items()}
        try:
            row = ProductRow.model_validate(record)
        except ValidationError as exc:
            row_errors.append((row_number, _format_validation_error(exc)))
            continue
        products.append(row.to_product(len(products) + 1))

    if row_errors:
        raise SpreadsheetError(f"{len(row_errors)} invalid row(s)", row_errors)

    logger.info("Read %d products", len(products))
    return products


def _csv_rows(path: Path) -> Iterator[List[str]]:
    with path.open(newline="", encoding="utf-8-sig") as f:
        yield from csv.reader(f)


def _xlsx_rows(path: Path) -> Iterator[tuple]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        yield from workbook.worksheets[0].iter_rows(values_only=True)
    finally:
        workbook.close()


def read_products(path) -> List[Product]:
    """Read and validate products from a .csv or .xlsx spreadsheet."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".csv":
        rows = _csv_rows(path)
    elif suffix in (".xlsx", ".xlsm"):
        rows = _xlsx_rows(path)
    else:
        raise SpreadsheetError(f"Unsupported spreadsheet format: {path.suffix or path.name}")

    try:
        return parse_rows(rows)
    except (OSError, zipfile.BadZipFile, InvalidFileException) as exc:
        raise SpreadsheetError(f"Cannot read {path}: {exc}") from exc


def write_products_csv(products: Iterable[Product], path) -> None:
    """Write products back out in the ingestion column layout."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(COLUMNS))
        writer.writeheader()
        for p in products:
            d = p.to_dict()
            writer.writerow({c: d[c] for c in COLUMNS})
