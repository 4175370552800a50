"""Tests for spreadsheet ingestion (.csv / .xlsx)."""

import pytest
from openpyxl import Workbook

from size_carton.core.errors import SpreadsheetError
from size_carton.core.models import Category
from size_carton.data.spreadsheet import COLUMNS, parse_rows, read_products, write_products_csv

HEADER = list(COLUMNS)


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "products.csv"
    path.write_text(
        "ProductName,Type,Width,Height,Length,Weight,CBM\n"
        "CU-9000, condenser ,800,600,300,35.5,0.144\n"
        ",,,,,,\n"
        "EVA-Wall,EVAPORATOR,900,300,200,12,0.054\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def xlsx_file(tmp_path):
    path = tmp_path / "products.xlsx"
    wb = Workbook()
    ws = wb.active
    ws.append(["cbm", "productname", "type", "width", "height", "length", "weight"])
    ws.append([0.144, "CU-9000", "CONDENSER", 800, 600, 300, 35.5])
    ws.append([0.054, "EVA-Wall", "evaporator", 900, 300, 200, 12])
    wb.save(path)
    return path


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

class TestReadProducts:
    def test_csv(self, csv_file):
        products = read_products(csv_file)

        assert [p.id for p in products] == [1, 2]
        first = products[0]
        assert first.name == "CU-9000"
        assert first.category is Category.CONDENSER
        assert first.dimensions == (800.0, 600.0, 300.0)
        assert first.cbm == pytest.approx(0.144)

    def test_xlsx_column_order_free(self, xlsx_file):
        products = read_products(xlsx_file)

        assert [p.name for p in products] == ["CU-9000", "EVA-Wall"]
        assert products[1].category is Category.EVAPORATOR
        assert products[1].weight == 12.0

    def test_csv_roundtrip(self, csv_file, tmp_path):
        products = read_products(csv_file)
        out = tmp_path / "copy.csv"
        write_products_csv(products, out)
        assert read_products(out) == products

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(SpreadsheetError, match="Unsupported"):
            read_products(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SpreadsheetError, match="Cannot read"):
            read_products(tmp_path / "nope.csv")

    def test_corrupt_xlsx(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip archive")
        with pytest.raises(SpreadsheetError):
            read_products(path)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestParseRows:
    def test_empty_sheet(self):
        with pytest.raises(SpreadsheetError, match="empty"):
            parse_rows([])

    def test_missing_columns(self):
        with pytest.raises(SpreadsheetError, match="cbm"):
            parse_rows([HEADER[:-1]])

    def test_errors_collected_with_row_numbers(self):
        rows = [
            HEADER,
            ["ok", "CONDENSER", 1, 1, 1, 1, 0.1],
            ["", "CONDENSER", 1, 1, 1, 1, 0.1],
            ["bad-type", "COMPRESSOR", 1, 1, 1, 1, 0.1],
            ["zero-width", "EVAPORATOR", 0, 1, 1, 1, 0.1],
            ["neg-cbm", "EVAPORATOR", 1, 1, 1, 1, -0.1],
        ]
        with pytest.raises(SpreadsheetError) as exc_info:
            parse_rows(rows)

        errors = exc_info.value.row_errors
        assert [n for n, _ in errors] == [3, 4, 5, 6]
        assert "productname" in errors[0][1]
        assert "type" in errors[1][1]
        assert "width" in errors[2][1]
        assert "4 invalid row(s)" in str(exc_info.value)

    def test_short_row_reports_missing_values(self):
        with pytest.raises(SpreadsheetError) as exc_info:
            parse_rows([HEADER, ["short", "CONDENSER", 1]])
        assert exc_info.value.row_errors[0][0] == 2

    def test_zero_weight_allowed(self):
        products = parse_rows([HEADER, ["light", "CONDENSER", 10, 10, 10, 0, 0]])
        assert products[0].weight == 0.0
