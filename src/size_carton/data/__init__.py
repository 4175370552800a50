"""Spreadsheet ingestion and product repository access."""
