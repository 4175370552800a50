"""Domain models, container table, catalog and errors."""
