"""Container packing algorithms."""
