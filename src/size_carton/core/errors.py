"""
Error taxonomy for size_carton.

Faults abort the whole invocation; nothing here is raised for a unit that
simply does not fit (those are reported as unplaced units instead).

    SizeCartonError
    ├── PackingError
    │   ├── InvalidUnit        — malformed unit handed to the packer
    │   └── UnknownContainer   — container name not in the table
    ├── SpreadsheetError       — rows failed schema validation
    ├── RepositoryError        — product repository call failed
    └── ConfigError            — invalid configuration file / values
"""

from typing import Iterable, Optional


class SizeCartonError(Exception):
    """Base class for all size_carton errors."""


# ─────────────────────────────────────────────────────────────────────────────
# Packing
# ─────────────────────────────────────────────────────────────────────────────

class PackingError(SizeCartonError):
    """Base class for faults raised by the packing core."""


class InvalidUnit(PackingError):
    """A unit has a non-positive dimension or a missing attribute."""

    def __init__(self, unit, reason: str):
        self.unit = unit
        self.reason = reason
        unit_id = getattr(unit, "unit_id", repr(unit))
        super().__init__(f"Invalid unit {unit_id}: {reason}")


class UnknownContainer(PackingError):
    """Requested container class is not in the supported set."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = tuple(available)
        super().__init__(
            f"Unknown container: {name!r}. Available: {list(self.available)}"
        )


# ─────────────────────────────────────────────────────────────────────────────
# Surrounding collaborators
# ─────────────────────────────────────────────────────────────────────────────

class SpreadsheetError(SizeCartonError):
    """Spreadsheet could not be read or contains invalid rows."""

    def __init__(self, message: str, row_errors: Optional[list] = None):
        self.row_errors: list[tuple[int, str]] = list(row_errors or [])
        if self.row_errors:
            details = "; ".join(f"row {n}: {msg}" for n, msg in self.row_errors[:5])
            more = len(self.row_errors) - 5
            if more > 0:
                details += f"; ... {more} more"
            message = f"{message} ({details})"
        super().__init__(message)


class RepositoryError(SizeCartonError):
    """Product repository request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class ConfigError(SizeCartonError):
    """Configuration value out of range or unknown key."""
