"""
Product catalog: selection and quantity state layered over products.

Selection rules:
    * selecting a product whose quantity is 0 sets the quantity to 1
    * deselecting a product resets its quantity to 0
    * set_quantity clamps to >= 0 and never changes the selection flag
    * only selected products with quantity > 0 contribute units

Unknown product ids are ignored (logged), never raised: the catalog works
on already-validated product data and clamps rather than rejects.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from size_carton.core.models import PlaceableUnit, Product
from size_carton.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class CatalogEntry:
    """A product plus its UI-only selection annotations."""
    product: Product
    selected: bool = False
    quantity: int = 0

    @property
    def contributes(self) -> bool:
        return self.selected and self.quantity > 0


class ProductCatalog:
    """Available products in catalog order with user selections."""

    def __init__(self, products: Iterable[Product] = ()):
        self.entries: List[CatalogEntry] = [CatalogEntry(p) for p in products]

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, product_id: int) -> Optional[CatalogEntry]:
        for entry in self.entries:
            if entry.product.id == product_id:
                return entry
        return None

    def _entry_or_warn(self, product_id: int) -> Optional[CatalogEntry]:
        entry = self.get(product_id)
        if entry is None:
            logger.warning("Ignoring unknown product id %s", product_id)
        return entry

    # ── Mutation ─────────────────────────────────────────────────────────

    @staticmethod
    def _apply_selection(entry: CatalogEntry, selected: bool) -> None:
        if selected:
            if not entry.selected and entry.quantity == 0:
                entry.quantity = 1
        else:
            entry.quantity = 0
        entry.selected = selected

    def set_selection(self, product_id: int, selected: bool) -> None:
        entry = self._entry_or_warn(product_id)
        if entry is not None:
            self._apply_selection(entry, selected)

    def set_quantity(self, product_id: int, qty: int) -> None:
        entry = self._entry_or_warn(product_id)
        if entry is not None:
            entry.quantity = max(0, int(qty))

    def select_all(self, selected: bool) -> None:
        for entry in self.entries:
            self._apply_selection(entry, selected)

    def toggle_all(self) -> None:
        """Select everything, or clear everything if all are selected."""
        all_selected = bool(self.entries) and all(e.selected for e in self.entries)
        self.select_all(not all_selected)

    # ── Queries ──────────────────────────────────────────────────────────

    def expand(self) -> List[PlaceableUnit]:
        """
        Expand selections into placeable units.

        Emits exactly ``quantity`` units per contributing product, in
        catalog order. Does not modify the catalog.
        """
        units: List[PlaceableUnit] = []
        for entry in self.entries:
            if entry.contributes:
                units.extend(PlaceableUnit(entry.product, i) for i in range(entry.quantity))
        return units

    def search(self, term: str) -> List[CatalogEntry]:
        """Entries whose name or category contains ``term`` (case-insensitive)."""
        needle = term.strip().lower()
        if not needle:
            return list(self.entries)
        return [
            e for e in self.entries
            if needle in e.product.name.lower() or needle in e.product.category.value.lower()
        ]

    def selected_summary(self) -> List[tuple]:
        return [(e.product, e.quantity) for e in self.entries if e.selected]

    def selected_kinds(self) -> int:
        return sum(1 for e in self.entries if e.selected)

    def total_cbm(self) -> float:
        return sum(unit.cbm for unit in self.expand())
