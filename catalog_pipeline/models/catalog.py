# catalog_pipeline/models/catalog.py

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from .product_record import ProductRecord

CATALOG_VERSION = "1.0.0"


class Catalog:
    """Ordered, in-memory collection of ProductRecord. Insertion order mirrors document order."""

    items_created_count = 0

    def __init__(self, records: Optional[Iterable[ProductRecord]] = None, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._records: List[ProductRecord] = []
        for record in records or ():
            self.add(record)
        self.logger.debug("Catalog initialized with %d records", len(self._records))

    def __iter__(self) -> Iterator[ProductRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record: object) -> bool:
        return record in self._records

    def snapshot(self) -> Tuple[ProductRecord, ...]:
        """Read-only view handed to the exporters."""
        return tuple(self._records)

    # --- Mutation ---

    def add(self, record: ProductRecord) -> ProductRecord:
        self._records.append(record)
        type(self).items_created_count += 1
        self.logger.debug("Record added to catalog: %r", record)
        return record

    def remove(self, record: ProductRecord) -> Optional[ProductRecord]:
        try:
            index = self._records.index(record)
        except ValueError:
            self.logger.debug("Record not in catalog, nothing removed: %r", record)
            return None
        removed = self._records.pop(index)
        self.logger.debug("Record removed from catalog: %r", removed)
        return removed

    def clear(self) -> int:
        count = len(self._records)
        self._records.clear()
        self.logger.info("All records deleted from catalog (%d total)", count)
        return count

    def update(self, record: ProductRecord, **changes: Any) -> ProductRecord:
        """Replaces `record` in place with a copy carrying `changes`. Both versions are logged."""
        try:
            index = self._records.index(record)
        except ValueError:
            raise LookupError(f"Record not in catalog: {record!r}") from None
        new_record = record.updated(**changes)
        self._records[index] = new_record
        self.logger.info("Record updated: %s -> %s", record.info(), new_record.info())
        return new_record

    # --- Queries ---

    def filter_by_min_price(self, threshold: float) -> List[ProductRecord]:
        return [r for r in self._records if r.price is not None and r.price >= threshold]

    def find_by_name(self, name: str) -> Optional[ProductRecord]:
        query = str(name).strip()
        return next((r for r in self._records if r.name.strip() == query), None)

    def total_price(self) -> float:
        return sum((r.price or 0.0 for r in self._records), 0.0)

    def all_in_stock(self) -> bool:
        return all("in stock" in (r.availability or "").lower() for r in self._records)

    def any_out_of_stock(self) -> bool:
        return any("out of stock" in (r.availability or "").lower() for r in self._records)

    def distinct_categories(self) -> List[str]:
        return list(dict.fromkeys(r.category for r in self._records if r.category is not None))

    def sorted_by_price(self) -> List[ProductRecord]:
        # sorted() is stable, so equal prices keep catalog order.
        return sorted(self._records, key=lambda r: r.sort_price)

    def show_all_items(self) -> List[str]:
        """Returns one info line per record for display."""
        self.logger.info("show_all_items called for %d records", len(self._records))
        return [r.info() for r in self._records]

    # --- Helpers ---

    def generate_test_items(self, count: int = 5) -> Tuple[ProductRecord, ...]:
        for _ in range(count):
            self.add(ProductRecord.generate_fake())
        return self.snapshot()

    @classmethod
    def class_info(cls) -> Dict[str, Any]:
        return {
            "name": cls.__name__,
            "version": CATALOG_VERSION,
            "items_created_count": cls.items_created_count,
        }
