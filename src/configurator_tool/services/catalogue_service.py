"""
Catalogue Service - CRUD operations for the price catalogue.
Handles reading/writing a site's catalogue.csv and invalidating the store cache.
"""
import csv
import re
from datetime import datetime
from typing import Optional
from dataclasses import dataclass, field

from ..data.content_store import CATALOGUE_COLUMNS, ContentStore, to_cents
from ..engine.models import CATALOGUE_UNITS, PriceCatalogueItem


@dataclass
class ValidationResult:
    """Result of a validation pass."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, message: str):
        self.errors.append(message)
        self.valid = False


def item_to_csv_row(item: PriceCatalogueItem) -> dict:
    """Convert to CSV row format."""
    return {
        'id': item.id,
        'name': item.name,
        'category': item.category or '',
        'image': item.image or '',
        'price_min': str(item.price_min),
        'price_max': str(item.price_max),
        'unit': item.unit or '',
        'created_at': item.created_at or '',
        'updated_at': item.updated_at or '',
    }


def item_from_csv_row(row: dict) -> PriceCatalogueItem:
    """Create a catalogue item from a CSV row."""
    return PriceCatalogueItem(
        id=row.get('id', '').strip(),
        name=row.get('name', ''),
        category=row.get('category', ''),
        image=row.get('image') or None,
        price_min=to_cents(row.get('price_min') or 0),
        price_max=to_cents(row.get('price_max') or 0),
        unit=row.get('unit') or None,
        created_at=row.get('created_at') or None,
        updated_at=row.get('updated_at') or None,
    )


class CatalogueService:
    """Service for managing a site's price catalogue."""

    EDITABLE_FIELDS = ('name', 'category', 'image', 'price_min', 'price_max', 'unit')

    def __init__(self, store: ContentStore):
        self.store = store

    def list_items(self, site: str) -> list[PriceCatalogueItem]:
        """List all catalogue items from CSV, in file order."""
        path = self.store.catalogue_path(site)
        if not path.exists():
            return []

        items = []
        with open(path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            for row in reader:
                if not row.get('id'):
                    continue
                items.append(item_from_csv_row(row))
        return items

    def get_item(self, site: str, item_id: str) -> Optional[PriceCatalogueItem]:
        """Get a single catalogue item by ID."""
        for item in self.list_items(site):
            if item.id == item_id:
                return item
        return None

    def create_item(self, site: str, item: PriceCatalogueItem) -> PriceCatalogueItem:
        """Create a new catalogue item."""
        if not self.store.site_exists(site):
            raise ValueError(f"Site '{site}' not found")

        items = self.list_items(site)
        if not item.id:
            item.id = self._generate_item_id(item, items)

        if any(existing.id == item.id for existing in items):
            raise ValueError(f"Catalogue item with ID '{item.id}' already exists")

        now = datetime.now().isoformat(timespec='seconds')
        item.created_at = now
        item.updated_at = now

        items.append(item)
        self._write_items(site, items)
        return item

    def update_item(self, site: str, item_id: str, updates: dict) -> PriceCatalogueItem:
        """Update an existing catalogue item."""
        items = self.list_items(site)

        for item in items:
            if item.id == item_id:
                for key, value in updates.items():
                    if key in self.EDITABLE_FIELDS:
                        setattr(item, key, value)
                item.updated_at = datetime.now().isoformat(timespec='seconds')
                self._write_items(site, items)
                return item

        raise ValueError(f"Catalogue item with ID '{item_id}' not found")

    def delete_item(self, site: str, item_id: str) -> bool:
        """
        Delete a catalogue item.

        Options that still reference it stop contributing to the price.
        """
        items = self.list_items(site)
        remaining = [i for i in items if i.id != item_id]

        if len(remaining) == len(items):
            raise ValueError(f"Catalogue item with ID '{item_id}' not found")

        self._write_items(site, remaining)
        return True

    def validate_item(self, item: PriceCatalogueItem) -> ValidationResult:
        """Validate a catalogue item before saving."""
        result = ValidationResult(valid=True)

        if not item.name:
            result.add_error("Name is required")

        if item.price_min is None or item.price_min < 0:
            result.add_error("price_min must be a non-negative amount in cents")

        if item.price_max is None or item.price_max < 0:
            result.add_error("price_max must be a non-negative amount in cents")

        if result.valid and item.price_min > item.price_max:
            result.add_error("price_min must not exceed price_max")

        if item.unit and item.unit not in CATALOGUE_UNITS:
            result.add_error(f"Unknown unit '{item.unit}', must be one of: {', '.join(CATALOGUE_UNITS)}")

        if not item.category:
            result.warnings.append("No category set; the item is listed last")

        return result

    def _generate_item_id(self, item: PriceCatalogueItem, existing: list[PriceCatalogueItem]) -> str:
        """Generate a unique, readable item ID from the name."""
        base = re.sub(r'[^a-z0-9]+', '-', (item.name or '').lower()).strip('-') or "item"

        existing_ids = {i.id for i in existing}
        candidate = base
        counter = 1
        while candidate in existing_ids:
            candidate = f"{base}-{counter}"
            counter += 1

        return candidate

    def _write_items(self, site: str, items: list[PriceCatalogueItem]):
        """Write items back to CSV and drop the cached catalogue."""
        with open(self.store.catalogue_path(site), 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=CATALOGUE_COLUMNS)
            writer.writeheader()
            for item in items:
                writer.writerow(item_to_csv_row(item))

        self.store.invalidate('catalogue')

    def get_stats(self, site: str) -> dict:
        """Get statistics about the catalogue."""
        items = self.list_items(site)

        by_category = {}
        by_unit = {}
        for item in items:
            category = item.category or 'Uncategorized'
            by_category[category] = by_category.get(category, 0) + 1
            unit = item.unit or 'flat'
            by_unit[unit] = by_unit.get(unit, 0) + 1

        return {
            'total': len(items),
            'by_category': by_category,
            'by_unit': by_unit,
        }
