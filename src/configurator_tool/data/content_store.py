"""
Content Store - Read-only access to configurator definitions per site.

Each site is a directory under <data_dir>/sites/<site>/ holding:
- categories.json   configurator categories (slug, name, order_rank)
- questions.json    question definitions, linked by category slug or product_slug
- pricing.json      pricing definitions, linked the same way
- catalogue.csv     price catalogue items

Parsed definitions are cached per site and tag until invalidate() is called,
which is what the revalidate endpoint and the catalogue admin API do after
edits. A missing site or file, or a malformed JSON file, yields an empty
result, never an error. Site names must be slugs.
"""
import json
import logging
import re
from pathlib import Path
from typing import Callable, Optional

import pandas as pd

from ..engine.models import PriceCatalogueItem, Pricing, Question

logger = logging.getLogger(__name__)

CACHE_TAGS = ('questions', 'pricing', 'catalogue', 'categories')

# Site names are directory names under sites/, never paths
SITE_NAME_PATTERN = re.compile(r"[a-z0-9][a-z0-9_-]*")

CATALOGUE_COLUMNS = [
    'id', 'name', 'category', 'image', 'price_min', 'price_max', 'unit',
    'created_at', 'updated_at'
]


def to_cents(value) -> float:
    """Normalize a price cell to int cents, keeping fractions if present."""
    if value is None or pd.isna(value):
        return 0
    number = float(value)
    return int(number) if number.is_integer() else number


def is_valid_site_name(site: Optional[str]) -> bool:
    """Lower-case slug such as "vpg"; anything path-like is rejected."""
    return bool(site) and SITE_NAME_PATTERN.fullmatch(site) is not None


class ContentStore:
    """File-backed store for questions, pricing, categories and catalogue."""

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)
        self._cache: dict[tuple[str, str], object] = {}

    @property
    def sites_dir(self) -> Path:
        return self.data_dir / 'sites'

    def site_dir(self, site: str) -> Path:
        if not is_valid_site_name(site):
            raise ValueError(f"Invalid site name: {site!r}")
        return self.sites_dir / site

    def site_exists(self, site: str) -> bool:
        return is_valid_site_name(site) and self.site_dir(site).is_dir()

    def list_sites(self) -> list[str]:
        if not self.sites_dir.exists():
            return []
        return sorted(p.name for p in self.sites_dir.iterdir() if p.is_dir())

    def invalidate(self, tag: Optional[str] = None):
        """Drop cached definitions for one tag, or everything when tag is None."""
        if tag is None:
            self._cache.clear()
        else:
            for key in [k for k in self._cache if k[1] == tag]:
                del self._cache[key]
        logger.info("Invalidated content cache (%s)", tag or "all")

    def _cached(self, site: str, tag: str, loader: Callable[[], object]):
        key = (site, tag)
        if key not in self._cache:
            self._cache[key] = loader()
        return self._cache[key]

    def _load_json(self, site: str, filename: str) -> list[dict]:
        if not self.site_exists(site):
            return []
        path = self.site_dir(site) / filename
        if not path.exists():
            return []
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Malformed %s for site %s: %s", filename, site, e)
            return []
        return data if isinstance(data, list) else []

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def get_categories(self, site: str) -> list[dict]:
        """All categories for a site, ordered by order_rank then name."""
        def load():
            rows = self._load_json(site, 'categories.json')
            return sorted(rows, key=lambda c: (c.get('order_rank', 0), c.get('name', '')))
        return self._cached(site, 'categories', load)

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def get_questions(self, site: str) -> list[Question]:
        """All questions for a site, ordered by order_rank."""
        def load():
            questions = [Question.from_dict(q) for q in self._load_json(site, 'questions.json')]
            return sorted(questions, key=lambda q: q.order_rank)
        return self._cached(site, 'questions', load)

    def get_questions_for_category(self, category_slug: str, site: str) -> list[Question]:
        return [q for q in self.get_questions(site) if q.category == category_slug]

    def get_questions_for_product(self, product_slug: Optional[str], site: str) -> list[Question]:
        """Questions shared by all products plus the ones for this product."""
        return [
            q for q in self.get_questions(site)
            if not q.category and (q.product_slug is None or q.product_slug == product_slug)
        ]

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def get_pricing(self, site: str) -> list[Pricing]:
        return self._cached(
            site, 'pricing',
            lambda: [Pricing.from_dict(p) for p in self._load_json(site, 'pricing.json')]
        )

    def get_pricing_for_category(self, category_slug: str, site: str) -> Optional[Pricing]:
        for pricing in self.get_pricing(site):
            if pricing.category == category_slug:
                return pricing
        return None

    def get_pricing_for_product(self, product_slug: str, site: str) -> Optional[Pricing]:
        for pricing in self.get_pricing(site):
            if pricing.product_slug == product_slug:
                return pricing
        return None

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    def catalogue_path(self, site: str) -> Path:
        return self.site_dir(site) / 'catalogue.csv'

    def get_catalogue_items(self, site: str) -> list[PriceCatalogueItem]:
        """All catalogue items for a site, ordered by category and name."""
        return self._cached(site, 'catalogue', lambda: self._load_catalogue(site))

    def _load_catalogue(self, site: str) -> list[PriceCatalogueItem]:
        if not self.site_exists(site):
            return []
        path = self.catalogue_path(site)
        if not path.exists():
            return []

        df = pd.read_csv(path, dtype={'id': str, 'name': str, 'category': str, 'unit': str, 'image': str})
        if df.empty:
            return []

        df = df.dropna(subset=['id'])
        df['id'] = df['id'].str.strip()
        df = df.sort_values(['category', 'name'], na_position='last')

        items = []
        for row in df.to_dict(orient='records'):
            row = {k: (None if not isinstance(v, str) and pd.isna(v) else v) for k, v in row.items()}
            row['price_min'] = to_cents(row.get('price_min'))
            row['price_max'] = to_cents(row.get('price_max'))
            items.append(PriceCatalogueItem.from_dict(row))
        return items
