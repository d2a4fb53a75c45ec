import json

import pytest

from configurator_tool.config.settings import Settings
from configurator_tool.data.content_store import ContentStore
from configurator_tool.engine.pricing_engine import PricingEngine

CATALOGUE_CSV = """id,name,category,image,price_min,price_max,unit,created_at,updated_at
dak-poly,Polycarbonaat dak,Dakbedekking,,200,300,per m²,2025-01-10T09:00:00,2025-01-10T09:00:00
led,LED-strip,Verlichting,,1000,1500,per m,2025-01-10T09:00:00,2025-01-10T09:00:00
goot,Extra goot,Afwerking,,5000,6000,per stuk,2025-01-10T09:00:00,2025-01-10T09:00:00
"""

QUESTIONS = [
    {"category": "veranda", "question_key": "length", "label": "Lengte", "type": "number", "order_rank": 1},
    {"category": "veranda", "question_key": "width", "label": "Breedte", "type": "number", "order_rank": 2},
    {
        "category": "veranda", "question_key": "dak", "label": "Dak", "type": "single-select", "order_rank": 3,
        "options": [
            {"value": "poly", "label": "Polycarbonaat", "catalogueItemId": "dak-poly"},
            {"value": "geen", "label": "Geen dak"},
        ],
    },
    {
        "category": "veranda", "question_key": "finish", "label": "Afwerking", "type": "single-select",
        "order_rank": 4, "required": True,
        "options": [
            {"value": "lak", "label": "Lak", "priceModifierMin": 10000, "priceModifierMax": 15000},
            {"value": "vernis", "label": "Vernis", "priceModifierMin": 0, "priceModifierMax": 0},
        ],
    },
    {
        "category": "veranda", "question_key": "extras", "label": "Extra's", "type": "multi-select",
        "order_rank": 5,
        "visibility_rules": {
            "rules": [{"questionKey": "dak", "operator": "equals", "value": "poly"}],
            "logic": "all", "action": "show",
        },
        "options": [
            {"value": "goot", "label": "Extra goot", "catalogueItemId": "goot"},
            {"value": "led", "label": "LED", "catalogueItemId": "led"},
        ],
    },
    {"product_slug": "tuinhuis", "question_key": "deuren", "label": "Deuren", "type": "number",
     "price_per_unit_min": 20000, "price_per_unit_max": 25000},
    {"question_key": "opmerking", "label": "Opmerking", "type": "text", "subtitle": "Vrije tekst"},
]

PRICING = [
    {"id": "p1", "category": "veranda", "base_price_min": 500000, "base_price_max": 600000},
    {"id": "p2", "product_slug": "tuinhuis", "base_price_min": 100000, "base_price_max": 120000},
]

CATEGORIES = [
    {"slug": "veranda", "name": "Veranda", "order_rank": 2},
    {"slug": "carport", "name": "Carport", "order_rank": 1},
]


@pytest.fixture
def data_dir(tmp_path):
    """A data directory with one site ("test") holding a small set of definitions."""
    site_dir = tmp_path / "sites" / "test"
    site_dir.mkdir(parents=True)
    (site_dir / "questions.json").write_text(json.dumps(QUESTIONS), encoding="utf-8")
    (site_dir / "pricing.json").write_text(json.dumps(PRICING), encoding="utf-8")
    (site_dir / "categories.json").write_text(json.dumps(CATEGORIES), encoding="utf-8")
    (site_dir / "catalogue.csv").write_text(CATALOGUE_CSV, encoding="utf-8")
    return tmp_path


@pytest.fixture
def store(data_dir):
    return ContentStore(data_dir)


@pytest.fixture
def engine(store):
    return PricingEngine(store)


@pytest.fixture
def settings(data_dir):
    return Settings(
        project_root=data_dir,
        data_dir=data_dir,
        default_site="test",
        revalidation_secret="s3cret",
    )
