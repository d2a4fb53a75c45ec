import pytest

from configurator_tool.engine.models import PriceCatalogueItem
from configurator_tool.services.catalogue_service import CatalogueService


@pytest.fixture
def service(store):
    return CatalogueService(store)


def new_item(**overrides):
    fields = dict(id="", name="Glazen dak", category="Dakbedekking", price_min=15000, price_max=20000, unit="per m²")
    fields.update(overrides)
    return PriceCatalogueItem(**fields)


def test_list_and_get(service):
    items = service.list_items("test")
    assert [i.id for i in items] == ["dak-poly", "led", "goot"]
    assert service.get_item("test", "led").price_max == 1500
    assert service.get_item("test", "missing") is None


def test_create_generates_id_from_name(service):
    created = service.create_item("test", new_item())
    assert created.id == "glazen-dak"
    assert created.created_at is not None

    second = service.create_item("test", new_item())
    assert second.id == "glazen-dak-1"


def test_create_rejects_duplicate_id_and_unknown_site(service):
    with pytest.raises(ValueError, match="already exists"):
        service.create_item("test", new_item(id="led"))
    with pytest.raises(ValueError, match="not found"):
        service.create_item("nope", new_item())


def test_create_invalidates_cached_catalogue(service, store):
    assert len(store.get_catalogue_items("test")) == 3
    service.create_item("test", new_item())
    assert len(store.get_catalogue_items("test")) == 4


def test_update_only_touches_editable_fields(service):
    updated = service.update_item("test", "goot", {"price_max": 6500, "id": "hijacked"})
    assert updated.id == "goot"
    assert service.get_item("test", "goot").price_max == 6500

    with pytest.raises(ValueError):
        service.update_item("test", "missing", {"name": "x"})


def test_delete_item(service):
    assert service.delete_item("test", "led") is True
    assert service.get_item("test", "led") is None
    with pytest.raises(ValueError):
        service.delete_item("test", "led")


def test_deleted_item_no_longer_prices_options(service, engine):
    answers = {"dak": "poly", "extras": ["goot"]}
    assert engine.calculate("veranda", answers, "test").min == 505200

    service.delete_item("test", "goot")
    assert engine.calculate("veranda", answers, "test").min == 500200


@pytest.mark.parametrize("overrides,message", [
    ({"name": ""}, "Name is required"),
    ({"price_min": -1}, "price_min must be a non-negative"),
    ({"price_min": 30000}, "must not exceed"),
    ({"unit": "per uur"}, "Unknown unit"),
])
def test_validate_item_errors(service, overrides, message):
    result = service.validate_item(new_item(**overrides))
    assert not result.valid
    assert any(message in e for e in result.errors)


def test_validate_item_warns_without_category(service):
    result = service.validate_item(new_item(category=""))
    assert result.valid
    assert result.warnings


def test_stats(service):
    stats = service.get_stats("test")
    assert stats["total"] == 3
    assert stats["by_unit"] == {"per m²": 1, "per m": 1, "per stuk": 1}


def test_create_rejects_path_like_site(service, data_dir):
    with pytest.raises(ValueError):
        service.create_item("../..", new_item())
    assert not (data_dir / "catalogue.csv").exists()
