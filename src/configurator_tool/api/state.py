"""
Shared service instances for the API.

Routes receive these through FastAPI dependencies so tests can swap them
with app.dependency_overrides.
"""
from typing import Optional

from fastapi import Depends, Header, HTTPException

from ..config.settings import Settings, get_settings
from ..data.content_store import ContentStore
from ..engine.pricing_engine import PricingEngine
from ..services.catalogue_service import CatalogueService
from ..services.notifier import QuoteNotifier
from ..services.quote_service import QuoteService
from ..services.submission_store import SubmissionStore

_store: Optional[ContentStore] = None


def get_app_settings() -> Settings:
    return get_settings()


def get_store() -> ContentStore:
    """Process-wide content store, so its definition cache is shared."""
    global _store
    if _store is None:
        _store = ContentStore(get_settings().data_dir)
    return _store


def get_engine(store: ContentStore = Depends(get_store)) -> PricingEngine:
    return PricingEngine(store)


def get_catalogue_service(store: ContentStore = Depends(get_store)) -> CatalogueService:
    return CatalogueService(store)


def get_quote_service(
    engine: PricingEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
) -> QuoteService:
    return QuoteService(
        engine=engine,
        submissions=SubmissionStore(engine.store.data_dir),
        notifier=QuoteNotifier(settings),
    )


def check_secret(settings: Settings, secret: Optional[str]) -> bool:
    """True when a secret is configured and the given one matches it."""
    return bool(settings.revalidation_secret) and secret == settings.revalidation_secret


def require_admin_secret(
    x_revalidation_secret: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
):
    """Guard for admin writes: the revalidation secret in X-Revalidation-Secret."""
    if not check_secret(settings, x_revalidation_secret):
        raise HTTPException(status_code=401, detail="Invalid secret")


def resolve_site(
    site: Optional[str] = None,
    store: ContentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """The requested site (or the default one), which must exist."""
    site = site or settings.default_site
    if not store.site_exists(site):
        raise HTTPException(status_code=400, detail="Invalid site")
    return site
