"""
Configurator API - Public endpoints used by the quote wizard.
"""
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from ..config.settings import Settings
from ..data.content_store import CACHE_TAGS, ContentStore
from ..engine.formatting import format_price, format_price_range
from ..engine.pricing_engine import PricingEngine
from ..services.quote_service import ContactDetails, QuoteService
from .state import check_secret, get_app_settings, get_engine, get_quote_service, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/configurator", tags=["configurator"])


# Pydantic models for API
class CalculateRequest(BaseModel):
    """Request model for a price estimate."""
    product_slug: Optional[str] = None
    answers: Optional[Any] = None
    site: Optional[str] = None


class ContactIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class SubmitRequest(BaseModel):
    """Request model for a quote submission."""
    product_slug: Optional[str] = None
    answers: Optional[Any] = None
    contact: Optional[ContactIn] = None
    site: Optional[str] = None


class RevalidateRequest(BaseModel):
    tag: Optional[str] = None
    secret: Optional[str] = None


# Endpoints

@router.post("/calculate")
async def calculate_price(
    req: CalculateRequest,
    engine: PricingEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
):
    """Calculate a price estimate, ignoring answers to hidden questions/options."""
    if not req.product_slug:
        raise HTTPException(status_code=400, detail="product_slug is required")

    if not isinstance(req.answers, dict):
        raise HTTPException(status_code=400, detail="answers object is required")

    site = req.site or settings.default_site
    try:
        result = engine.calculate_guarded(req.product_slug, req.answers, site)
    except Exception:
        logger.exception("Error calculating configurator price for %s", req.product_slug)
        raise HTTPException(status_code=500, detail="Internal server error")

    return {
        "price": {
            "min": result.min,
            "min_formatted": format_price(result.min),
            "range_formatted": format_price_range(result.min),
        }
    }


@router.post("/submit")
async def submit_quote(
    req: SubmitRequest,
    service: QuoteService = Depends(get_quote_service),
    store: ContentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Price, store and email a quote request."""
    if not req.product_slug:
        raise HTTPException(status_code=400, detail="product_slug is required")

    contact = req.contact
    if not contact or not contact.name or not contact.email:
        raise HTTPException(status_code=400, detail="Contact name and email are required")

    if req.answers is not None and not isinstance(req.answers, dict):
        raise HTTPException(status_code=400, detail="answers object is required")

    site = req.site or settings.default_site
    if not store.site_exists(site):
        raise HTTPException(status_code=400, detail="Invalid site")

    try:
        outcome = await service.submit(
            product_slug=req.product_slug,
            answers=req.answers or {},
            contact=ContactDetails(
                name=contact.name,
                email=contact.email,
                phone=contact.phone,
                address=contact.address,
            ),
            site=site,
        )
    except Exception:
        logger.exception("Error submitting quote for %s", req.product_slug)
        raise HTTPException(
            status_code=500,
            detail="Er is een fout opgetreden bij het versturen van de offerte"
        )

    return outcome.to_dict()


@router.get("/questions")
async def get_questions(
    response: Response,
    product: Optional[str] = None,
    site: Optional[str] = None,
    engine: PricingEngine = Depends(get_engine),
    settings: Settings = Depends(get_app_settings),
):
    """Questions for a product/category, in wizard order."""
    if not product:
        raise HTTPException(status_code=400, detail="Product parameter is required")

    site = site or settings.default_site
    try:
        questions = engine.store.get_questions_for_category(product, site)
        if not questions:
            questions = engine.store.get_questions_for_product(product, site)
    except Exception:
        logger.exception("Error fetching configurator questions for %s", product)
        raise HTTPException(status_code=500, detail="Internal server error")

    response.headers["Cache-Control"] = "public, s-maxage=300, stale-while-revalidate=3600"
    return {
        "questions": [q.to_public_dict() for q in questions],
        "source": "database",
    }


@router.get("/categories")
async def get_categories(
    site: Optional[str] = None,
    store: ContentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Configurator categories for a site."""
    return {"categories": store.get_categories(site or settings.default_site)}


@router.post("/revalidate")
async def revalidate(
    req: RevalidateRequest,
    store: ContentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """Drop cached definitions after an admin edit."""
    if not check_secret(settings, req.secret):
        raise HTTPException(status_code=401, detail="Invalid secret")

    if req.tag not in CACHE_TAGS:
        raise HTTPException(status_code=400, detail="Invalid tag")

    store.invalidate(req.tag)
    return {"revalidated": True, "tag": req.tag}
