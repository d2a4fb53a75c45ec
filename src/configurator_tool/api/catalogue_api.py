"""
Catalogue API - FastAPI router for price catalogue management.

Writes require the revalidation secret in the X-Revalidation-Secret header.
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import Optional, Union

from ..engine.models import PriceCatalogueItem
from ..services.catalogue_service import CatalogueService
from .state import get_catalogue_service, require_admin_secret, resolve_site

router = APIRouter(prefix="/api/catalogue", tags=["catalogue"])


# Pydantic models for API
class CatalogueItemCreate(BaseModel):
    """Request model for creating a catalogue item."""
    id: Optional[str] = None
    name: str
    category: str = ""
    image: Optional[str] = None
    price_min: int
    price_max: int
    unit: Optional[str] = None


class CatalogueItemUpdate(BaseModel):
    """Request model for updating a catalogue item."""
    name: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = None
    price_min: Optional[int] = None
    price_max: Optional[int] = None
    unit: Optional[str] = None


class CatalogueItemResponse(BaseModel):
    """Response model for a catalogue item."""
    id: str
    name: str
    category: str
    image: Optional[str]
    price_min: Union[int, float]
    price_max: Union[int, float]
    unit: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]


class ValidationResponse(BaseModel):
    """Response model for validation."""
    valid: bool
    errors: list[str]
    warnings: list[str]


def _to_item(data: CatalogueItemCreate) -> PriceCatalogueItem:
    return PriceCatalogueItem(
        id=data.id or "",
        name=data.name,
        category=data.category,
        image=data.image,
        price_min=data.price_min,
        price_max=data.price_max,
        unit=data.unit,
    )


# Endpoints

@router.get("", response_model=list[CatalogueItemResponse])
async def list_items(
    site: str = Depends(resolve_site),
    service: CatalogueService = Depends(get_catalogue_service),
):
    """List all catalogue items for a site."""
    items = service.list_items(site)
    return [CatalogueItemResponse(**item.__dict__) for item in items]


@router.get("/stats")
async def get_stats(
    site: str = Depends(resolve_site),
    service: CatalogueService = Depends(get_catalogue_service),
):
    """Get catalogue statistics."""
    return service.get_stats(site)


@router.get("/{item_id}", response_model=CatalogueItemResponse)
async def get_item(
    item_id: str,
    site: str = Depends(resolve_site),
    service: CatalogueService = Depends(get_catalogue_service),
):
    """Get a single catalogue item by ID."""
    item = service.get_item(site, item_id)
    if not item:
        raise HTTPException(status_code=404, detail=f"Catalogue item '{item_id}' not found")
    return CatalogueItemResponse(**item.__dict__)


@router.post("", response_model=CatalogueItemResponse, dependencies=[Depends(require_admin_secret)])
async def create_item(
    item_data: CatalogueItemCreate,
    site: str = Depends(resolve_site),
    service: CatalogueService = Depends(get_catalogue_service),
):
    """Create a new catalogue item."""
    item = _to_item(item_data)

    # Validate first
    validation = service.validate_item(item)
    if not validation.valid:
        raise HTTPException(status_code=400, detail={"errors": validation.errors})

    try:
        created = service.create_item(site, item)
        return CatalogueItemResponse(**created.__dict__)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{item_id}", response_model=CatalogueItemResponse, dependencies=[Depends(require_admin_secret)])
async def update_item(
    item_id: str,
    updates: CatalogueItemUpdate,
    site: str = Depends(resolve_site),
    service: CatalogueService = Depends(get_catalogue_service),
):
    """Update an existing catalogue item."""
    # Only fields present in the request body, including explicit nulls
    update_dict = updates.model_dump(exclude_unset=True)

    current = service.get_item(site, item_id)
    if not current:
        raise HTTPException(status_code=404, detail=f"Catalogue item '{item_id}' not found")

    merged = PriceCatalogueItem(**{**current.__dict__, **update_dict})
    validation = service.validate_item(merged)
    if not validation.valid:
        raise HTTPException(status_code=400, detail={"errors": validation.errors})

    try:
        updated = service.update_item(site, item_id, update_dict)
        return CatalogueItemResponse(**updated.__dict__)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{item_id}", dependencies=[Depends(require_admin_secret)])
async def delete_item(
    item_id: str,
    site: str = Depends(resolve_site),
    service: CatalogueService = Depends(get_catalogue_service),
):
    """Delete a catalogue item."""
    try:
        service.delete_item(site, item_id)
        return {"success": True, "message": f"Catalogue item '{item_id}' deleted"}
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/validate", response_model=ValidationResponse)
async def validate_item(
    item_data: CatalogueItemCreate,
    service: CatalogueService = Depends(get_catalogue_service),
):
    """Validate a catalogue item without saving."""
    result = service.validate_item(_to_item(item_data))
    return ValidationResponse(
        valid=result.valid,
        errors=result.errors,
        warnings=result.warnings,
    )
