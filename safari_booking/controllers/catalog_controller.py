from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from safari_booking.core.config import Settings, get_settings
from safari_booking.db.models import User
from safari_booking.db.session import get_db
from safari_booking.schemas import (
	AttractionCreate, AttractionResponse, AttractionUpdate, QuoteRequest, QuoteResponse,
	SafariCreate, SafariResponse, SafariUpdate, SuccessResponse
)
from safari_booking.services.auth_service import require_admin
from safari_booking.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"])


# ===== ATTRACTIONS =====
@router.get("/attractions", response_model=List[AttractionResponse])
def list_attractions(featured: Optional[bool] = None, db: Session = Depends(get_db)):
	return CatalogService.list_items(db, "attraction", featured)


@router.get("/attractions/{item_id}", response_model=AttractionResponse)
def get_attraction(item_id: str, db: Session = Depends(get_db)):
	return CatalogService.get_item(db, "attraction", item_id)


@router.post("/attractions", response_model=AttractionResponse, status_code=status.HTTP_201_CREATED)
def create_attraction(payload: AttractionCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
	return CatalogService.create_item(db, "attraction", payload.model_dump())


@router.put("/attractions/{item_id}", response_model=AttractionResponse)
def update_attraction(
	item_id: str,
	payload: AttractionUpdate,
	db: Session = Depends(get_db),
	admin: User = Depends(require_admin),
):
	return CatalogService.update_item(db, "attraction", item_id, payload.model_dump(exclude_unset=True))


@router.delete("/attractions/{item_id}", response_model=SuccessResponse)
def delete_attraction(item_id: str, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
	CatalogService.delete_item(db, "attraction", item_id)
	return SuccessResponse(message="Attraction deleted")


# ===== SAFARIS =====
@router.get("/safaris", response_model=List[SafariResponse])
def list_safaris(featured: Optional[bool] = None, db: Session = Depends(get_db)):
	return CatalogService.list_items(db, "safari", featured)


@router.get("/safaris/{item_id}", response_model=SafariResponse)
def get_safari(item_id: str, db: Session = Depends(get_db)):
	return CatalogService.get_item(db, "safari", item_id)


@router.post("/safaris", response_model=SafariResponse, status_code=status.HTTP_201_CREATED)
def create_safari(payload: SafariCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
	return CatalogService.create_item(db, "safari", payload.model_dump())


@router.put("/safaris/{item_id}", response_model=SafariResponse)
def update_safari(
	item_id: str,
	payload: SafariUpdate,
	db: Session = Depends(get_db),
	admin: User = Depends(require_admin),
):
	return CatalogService.update_item(db, "safari", item_id, payload.model_dump(exclude_unset=True))


@router.delete("/safaris/{item_id}", response_model=SuccessResponse)
def delete_safari(item_id: str, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
	CatalogService.delete_item(db, "safari", item_id)
	return SuccessResponse(message="Safari deleted")


# ===== QUOTES =====
@router.post("/quotes", response_model=QuoteResponse)
def quote(payload: QuoteRequest, db: Session = Depends(get_db), config: Settings = Depends(get_settings)):
	return CatalogService.quote(
		db, payload.booking_type, payload.item_id, payload.adults, payload.children, config.deposit_fraction
	)
