from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from safari_booking.core.config import Settings, get_settings
from safari_booking.core.exceptions import NotFound
from safari_booking.db.models import User
from safari_booking.db.session import get_db
from safari_booking.schemas import (
	BookingCreate, BookingListResponse, BookingResponse, BookingUpdate, TransitionRequest
)
from safari_booking.services.auth_service import get_current_user, require_admin, require_user
from safari_booking.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
	payload: BookingCreate,
	db: Session = Depends(get_db),
	current_user: User | None = Depends(get_current_user),
	config: Settings = Depends(get_settings),
):
	return BookingService.create_booking(db, payload, current_user, config.deposit_fraction)


@router.get("", response_model=BookingListResponse)
def list_bookings(
	db: Session = Depends(get_db),
	user: User = Depends(require_user),
	user_id: Optional[str] = Query(None, alias="userId"),
):
	"""Customers only ever see their own bookings; admins may filter by user."""
	if user.role != "admin":
		user_id = user.id
	bookings = BookingService.list_bookings(db, user_id)
	return BookingListResponse(
		bookings=[BookingResponse.model_validate(b) for b in bookings],
		total=len(bookings),
	)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(booking_id: str, db: Session = Depends(get_db), user: User = Depends(require_user)):
	booking = BookingService.get_booking(db, booking_id)
	if user.role != "admin" and booking.user_id != user.id:
		raise NotFound("Booking not found")
	return booking


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(
	booking_id: str,
	payload: BookingUpdate,
	db: Session = Depends(get_db),
	admin: User = Depends(require_admin),
):
	return BookingService.update_booking(db, booking_id, payload)


@router.post("/{booking_id}/status", response_model=BookingResponse)
def transition_booking(
	booking_id: str,
	payload: TransitionRequest,
	db: Session = Depends(get_db),
	admin: User = Depends(require_admin),
):
	return BookingService.transition(db, booking_id, payload.axis, payload.target)
