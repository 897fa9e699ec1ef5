from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from safari_booking.db.models import User
from safari_booking.db.session import get_db
from safari_booking.schemas import PaymentCreate, PaymentResponse
from safari_booking.services.auth_service import require_user
from safari_booking.services.payment_service import PaymentService

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def create_payment(payload: PaymentCreate, db: Session = Depends(get_db), user: User = Depends(require_user)):
	return PaymentService.record_payment(db, user, payload)


@router.get("", response_model=List[PaymentResponse])
def list_payments(
	booking_id: Optional[str] = Query(None, alias="bookingId"),
	db: Session = Depends(get_db),
	user: User = Depends(require_user),
):
	return PaymentService.list_payments(db, user, booking_id)
