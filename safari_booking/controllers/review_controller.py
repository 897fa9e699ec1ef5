from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from safari_booking.db.models import User
from safari_booking.db.session import get_db
from safari_booking.schemas import ReviewCreate, ReviewResponse
from safari_booking.services.auth_service import require_user
from safari_booking.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=List[ReviewResponse])
def list_reviews(attraction_id: str = Query(..., alias="attractionId"), db: Session = Depends(get_db)):
	return ReviewService.list_reviews(db, attraction_id)


@router.post("", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
def save_review(payload: ReviewCreate, db: Session = Depends(get_db), user: User = Depends(require_user)):
	return ReviewService.save_review(db, user, payload)
