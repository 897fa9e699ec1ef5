import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from safari_booking.core.exceptions import ConflictError
from safari_booking.db.models import Review, User
from safari_booking.schemas import ReviewCreate
from safari_booking.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class ReviewService:
	@staticmethod
	def list_reviews(db: Session, attraction_id: str) -> list[Review]:
		CatalogService.get_item(db, "attraction", attraction_id)
		query = select(Review).where(Review.attraction_id == attraction_id)
		return list(db.scalars(query.order_by(Review.created_at.desc())))

	@staticmethod
	def save_review(db: Session, user: User, payload: ReviewCreate) -> Review:
		"""One review per user and attraction: a second submission replaces the first."""
		attraction = CatalogService.get_item(db, "attraction", payload.attraction_id)
		review = db.scalars(
			select(Review).where(Review.user_id == user.id, Review.attraction_id == attraction.id)
		).first()
		try:
			if review is None:
				review = Review(user_id=user.id, attraction_id=attraction.id)
				db.add(review)
			review.rating = payload.rating
			review.comment = payload.comment
			db.flush()

			average, count = db.execute(
				select(func.avg(Review.rating), func.count(Review.id)).where(Review.attraction_id == attraction.id)
			).one()
			attraction.rating = float(average or 0)
			attraction.review_count = count
			db.commit()
		except IntegrityError:
			db.rollback()
			raise ConflictError("Review was submitted concurrently, please retry")
		except Exception:
			db.rollback()
			raise
		logger.info("Saved review %s for attraction %s", review.id, attraction.id)
		return review
