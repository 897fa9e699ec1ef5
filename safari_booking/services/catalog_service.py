import logging
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from safari_booking.core.exceptions import NotFound, ValidationError
from safari_booking.db.models import Attraction, Safari
from safari_booking.domain import pricing

logger = logging.getLogger(__name__)

BookableItem = Union[Attraction, Safari]

ITEM_MODELS = {
	"attraction": Attraction,
	"safari": Safari,
}
REQUIRED_ITEM_FIELDS = ("name", "location", "price_usd", "price_kes", "featured", "duration_days")


class CatalogService:
	@staticmethod
	def list_items(db: Session, booking_type: str, featured: Optional[bool] = None) -> list[BookableItem]:
		model = CatalogService._model_for(booking_type)
		query = select(model)
		if featured is not None:
			query = query.where(model.featured == featured)
		return list(db.scalars(query.order_by(model.name)))

	@staticmethod
	def get_item(db: Session, booking_type: str, item_id: str) -> BookableItem:
		item = db.get(CatalogService._model_for(booking_type), item_id)
		if item is None:
			raise NotFound(f"{booking_type.capitalize()} not found")
		return item

	@staticmethod
	def create_item(db: Session, booking_type: str, fields: dict) -> BookableItem:
		item = CatalogService._model_for(booking_type)(**fields)
		db.add(item)
		db.commit()
		logger.info("Created %s %s", booking_type, item.id)
		return item

	@staticmethod
	def update_item(db: Session, booking_type: str, item_id: str, changes: dict) -> BookableItem:
		"""Apply a partial update. Existing bookings keep their price snapshot."""
		item = CatalogService.get_item(db, booking_type, item_id)
		for name in REQUIRED_ITEM_FIELDS:
			if name in changes and changes[name] is None:
				raise ValidationError(f"{name} cannot be cleared")
		for name, value in changes.items():
			setattr(item, name, value)
		db.commit()
		logger.info("Updated %s %s: %s", booking_type, item.id, ", ".join(sorted(changes)))
		return item

	@staticmethod
	def delete_item(db: Session, booking_type: str, item_id: str) -> None:
		item = CatalogService.get_item(db, booking_type, item_id)
		db.delete(item)
		db.commit()
		logger.info("Deleted %s %s", booking_type, item_id)

	@staticmethod
	def quote(db: Session, booking_type: str, item_id: str, adults: int, children: int, deposit_fraction) -> dict:
		"""Price a party against the catalog item's stored USD and KES prices."""
		item = CatalogService.get_item(db, booking_type, item_id)
		totals = pricing.quote(item.price_usd, item.price_kes, adults, children)
		usd = pricing.split_deposit(totals.total_usd, deposit_fraction)
		kes = pricing.split_deposit(totals.total_kes, deposit_fraction)
		return {
			"booking_type": booking_type,
			"item_id": item.id,
			"adults": adults,
			"children": children,
			"adult_price_usd": item.price_usd,
			"child_price_usd": pricing.child_unit_price(item.price_usd),
			"adult_price_kes": item.price_kes,
			"child_price_kes": pricing.child_unit_price(item.price_kes),
			"total_price_usd": totals.total_usd,
			"total_price_kes": totals.total_kes,
			"deposit_amount": usd.deposit,
			"deposit_amount_kes": kes.deposit,
			"balance_usd": usd.balance,
			"balance_kes": kes.balance,
		}

	@staticmethod
	def _model_for(booking_type: str):
		try:
			return ITEM_MODELS[booking_type]
		except KeyError:
			raise ValidationError("bookingType must be 'attraction' or 'safari'") from None
