import logging
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from safari_booking.core.exceptions import ConflictError, NotFound, ValidationError
from safari_booking.db.models import Booking, User
from safari_booking.domain import pricing
from safari_booking.domain.booking_state import (
	BookingStatus,
	PaymentStatus,
	StatusAxis,
	parse_state,
	validate_initial_payment_status,
	validate_initial_status,
	validate_transition,
)
from safari_booking.schemas import BookingCreate, BookingUpdate
from safari_booking.services.auth_service import AuthService
from safari_booking.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

ACCOMMODATION_TYPES = ("standard", "deluxe", "luxury")
_AXIS_ENUMS = {StatusAxis.STATUS: BookingStatus, StatusAxis.PAYMENT_STATUS: PaymentStatus}


def _check_accommodation(booking_type: str, accommodation_type: Optional[str]) -> Optional[str]:
	if booking_type == "safari":
		accommodation_type = accommodation_type or "standard"
		if accommodation_type not in ACCOMMODATION_TYPES:
			raise ValidationError(f"accommodationType must be one of: {', '.join(ACCOMMODATION_TYPES)}")
		return accommodation_type
	if accommodation_type is not None:
		raise ValidationError("accommodationType only applies to safari bookings")
	return None


def _check_deposit(deposit: int, total_usd: int) -> int:
	pricing.validate_total(deposit, "depositAmount")
	if deposit > total_usd:
		raise ValidationError("depositAmount must not exceed totalPriceUSD")
	return deposit


class BookingService:
	@staticmethod
	def create_booking(
		db: Session,
		payload: BookingCreate,
		current_user: Optional[User],
		deposit_fraction,
	) -> Booking:
		"""Validate, resolve the owner and insert one booking in a single transaction."""
		adults, children = pricing.validate_party(payload.adults, payload.children)
		if payload.travel_date < date.today():
			raise ValidationError("travelDate must not be in the past")
		accommodation = _check_accommodation(payload.booking_type, payload.accommodation_type)
		status = validate_initial_status(payload.status)
		payment_status = validate_initial_payment_status(payload.payment_status)

		item = CatalogService.get_item(db, payload.booking_type, payload.item_id)
		if payload.total_price_usd is None and payload.total_price_kes is None:
			totals = pricing.quote(item.price_usd, item.price_kes, adults, children)
			total_usd, total_kes = totals.total_usd, totals.total_kes
		elif payload.total_price_usd is None or payload.total_price_kes is None:
			raise ValidationError("totalPriceUSD and totalPriceKES must be provided together")
		else:
			total_usd = pricing.validate_total(payload.total_price_usd, "totalPriceUSD")
			total_kes = pricing.validate_total(payload.total_price_kes, "totalPriceKES")

		if payload.deposit_amount is None:
			deposit = pricing.deposit_amount(total_usd, deposit_fraction)
		else:
			deposit = _check_deposit(payload.deposit_amount, total_usd)

		try:
			if current_user is not None:
				owner_id = current_user.id
			else:
				owner_id = AuthService.find_or_create_user(db, payload.email, payload.name, payload.phone).id
			if payload.user_id and payload.user_id != owner_id:
				logger.warning("Ignoring client-supplied userId for booking owned by %s", owner_id)

			booking = Booking(
				user_id=owner_id,
				booking_type=payload.booking_type,
				item_id=item.id,
				travel_date=payload.travel_date,
				adults=adults,
				children=children,
				accommodation_type=accommodation,
				special_requests=payload.special_requests,
				total_price_usd=total_usd,
				total_price_kes=total_kes,
				deposit_amount=deposit,
				deposit_paid=payload.deposit_paid,
				status=status,
				payment_status=payment_status,
			)
			db.add(booking)
			db.commit()
		except Exception:
			db.rollback()
			raise
		logger.info("Created booking %s for user %s (%s)", booking.id, owner_id, status.value)
		return booking

	@staticmethod
	def get_booking(db: Session, booking_id: str) -> Booking:
		booking = db.get(Booking, booking_id)
		if booking is None:
			raise NotFound("Booking not found")
		return booking

	@staticmethod
	def list_bookings(db: Session, user_id: Optional[str] = None) -> list[Booking]:
		query = select(Booking)
		if user_id is not None:
			query = query.where(Booking.user_id == user_id)
		return list(db.scalars(query.order_by(Booking.booking_date.desc())))

	@staticmethod
	def read_state(db: Session, booking_id: str, axis: StatusAxis):
		column = getattr(Booking, StatusAxis(axis).value)
		current = db.execute(select(column).where(Booking.id == booking_id)).scalar_one_or_none()
		if current is None:
			raise NotFound("Booking not found")
		return current

	@staticmethod
	def compare_and_set(db: Session, booking_id: str, axis: StatusAxis, expected, target) -> bool:
		"""Write ``target`` only if the stored value still equals ``expected``."""
		axis = StatusAxis(axis)
		column = getattr(Booking, axis.value)
		result = db.execute(
			update(Booking)
			.where(Booking.id == booking_id, column == expected)
			.values({axis.value: target, "updated_at": datetime.now(timezone.utc)})
			.execution_options(synchronize_session=False)
		)
		return result.rowcount == 1

	@staticmethod
	def apply_transition(db: Session, booking_id: str, axis: StatusAxis, target):
		"""Validate against the persisted state and write it; the caller commits."""
		axis = StatusAxis(axis)
		current = parse_state(_AXIS_ENUMS[axis], BookingService.read_state(db, booking_id, axis))
		new_state = validate_transition(axis, current, target)
		if not BookingService.compare_and_set(db, booking_id, axis, current, new_state):
			logger.warning(
				"Lost transition race on booking %s: %s %s -> %s",
				booking_id, axis.value, current.value, new_state.value,
			)
			raise ConflictError(
				f"Booking {axis.value} changed while updating, please reload",
				details={"axis": axis.value, "from": current.value, "to": new_state.value},
			)
		logger.info("Booking %s %s: %s -> %s", booking_id, axis.value, current.value, new_state.value)
		return new_state

	@staticmethod
	def transition(db: Session, booking_id: str, axis: StatusAxis, target) -> Booking:
		try:
			BookingService.apply_transition(db, booking_id, axis, target)
			db.commit()
		except Exception:
			db.rollback()
			raise
		return BookingService._reload(db, booking_id)

	@staticmethod
	def update_booking(db: Session, booking_id: str, payload: BookingUpdate) -> Booking:
		"""Admin partial update; status fields go through the state machine."""
		changes = payload.model_dump(exclude_unset=True)
		booking = BookingService.get_booking(db, booking_id)

		if ("total_price_usd" in changes) != ("total_price_kes" in changes):
			raise ValidationError("totalPriceUSD and totalPriceKES must be updated together")
		for field in ("travel_date", "adults", "children", "deposit_paid", "total_price_usd", "total_price_kes", "deposit_amount"):
			if field in changes and changes[field] is None:
				raise ValidationError(f"{field} cannot be cleared")

		adults, children = pricing.validate_party(
			changes.get("adults", booking.adults), changes.get("children", booking.children)
		)
		total_usd = pricing.validate_total(changes.get("total_price_usd", booking.total_price_usd), "totalPriceUSD")
		pricing.validate_total(changes.get("total_price_kes", booking.total_price_kes), "totalPriceKES")
		_check_deposit(changes.get("deposit_amount", booking.deposit_amount), total_usd)
		if "accommodation_type" in changes:
			changes["accommodation_type"] = _check_accommodation(booking.booking_type, changes["accommodation_type"])

		transitions = []
		for axis in StatusAxis:
			target = changes.pop(axis.value, None)
			if target is not None:
				transitions.append((axis, parse_state(_AXIS_ENUMS[axis], target)))

		try:
			for axis, target in transitions:
				BookingService.apply_transition(db, booking_id, axis, target)
			for field, value in changes.items():
				setattr(booking, field, value)
			db.commit()
		except Exception:
			db.rollback()
			raise
		logger.info("Updated booking %s (%s)", booking_id, ", ".join(sorted(changes)) or "status only")
		return BookingService._reload(db, booking_id)

	@staticmethod
	def _reload(db: Session, booking_id: str) -> Booking:
		booking = db.get(Booking, booking_id, populate_existing=True)
		if booking is None:
			raise NotFound("Booking not found")
		return booking
