"""Simulated payments.

Nothing is charged: a payment row is recorded as completed and the booking's
payment status is moved through the state machine in the same transaction.
"""
import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from safari_booking.core.exceptions import InvalidTransition, NotFound, ValidationError
from safari_booking.db.models import Booking, Payment, User
from safari_booking.domain.booking_state import PaymentStatus, StatusAxis, is_terminal, parse_state
from safari_booking.schemas import PaymentCreate
from safari_booking.services.booking_service import BookingService

logger = logging.getLogger(__name__)


class PaymentService:
	@staticmethod
	def amount_paid(db: Session, booking_id: str) -> int:
		total = db.scalar(
			select(func.coalesce(func.sum(Payment.amount), 0)).where(
				Payment.booking_id == booking_id, Payment.status == "completed"
			)
		)
		return int(total or 0)

	@staticmethod
	def record_payment(db: Session, user: User, payload: PaymentCreate) -> Payment:
		booking = db.get(Booking, payload.booking_id)
		if booking is None or booking.user_id != user.id:
			raise NotFound("Booking not found")
		if is_terminal(StatusAxis.STATUS, booking.status):
			raise ValidationError("Cannot pay for a cancelled booking")

		paid = PaymentService.amount_paid(db, booking.id)
		outstanding = booking.total_price_usd - paid
		if outstanding <= 0:
			raise ValidationError("Nothing is outstanding on this booking")
		if payload.payment_type == "deposit":
			if booking.deposit_amount == 0:
				raise ValidationError("This booking has no deposit; pay the balance with a final payment")
			expected = booking.deposit_amount
		else:
			expected = outstanding
		if payload.amount != expected:
			raise ValidationError(f"{payload.payment_type} payment must be exactly {expected} USD")

		# A deposit that covers the whole total settles the booking
		target = PaymentStatus.PAID if paid + payload.amount >= booking.total_price_usd else PaymentStatus.PARTIALLY_PAID
		current = parse_state(PaymentStatus, booking.payment_status)
		if payload.payment_type == "deposit" and current != PaymentStatus.UNPAID:
			raise InvalidTransition(StatusAxis.PAYMENT_STATUS.value, current.value, target.value)

		try:
			BookingService.apply_transition(db, booking.id, StatusAxis.PAYMENT_STATUS, target)
			payment = Payment(
				booking_id=booking.id,
				user_id=user.id,
				amount=payload.amount,
				payment_type=payload.payment_type,
				payment_method=payload.payment_method,
				status="completed",
			)
			db.add(payment)
			if payload.payment_type == "deposit":
				booking.deposit_paid = True
			db.commit()
		except Exception:
			db.rollback()
			raise
		logger.info("Recorded %s payment %s for booking %s", payload.payment_type, payment.id, booking.id)
		return payment

	@staticmethod
	def list_payments(db: Session, user: User, booking_id: Optional[str] = None) -> list[Payment]:
		query = select(Payment).where(Payment.user_id == user.id)
		if booking_id is not None:
			query = query.where(Payment.booking_id == booking_id)
		return list(db.scalars(query.order_by(Payment.created_at.desc())))
