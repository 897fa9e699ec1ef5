from enum import Enum
from typing import Type, TypeVar

from safari_booking.core.exceptions import InvalidTransition, ValidationError


class BookingStatus(str, Enum):
	PENDING = "pending"
	CONFIRMED = "confirmed"
	CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
	UNPAID = "unpaid"
	PARTIALLY_PAID = "partially_paid"
	PAID = "paid"
	REFUNDED = "refunded"


class StatusAxis(str, Enum):
	STATUS = "status"
	PAYMENT_STATUS = "payment_status"


BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
	BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
	BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
	BookingStatus.CANCELLED: frozenset(),
}

PAYMENT_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
	PaymentStatus.UNPAID: frozenset({PaymentStatus.PARTIALLY_PAID, PaymentStatus.PAID}),
	PaymentStatus.PARTIALLY_PAID: frozenset({PaymentStatus.PAID, PaymentStatus.REFUNDED}),
	PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
	PaymentStatus.REFUNDED: frozenset(),
}

# Payments always start unpaid; they are moved on by recorded payments
INITIAL_PAYMENT_STATES = frozenset({PaymentStatus.UNPAID})

_TABLES = {
	StatusAxis.STATUS: (BookingStatus, BOOKING_TRANSITIONS),
	StatusAxis.PAYMENT_STATUS: (PaymentStatus, PAYMENT_TRANSITIONS),
}

E = TypeVar("E", bound=Enum)


def parse_state(enum_cls: Type[E], value) -> E:
	try:
		return enum_cls(value)
	except ValueError:
		allowed = ", ".join(member.value for member in enum_cls)
		raise ValidationError(f"'{value}' is not a valid {enum_cls.__name__} (expected one of: {allowed})") from None


def allowed_targets(axis: StatusAxis, current) -> frozenset:
	enum_cls, table = _TABLES[StatusAxis(axis)]
	return table[parse_state(enum_cls, current)]


def is_terminal(axis: StatusAxis, current) -> bool:
	return not allowed_targets(axis, current)


def validate_transition(axis: StatusAxis, current, target):
	"""Return the parsed target state, or raise InvalidTransition."""
	axis = StatusAxis(axis)
	enum_cls, _ = _TABLES[axis]
	current_state = parse_state(enum_cls, current)
	target_state = parse_state(enum_cls, target)
	if target_state not in allowed_targets(axis, current_state):
		raise InvalidTransition(axis.value, current_state.value, target_state.value)
	return target_state


def validate_initial_status(value) -> BookingStatus:
	# Any fulfillment state may be chosen by the checkout flow
	return parse_state(BookingStatus, value)


def validate_initial_payment_status(value) -> PaymentStatus:
	state = parse_state(PaymentStatus, value)
	if state not in INITIAL_PAYMENT_STATES:
		raise ValidationError(
			f"A booking cannot be created as '{state.value}'; payments are recorded after creation"
		)
	return state
