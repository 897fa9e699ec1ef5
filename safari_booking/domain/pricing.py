"""Dual-currency pricing.

USD and KES totals are each computed from their own stored unit price; one
is never converted into the other. All amounts are whole currency units.
"""
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real

from safari_booking.core.exceptions import ValidationError

CHILD_PRICE_RATIO = Decimal("0.7")
DEFAULT_DEPOSIT_FRACTION = Decimal("0.30")


@dataclass(frozen=True)
class Quote:
	total_usd: int
	total_kes: int


@dataclass(frozen=True)
class DepositSplit:
	total: int
	deposit: int
	balance: int


def round_half_up(value) -> int:
	return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _check_count(name: str, value, minimum: int) -> int:
	if isinstance(value, bool) or not isinstance(value, Real):
		raise ValidationError(f"{name} must be a whole number")
	if not math.isfinite(value) or int(value) != value:
		raise ValidationError(f"{name} must be a whole number")
	if value < minimum:
		raise ValidationError(f"{name} must be at least {minimum}")
	return int(value)


def _check_unit_price(name: str, value) -> Decimal:
	if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
		raise ValidationError(f"{name} must be a number")
	price = Decimal(str(value))
	if not price.is_finite() or price <= 0:
		raise ValidationError(f"{name} must be greater than 0")
	return price


def _check_total(value, name: str = "total") -> int:
	if isinstance(value, bool) or not isinstance(value, int):
		raise ValidationError(f"{name} must be a whole number")
	if value < 0:
		raise ValidationError(f"{name} must not be negative")
	return value


def _check_fraction(value) -> Decimal:
	fraction = Decimal(str(value))
	if not fraction.is_finite() or fraction < 0 or fraction > 1:
		raise ValidationError("deposit fraction must be between 0 and 1")
	return fraction


def validate_party(adults, children) -> tuple[int, int]:
	return _check_count("adults", adults, 1), _check_count("children", children, 0)


def validate_total(total, name: str = "total") -> int:
	return _check_total(total, name)


def child_unit_price(unit_price) -> int:
	price = _check_unit_price("unit price", unit_price)
	return round_half_up(price * CHILD_PRICE_RATIO)


def line_total(unit_price, adults, children) -> int:
	price = _check_unit_price("unit price", unit_price)
	adults = _check_count("adults", adults, 1)
	children = _check_count("children", children, 0)
	adult_part = round_half_up(price * adults)
	return adult_part + children * round_half_up(price * CHILD_PRICE_RATIO)


def quote(unit_price_usd, unit_price_kes, adults, children) -> Quote:
	"""Total for ``adults`` + ``children`` in both currencies.

	Every argument is validated before anything is computed so callers never
	see a partial quote.
	"""
	_check_unit_price("unit price (USD)", unit_price_usd)
	_check_unit_price("unit price (KES)", unit_price_kes)
	_check_count("adults", adults, 1)
	_check_count("children", children, 0)
	return Quote(
		total_usd=line_total(unit_price_usd, adults, children),
		total_kes=line_total(unit_price_kes, adults, children),
	)


def deposit_amount(total: int, fraction=DEFAULT_DEPOSIT_FRACTION) -> int:
	total = _check_total(total)
	return round_half_up(Decimal(total) * _check_fraction(fraction))


def balance(total: int, fraction=DEFAULT_DEPOSIT_FRACTION) -> int:
	return _check_total(total) - deposit_amount(total, fraction)


def split_deposit(total: int, fraction=DEFAULT_DEPOSIT_FRACTION) -> DepositSplit:
	return DepositSplit(total=total, deposit=deposit_amount(total, fraction), balance=balance(total, fraction))
