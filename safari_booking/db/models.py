import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, Enum, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from safari_booking.db.session import Base
from safari_booking.domain.booking_state import BookingStatus, PaymentStatus


def _new_id() -> str:
	return str(uuid.uuid4())


def _now() -> datetime:
	return datetime.now(timezone.utc)


def _enum_column(enum_cls, name: str) -> Enum:
	return Enum(enum_cls, name=name, values_callable=lambda members: [m.value for m in members])


class User(Base):
	__tablename__ = "users"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
	phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
	password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
	role: Mapped[str] = mapped_column(Enum("customer", "admin", name="user_role"), nullable=False, default="customer")
	created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now)

	bookings: Mapped[list["Booking"]] = relationship("Booking", back_populates="user")


class Attraction(Base):
	__tablename__ = "attractions"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
	description: Mapped[str | None] = mapped_column(Text, nullable=True)
	price_usd: Mapped[int] = mapped_column(Integer, nullable=False)
	price_kes: Mapped[int] = mapped_column(Integer, nullable=False)
	rating: Mapped[float] = mapped_column(Float, nullable=False, default=0)
	review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
	featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
	created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now)

	reviews: Mapped[list["Review"]] = relationship("Review", back_populates="attraction", cascade="all, delete-orphan")


class Safari(Base):
	__tablename__ = "safaris"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
	description: Mapped[str | None] = mapped_column(Text, nullable=True)
	duration_days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
	price_usd: Mapped[int] = mapped_column(Integer, nullable=False)
	price_kes: Mapped[int] = mapped_column(Integer, nullable=False)
	featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
	created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now)


class Booking(Base):
	__tablename__ = "bookings"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
	user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
	booking_type: Mapped[str] = mapped_column(Enum("attraction", "safari", name="booking_type"), nullable=False)
	item_id: Mapped[str] = mapped_column(String(36), nullable=False)
	booking_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now)
	travel_date: Mapped[date] = mapped_column(Date, nullable=False)
	adults: Mapped[int] = mapped_column(Integer, nullable=False)
	children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
	accommodation_type: Mapped[str | None] = mapped_column(
		Enum("standard", "deluxe", "luxury", name="accommodation_type"), nullable=True
	)
	special_requests: Mapped[str | None] = mapped_column(Text, nullable=True)
	total_price_usd: Mapped[int] = mapped_column(Integer, nullable=False)
	total_price_kes: Mapped[int] = mapped_column(Integer, nullable=False)
	deposit_amount: Mapped[int] = mapped_column(Integer, nullable=False)
	deposit_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
	status: Mapped[BookingStatus] = mapped_column(
		_enum_column(BookingStatus, "booking_status"), nullable=False, default=BookingStatus.PENDING
	)
	payment_status: Mapped[PaymentStatus] = mapped_column(
		_enum_column(PaymentStatus, "payment_status"), nullable=False, default=PaymentStatus.UNPAID
	)
	updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now, onupdate=_now)

	user: Mapped[User] = relationship("User", back_populates="bookings")
	payments: Mapped[list["Payment"]] = relationship("Payment", back_populates="booking")


class Payment(Base):
	__tablename__ = "payments"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
	booking_id: Mapped[str] = mapped_column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
	user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
	amount: Mapped[int] = mapped_column(Integer, nullable=False)
	payment_type: Mapped[str] = mapped_column(Enum("deposit", "final", name="payment_type"), nullable=False)
	payment_method: Mapped[str] = mapped_column(Enum("card", "mpesa", "paypal", name="payment_method"), nullable=False)
	status: Mapped[str] = mapped_column(String(20), nullable=False, default="completed")
	created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now)

	booking: Mapped[Booking] = relationship("Booking", back_populates="payments")


class Message(Base):
	__tablename__ = "messages"

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
	sender_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
	recipient_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
	booking_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("bookings.id"), nullable=True)
	content: Mapped[str] = mapped_column(Text, nullable=False)
	is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
	created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now)


class Review(Base):
	__tablename__ = "reviews"
	__table_args__ = (UniqueConstraint("user_id", "attraction_id", name="uq_review_user_attraction"),)

	id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
	user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
	attraction_id: Mapped[str] = mapped_column(String(36), ForeignKey("attractions.id"), nullable=False, index=True)
	rating: Mapped[int] = mapped_column(Integer, nullable=False)
	comment: Mapped[str] = mapped_column(Text, nullable=False, default="")
	created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_now)
	updated_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True, onupdate=_now)

	attraction: Mapped[Attraction] = relationship("Attraction", back_populates="reviews")
