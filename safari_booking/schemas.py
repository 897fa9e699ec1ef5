from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime, date

from safari_booking.domain.booking_state import BookingStatus, PaymentStatus, StatusAxis


class ApiModel(BaseModel):
	model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ===== USER SCHEMAS =====
class UserResponse(ApiModel):
	id: str
	name: str
	email: EmailStr
	phone: Optional[str] = None
	role: str
	created_at: Optional[datetime] = Field(None, alias="createdAt")


# ===== AUTH SCHEMAS =====
class RegisterRequest(ApiModel):
	name: str = Field(..., min_length=1, max_length=255)
	email: EmailStr
	password: str = Field(..., min_length=8)
	phone: Optional[str] = None


class LoginRequest(ApiModel):
	email: EmailStr
	password: str


class SessionResponse(ApiModel):
	success: bool = True
	user: UserResponse


# ===== CATALOG SCHEMAS =====
class CatalogItemResponse(ApiModel):
	id: str
	name: str
	location: str
	description: Optional[str] = None
	price_usd: int = Field(..., alias="priceUSD")
	price_kes: int = Field(..., alias="priceKES")
	featured: bool


class AttractionResponse(CatalogItemResponse):
	rating: float = 0
	review_count: int = Field(0, alias="reviewCount")


class SafariResponse(CatalogItemResponse):
	duration_days: int = Field(..., alias="durationDays")


class AttractionCreate(ApiModel):
	name: str = Field(..., min_length=1, max_length=255)
	location: str = Field("", max_length=255)
	description: Optional[str] = None
	price_usd: int = Field(..., gt=0, alias="priceUSD")
	price_kes: int = Field(..., gt=0, alias="priceKES")
	featured: bool = False


class SafariCreate(AttractionCreate):
	duration_days: int = Field(1, ge=1, alias="durationDays")


class AttractionUpdate(ApiModel):
	name: Optional[str] = Field(None, min_length=1, max_length=255)
	location: Optional[str] = Field(None, max_length=255)
	description: Optional[str] = None
	price_usd: Optional[int] = Field(None, gt=0, alias="priceUSD")
	price_kes: Optional[int] = Field(None, gt=0, alias="priceKES")
	featured: Optional[bool] = None


class SafariUpdate(AttractionUpdate):
	duration_days: Optional[int] = Field(None, ge=1, alias="durationDays")


class QuoteRequest(ApiModel):
	booking_type: Literal["attraction", "safari"] = Field(..., alias="bookingType")
	item_id: str = Field(..., alias="itemId")
	adults: int = 1
	children: int = 0


class QuoteResponse(ApiModel):
	booking_type: str = Field(..., alias="bookingType")
	item_id: str = Field(..., alias="itemId")
	adults: int
	children: int
	adult_price_usd: int = Field(..., alias="adultPriceUSD")
	child_price_usd: int = Field(..., alias="childPriceUSD")
	adult_price_kes: int = Field(..., alias="adultPriceKES")
	child_price_kes: int = Field(..., alias="childPriceKES")
	total_price_usd: int = Field(..., alias="totalPriceUSD")
	total_price_kes: int = Field(..., alias="totalPriceKES")
	deposit_amount: int = Field(..., alias="depositAmount")
	deposit_amount_kes: int = Field(..., alias="depositAmountKES")
	balance_usd: int = Field(..., alias="balanceUSD")
	balance_kes: int = Field(..., alias="balanceKES")


# ===== BOOKING SCHEMAS =====
class BookingCreate(ApiModel):
	# Ownership never comes from user_id; it is kept only for clients that still send it
	user_id: Optional[str] = Field(None, alias="userId")
	email: EmailStr
	name: Optional[str] = None
	phone: Optional[str] = None
	booking_type: Literal["attraction", "safari"] = Field(..., alias="bookingType")
	item_id: str = Field(..., alias="itemId")
	travel_date: date = Field(..., alias="travelDate")
	adults: int
	children: int = 0
	accommodation_type: Optional[str] = Field(None, alias="accommodationType")
	special_requests: Optional[str] = Field(None, alias="specialRequests")
	total_price_usd: Optional[int] = Field(None, alias="totalPriceUSD")
	total_price_kes: Optional[int] = Field(None, alias="totalPriceKES")
	deposit_amount: Optional[int] = Field(None, alias="depositAmount")
	deposit_paid: bool = Field(False, alias="depositPaid")
	status: str = "pending"
	payment_status: str = Field("unpaid", alias="paymentStatus")


class BookingUpdate(ApiModel):
	travel_date: Optional[date] = Field(None, alias="travelDate")
	adults: Optional[int] = None
	children: Optional[int] = None
	accommodation_type: Optional[str] = Field(None, alias="accommodationType")
	special_requests: Optional[str] = Field(None, alias="specialRequests")
	total_price_usd: Optional[int] = Field(None, alias="totalPriceUSD")
	total_price_kes: Optional[int] = Field(None, alias="totalPriceKES")
	deposit_amount: Optional[int] = Field(None, alias="depositAmount")
	deposit_paid: Optional[bool] = Field(None, alias="depositPaid")
	status: Optional[str] = None
	payment_status: Optional[str] = Field(None, alias="paymentStatus")


class TransitionRequest(ApiModel):
	axis: StatusAxis = StatusAxis.STATUS
	target: str


class BookingResponse(ApiModel):
	id: str
	user_id: str = Field(..., alias="userId")
	booking_type: str = Field(..., alias="bookingType")
	item_id: str = Field(..., alias="itemId")
	booking_date: datetime = Field(..., alias="bookingDate")
	travel_date: date = Field(..., alias="travelDate")
	adults: int
	children: int
	accommodation_type: Optional[str] = Field(None, alias="accommodationType")
	special_requests: Optional[str] = Field(None, alias="specialRequests")
	total_price_usd: int = Field(..., alias="totalPriceUSD")
	total_price_kes: int = Field(..., alias="totalPriceKES")
	deposit_amount: int = Field(..., alias="depositAmount")
	deposit_paid: bool = Field(..., alias="depositPaid")
	status: BookingStatus
	payment_status: PaymentStatus = Field(..., alias="paymentStatus")
	updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class BookingListResponse(ApiModel):
	bookings: List[BookingResponse]
	total: int


# ===== PAYMENT SCHEMAS =====
class PaymentCreate(ApiModel):
	booking_id: str = Field(..., alias="bookingId")
	amount: int = Field(..., gt=0)
	payment_type: Literal["deposit", "final"] = Field(..., alias="paymentType")
	payment_method: Literal["card", "mpesa", "paypal"] = Field(..., alias="paymentMethod")


class PaymentResponse(ApiModel):
	id: str
	booking_id: str = Field(..., alias="bookingId")
	user_id: str = Field(..., alias="userId")
	amount: int
	payment_type: str = Field(..., alias="paymentType")
	payment_method: str = Field(..., alias="paymentMethod")
	status: str
	created_at: datetime = Field(..., alias="createdAt")


# ===== MESSAGE SCHEMAS =====
class MessageCreate(ApiModel):
	recipient_id: str = Field(..., alias="recipientId")
	content: str = Field(..., min_length=1, max_length=5000)
	booking_id: Optional[str] = Field(None, alias="bookingId")


class MessageResponse(ApiModel):
	id: str
	sender_id: str = Field(..., alias="senderId")
	recipient_id: str = Field(..., alias="recipientId")
	booking_id: Optional[str] = Field(None, alias="bookingId")
	content: str
	is_read: bool = Field(..., alias="isRead")
	created_at: datetime = Field(..., alias="createdAt")


class ChatUserResponse(ApiModel):
	user_id: str = Field(..., alias="userId")
	name: str
	role: str
	last_message: str = Field(..., alias="lastMessage")
	last_message_at: datetime = Field(..., alias="lastMessageAt")
	unread_count: int = Field(..., alias="unreadCount")


# ===== REVIEW SCHEMAS =====
class ReviewCreate(ApiModel):
	attraction_id: str = Field(..., alias="attractionId")
	rating: int = Field(..., ge=1, le=5)
	comment: str = Field("", max_length=5000)


class ReviewResponse(ApiModel):
	id: str
	user_id: str = Field(..., alias="userId")
	attraction_id: str = Field(..., alias="attractionId")
	rating: int
	comment: str
	created_at: datetime = Field(..., alias="createdAt")
	updated_at: Optional[datetime] = Field(None, alias="updatedAt")


# ===== RESPONSE WRAPPERS =====
class SuccessResponse(ApiModel):
	success: bool = True
	message: str
	data: Optional[dict] = None


class ErrorResponse(ApiModel):
	success: bool = False
	message: str
	error_code: Optional[str] = None
	details: Optional[dict] = None
