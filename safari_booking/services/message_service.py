import logging
from typing import Optional

from sqlalchemy import and_, or_, select, update
from sqlalchemy.orm import Session

from safari_booking.core.exceptions import Forbidden, NotFound
from safari_booking.db.models import Booking, Message, User

logger = logging.getLogger(__name__)


class MessageService:
	@staticmethod
	def send(db: Session, sender: User, recipient_id: str, content: str, booking_id: Optional[str] = None) -> Message:
		recipient = db.get(User, recipient_id)
		if recipient is None:
			raise NotFound("Recipient not found")
		# Conversations are always between a customer and staff
		if sender.role != "admin" and recipient.role != "admin":
			raise Forbidden("Customers can only message staff")
		if booking_id is not None:
			booking = db.get(Booking, booking_id)
			# Other customers' bookings read as missing, as on GET /bookings/{id}
			if booking is None or (sender.role != "admin" and booking.user_id != sender.id):
				raise NotFound("Booking not found")

		message = Message(
			sender_id=sender.id,
			recipient_id=recipient.id,
			booking_id=booking_id,
			content=content.strip(),
		)
		db.add(message)
		db.commit()
		logger.info("Message %s sent from %s to %s", message.id, sender.id, recipient.id)
		return message

	@staticmethod
	def conversation(db: Session, user: User, other_id: str) -> list[Message]:
		query = select(Message).where(
			or_(
				and_(Message.sender_id == user.id, Message.recipient_id == other_id),
				and_(Message.sender_id == other_id, Message.recipient_id == user.id),
			)
		)
		return list(db.scalars(query.order_by(Message.created_at.asc())))

	@staticmethod
	def chat_users(db: Session, user: User) -> list[dict]:
		"""Everyone the user has a conversation with, most recent first, with unread counts."""
		messages = db.scalars(
			select(Message)
			.where(or_(Message.sender_id == user.id, Message.recipient_id == user.id))
			.order_by(Message.created_at.desc())
		)
		chats = {}
		for message in messages:
			other_id = message.recipient_id if message.sender_id == user.id else message.sender_id
			chat = chats.get(other_id)
			if chat is None:
				chat = chats[other_id] = {
					"user_id": other_id,
					"last_message": message.content,
					"last_message_at": message.created_at,
					"unread_count": 0,
				}
			if message.recipient_id == user.id and not message.is_read:
				chat["unread_count"] += 1

		users = {u.id: u for u in db.scalars(select(User).where(User.id.in_(list(chats))))}
		return [
			{**chat, "name": users[other_id].name, "role": users[other_id].role}
			for other_id, chat in chats.items()
			if other_id in users
		]

	@staticmethod
	def mark_read(db: Session, user: User, other_id: str) -> int:
		result = db.execute(
			update(Message)
			.where(Message.sender_id == other_id, Message.recipient_id == user.id, Message.is_read.is_(False))
			.values(is_read=True)
			.execution_options(synchronize_session=False)
		)
		db.commit()
		return result.rowcount
