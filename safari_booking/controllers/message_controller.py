from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from safari_booking.db.models import User
from safari_booking.db.session import get_db
from safari_booking.schemas import ChatUserResponse, MessageCreate, MessageResponse, SuccessResponse
from safari_booking.services.auth_service import require_user
from safari_booking.services.message_service import MessageService

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def send_message(payload: MessageCreate, db: Session = Depends(get_db), user: User = Depends(require_user)):
	return MessageService.send(db, user, payload.recipient_id, payload.content, payload.booking_id)


@router.get("", response_model=List[MessageResponse])
def get_conversation(
	other_id: str = Query(..., alias="userId"),
	db: Session = Depends(get_db),
	user: User = Depends(require_user),
):
	return MessageService.conversation(db, user, other_id)


@router.get("/users", response_model=List[ChatUserResponse])
def list_chat_users(db: Session = Depends(get_db), user: User = Depends(require_user)):
	return MessageService.chat_users(db, user)


@router.post("/read", response_model=SuccessResponse)
def mark_read(
	other_id: str = Query(..., alias="userId"),
	db: Session = Depends(get_db),
	user: User = Depends(require_user),
):
	updated = MessageService.mark_read(db, user, other_id)
	return SuccessResponse(message="Messages marked as read", data={"updated": updated})
