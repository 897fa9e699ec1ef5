from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from safari_booking.core.security import SessionService, get_session_service
from safari_booking.db.models import User
from safari_booking.db.session import get_db
from safari_booking.schemas import LoginRequest, RegisterRequest, SessionResponse, SuccessResponse, UserResponse
from safari_booking.services.auth_service import AuthService, clear_session_cookie, require_user, set_session_cookie

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
def register(
	payload: RegisterRequest,
	response: Response,
	db: Session = Depends(get_db),
	sessions: SessionService = Depends(get_session_service),
):
	user, token = AuthService.register(payload, db=db, sessions=sessions)
	set_session_cookie(response, token, sessions)
	return SessionResponse(user=UserResponse.model_validate(user))


@router.post("/login", response_model=SessionResponse)
def login(
	payload: LoginRequest,
	response: Response,
	db: Session = Depends(get_db),
	sessions: SessionService = Depends(get_session_service),
):
	user, token = AuthService.login(email=payload.email, password=payload.password, db=db, sessions=sessions)
	set_session_cookie(response, token, sessions)
	return SessionResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=SuccessResponse)
def logout(response: Response):
	clear_session_cookie(response)
	return SuccessResponse(message="Logged out")


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(require_user)):
	return user
