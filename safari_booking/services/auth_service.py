import logging
from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from safari_booking.core.config import settings
from safari_booking.core.exceptions import ConflictError, Forbidden, InvalidCredentials, InvalidSession
from safari_booking.core.security import SessionService, get_session_service, hash_password, verify_password
from safari_booking.db.models import User
from safari_booking.db.session import get_db
from safari_booking.schemas import RegisterRequest

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
	return email.strip().lower()


class AuthService:
	@staticmethod
	def register(payload: RegisterRequest, db: Session, sessions: SessionService) -> tuple[User, str]:
		email = normalize_email(payload.email)
		if AuthService.get_user_by_email(db, email) is not None:
			raise ConflictError("Email already in use")
		user = User(
			name=payload.name.strip(),
			email=email,
			phone=payload.phone,
			password_hash=hash_password(payload.password),
			role="customer",
		)
		db.add(user)
		try:
			db.commit()
		except IntegrityError:
			db.rollback()
			raise ConflictError("Email already in use")
		logger.info("Registered user %s", user.id)
		return user, sessions.issue(user.id, user.role)

	@staticmethod
	def login(email: str, password: str, db: Session, sessions: SessionService) -> tuple[User, str]:
		user = AuthService.get_user_by_email(db, normalize_email(email))
		if not user or not verify_password(password, user.password_hash):
			logger.warning("Failed login attempt")
			raise InvalidCredentials()
		logger.info("User %s logged in", user.id)
		return user, sessions.issue(user.id, user.role)

	@staticmethod
	def get_user_by_email(db: Session, email: str) -> Optional[User]:
		return db.scalars(select(User).where(User.email == normalize_email(email))).first()

	@staticmethod
	def find_or_create_user(db: Session, email: str, name: Optional[str] = None, phone: Optional[str] = None) -> User:
		"""Return the persisted user for ``email``, creating a customer if needed.

		Runs inside the caller's transaction and only flushes, so the new user
		and whatever references it commit (or roll back) together. The id is
		always generated here; callers never supply one.
		"""
		email = normalize_email(email)
		user = AuthService.get_user_by_email(db, email)
		if user is not None:
			return user
		user = User(
			name=(name or "").strip() or email.split("@", 1)[0],
			email=email,
			phone=phone,
			password_hash=None,
			role="customer",
		)
		db.add(user)
		try:
			db.flush()
		except IntegrityError:
			db.rollback()
			raise ConflictError("A user with this email was created concurrently, please retry")
		logger.info("Created customer %s from booking email", user.id)
		return user

	@staticmethod
	def resolve_user(token: Optional[str], db: Session, sessions: SessionService) -> Optional[User]:
		if not token:
			return None
		try:
			claims = sessions.verify(token)
		except InvalidSession:
			return None
		return db.get(User, claims.id)


def set_session_cookie(response: Response, token: str, sessions: SessionService) -> None:
	response.set_cookie(
		key=settings.session_cookie_name,
		value=token,
		max_age=int(sessions.ttl.total_seconds()),
		path="/",
		secure=settings.cookie_secure,
		httponly=True,
		samesite="lax",
	)


def clear_session_cookie(response: Response) -> None:
	response.delete_cookie(
		key=settings.session_cookie_name,
		path="/",
		secure=settings.cookie_secure,
		httponly=True,
		samesite="lax",
	)


def get_current_user(
	request: Request,
	db: Session = Depends(get_db),
	sessions: SessionService = Depends(get_session_service),
) -> User | None:
	token = request.cookies.get(settings.session_cookie_name)
	return AuthService.resolve_user(token, db, sessions)


def require_user(user: User | None = Depends(get_current_user)) -> User:
	if user is None:
		raise InvalidSession()
	return user


def require_admin(user: User = Depends(require_user)) -> User:
	# Role comes from the stored user, so a demoted admin loses access immediately
	if user.role != "admin":
		raise Forbidden("Admin access required")
	return user
