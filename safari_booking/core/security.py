from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from passlib.hash import bcrypt

from safari_booking.core.config import Settings, settings
from safari_booking.core.exceptions import InvalidSession

ROLES = ("customer", "admin")


def hash_password(plain_password: str) -> str:
	return bcrypt.hash(plain_password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
	if not hashed_password:
		return False
	try:
		return bcrypt.verify(plain_password, hashed_password)
	except ValueError:
		# Malformed hash in the users table
		return False


@dataclass(frozen=True)
class SessionClaims:
	id: str
	role: str
	issued_at: datetime
	expires_at: datetime


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


class SessionService:
	"""Stateless signed sessions: the token itself carries ``id`` and ``role``."""

	def __init__(
		self,
		secret: str,
		algorithm: str = "HS256",
		ttl: timedelta = timedelta(days=7),
		clock: Callable[[], datetime] = _utcnow,
	) -> None:
		self.secret = secret
		self.algorithm = algorithm
		self.ttl = ttl
		self.clock = clock

	@classmethod
	def from_settings(cls, config: Settings) -> "SessionService":
		return cls(
			secret=config.jwt_secret,
			algorithm=config.jwt_algorithm,
			ttl=timedelta(days=config.session_ttl_days),
		)

	def issue(self, user_id: str, role: str) -> str:
		if role not in ROLES:
			raise ValueError(f"unknown role: {role}")
		issued_at = self.clock()
		to_encode = {
			"id": str(user_id),
			"role": role,
			"iat": issued_at,
			"exp": issued_at + self.ttl,
		}
		return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

	def decode(self, token: str) -> Optional[dict]:
		try:
			return jwt.decode(
				token,
				self.secret,
				algorithms=[self.algorithm],
				options={"require": ["exp", "iat"], "verify_exp": False, "verify_iat": False},
			)
		except jwt.PyJWTError:
			return None

	def verify(self, token: Optional[str]) -> SessionClaims:
		if not token:
			raise InvalidSession()
		payload = self.decode(token)
		if not payload:
			raise InvalidSession("Invalid session")
		user_id, role = payload.get("id"), payload.get("role")
		if not isinstance(user_id, str) or not user_id or role not in ROLES:
			raise InvalidSession("Invalid session")
		try:
			issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
			expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
		except (TypeError, ValueError, OverflowError):
			raise InvalidSession("Invalid session") from None
		# Expiry is checked against the injected clock, not wall time
		if expires_at <= self.clock():
			raise InvalidSession("Session expired")
		return SessionClaims(id=user_id, role=role, issued_at=issued_at, expires_at=expires_at)


def get_session_service() -> SessionService:
	return SessionService.from_settings(settings)
