from typing import Any, Optional


class BookingAppError(Exception):
	"""Base class for errors that map onto a 4xx/5xx JSON response."""

	status_code: int = 400
	error_code: str = "error"

	def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
		super().__init__(message)
		self.message = message
		self.details = details


class ValidationError(BookingAppError):
	status_code = 422
	error_code = "validation_error"


class InvalidTransition(BookingAppError):
	status_code = 409
	error_code = "invalid_transition"

	def __init__(self, axis: str, current: str, target: str) -> None:
		super().__init__(
			f"Invalid {axis} transition: {current} -> {target}",
			details={"axis": axis, "from": current, "to": target},
		)
		self.axis = axis
		self.current = current
		self.target = target


class InvalidSession(BookingAppError):
	status_code = 401
	error_code = "invalid_session"

	def __init__(self, message: str = "Not authenticated") -> None:
		super().__init__(message)


class InvalidCredentials(BookingAppError):
	status_code = 401
	error_code = "invalid_credentials"

	def __init__(self) -> None:
		# Same message for unknown email and wrong password
		super().__init__("Invalid credentials")


class Forbidden(BookingAppError):
	status_code = 403
	error_code = "forbidden"


class NotFound(BookingAppError):
	status_code = 404
	error_code = "not_found"


class ConflictError(BookingAppError):
	status_code = 409
	error_code = "conflict"
