from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from safari_booking.core.config import settings
from safari_booking.core.exceptions import BookingAppError
from safari_booking.routes.routes import include_app_routes
from safari_booking.schemas import ErrorResponse

# Setup logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	# Test database connection on startup
	try:
		from safari_booking.db.session import engine
		with engine.connect() as conn:
			conn.execute(text("SELECT 1"))
		logger.info("Database connection successful")
	except Exception as e:
		logger.warning(f"Database connection failed: {e}")
		logger.warning("Application will continue without database connection")
	yield


app = FastAPI(title="Safari Booking API", version="1.0.0", lifespan=lifespan)

# Credentials are required for the auth_token cookie, so origins must be explicit
app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.allowed_origins,
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)


def _error_response(status_code: int, message: str, error_code: str, details: dict | None = None) -> JSONResponse:
	body = ErrorResponse(message=message, error_code=error_code, details=details)
	return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(BookingAppError)
async def booking_app_error_handler(request: Request, exc: BookingAppError):
	return _error_response(exc.status_code, exc.message, exc.error_code, exc.details)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
	errors = exc.errors()
	first = errors[0] if errors else {}
	# Drop the "body"/"query" prefix so the field reads as the client sent it
	field = ".".join(str(part) for part in first.get("loc", ())[1:])
	reason = first.get("msg", "Invalid request")
	message = f"{field}: {reason}" if field else reason
	return _error_response(422, message, "validation_error", {"errors": jsonable_encoder(errors)})


@app.exception_handler(OperationalError)
async def store_unavailable_handler(request: Request, exc: OperationalError):
	logger.error(f"Database unavailable on {request.method} {request.url.path}: {exc.orig}")
	return _error_response(503, "Booking store unavailable, please try again later", "store_unavailable")


include_app_routes(app)

@app.get("/health")
def health_check():
	return {"status": "ok"}
