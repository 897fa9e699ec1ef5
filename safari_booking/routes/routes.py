from fastapi import FastAPI

from safari_booking.controllers.auth_controller import router as auth_router
from safari_booking.controllers.booking_controller import router as booking_router
from safari_booking.controllers.catalog_controller import router as catalog_router
from safari_booking.controllers.message_controller import router as message_router
from safari_booking.controllers.payment_controller import router as payment_router
from safari_booking.controllers.review_controller import router as review_router


def include_app_routes(app: FastAPI) -> None:
	app.include_router(auth_router)
	app.include_router(catalog_router)
	app.include_router(booking_router)
	app.include_router(payment_router)
	app.include_router(message_router)
	app.include_router(review_router)
