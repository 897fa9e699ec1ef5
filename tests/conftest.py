import os

# Keep the module-level engine away from the default MySQL URL
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from safari_booking.core.security import SessionService, get_session_service, hash_password
from safari_booking.db.models import Attraction, Safari, User
from safari_booking.db.session import Base, build_engine, build_sessionmaker, get_db
from safari_booking.main import app

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!!"
PASSWORD = "correct-horse-battery"
TRAVEL_DATE = (date.today() + timedelta(days=30)).isoformat()


@pytest.fixture
def engine(tmp_path):
	engine = build_engine(f"sqlite:///{tmp_path / 'bookings.db'}")
	Base.metadata.create_all(bind=engine)
	yield engine
	engine.dispose()


@pytest.fixture
def session_factory(engine):
	return build_sessionmaker(engine)


@pytest.fixture
def db(session_factory):
	with session_factory() as session:
		yield session


@pytest.fixture
def sessions():
	return SessionService(secret=TEST_SECRET)


@pytest.fixture
def make_client(session_factory, sessions):
	def override_get_db():
		session = session_factory()
		try:
			yield session
		finally:
			session.close()

	app.dependency_overrides[get_db] = override_get_db
	app.dependency_overrides[get_session_service] = lambda: sessions

	def factory() -> TestClient:
		return TestClient(app)

	yield factory
	app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
	return make_client()


@pytest.fixture
def attraction(db):
	item = Attraction(name="Nairobi National Park", location="Nairobi", price_usd=150, price_kes=19500, featured=True)
	db.add(item)
	db.commit()
	return item


@pytest.fixture
def safari(db):
	item = Safari(name="Maasai Mara 3-Day", location="Narok", duration_days=3, price_usd=300, price_kes=39000)
	db.add(item)
	db.commit()
	return item


@pytest.fixture
def customer(db):
	user = User(name="Wanjiru", email="wanjiru@example.com", password_hash=hash_password(PASSWORD), role="customer")
	db.add(user)
	db.commit()
	return user


@pytest.fixture
def admin(db):
	user = User(name="Staff", email="staff@example.com", password_hash=hash_password(PASSWORD), role="admin")
	db.add(user)
	db.commit()
	return user


def login(client: TestClient, email: str, password: str = PASSWORD) -> TestClient:
	response = client.post("/auth/login", json={"email": email, "password": password})
	assert response.status_code == 200, response.text
	return client


@pytest.fixture
def customer_client(make_client, customer):
	return login(make_client(), customer.email)


@pytest.fixture
def admin_client(make_client, admin):
	return login(make_client(), admin.email)


def booking_payload(item, booking_type: str = "attraction", **overrides) -> dict:
	payload = {
		"email": "guest@example.com",
		"name": "Guest Traveller",
		"bookingType": booking_type,
		"itemId": item.id,
		"travelDate": TRAVEL_DATE,
		"adults": 2,
		"children": 1,
		"status": "pending",
		"paymentStatus": "unpaid",
	}
	payload.update(overrides)
	return payload
