"""
Tests for simulated deposit/final payments.
"""

import pytest

from conftest import booking_payload


@pytest.fixture
def booking(customer_client, attraction):
	response = customer_client.post("/bookings", json=booking_payload(attraction))
	assert response.status_code == 201, response.text
	return response.json()


def pay(client, booking, amount, payment_type, method="mpesa"):
	return client.post(
		"/payments",
		json={"bookingId": booking["id"], "amount": amount, "paymentType": payment_type, "paymentMethod": method},
	)


class TestPayments:
	def test_deposit_then_final(self, customer_client, booking):
		response = pay(customer_client, booking, 122, "deposit")
		assert response.status_code == 201, response.text
		current = customer_client.get(f"/bookings/{booking['id']}").json()
		assert current["paymentStatus"] == "partially_paid"
		assert current["depositPaid"] is True

		response = pay(customer_client, booking, 283, "final", method="card")
		assert response.status_code == 201, response.text
		assert customer_client.get(f"/bookings/{booking['id']}").json()["paymentStatus"] == "paid"

		payments = customer_client.get("/payments", params={"bookingId": booking["id"]}).json()
		assert sorted(p["amount"] for p in payments) == [122, 283]

	def test_full_payment_up_front(self, customer_client, booking):
		assert pay(customer_client, booking, 405, "final").status_code == 201
		assert customer_client.get(f"/bookings/{booking['id']}").json()["paymentStatus"] == "paid"

	def test_wrong_amount(self, customer_client, booking):
		response = pay(customer_client, booking, 100, "deposit")
		assert response.status_code == 422
		assert customer_client.get("/payments").json() == []

	def test_second_deposit_is_invalid_transition(self, customer_client, booking):
		pay(customer_client, booking, 122, "deposit")
		response = pay(customer_client, booking, 122, "deposit")
		assert response.status_code == 409
		assert response.json()["details"] == {"axis": "payment_status", "from": "partially_paid", "to": "partially_paid"}
		assert len(customer_client.get("/payments").json()) == 1

	def test_other_users_booking_not_found(self, make_client, booking):
		other = make_client()
		other.post("/auth/register", json={"name": "Other", "email": "other@example.com", "password": "long-enough-pw"})
		assert pay(other, booking, 122, "deposit").status_code == 404

	def test_cancelled_booking_cannot_be_paid(self, customer_client, admin_client, booking):
		admin_client.put(f"/bookings/{booking['id']}", json={"status": "cancelled"})
		assert pay(customer_client, booking, 122, "deposit").status_code == 422

	def test_requires_session(self, client, booking):
		assert pay(client, booking, 122, "deposit").status_code == 401

	def test_deposit_covering_total_settles_booking(self, customer_client, attraction):
		payload = booking_payload(attraction, totalPriceUSD=100, totalPriceKES=13000, depositAmount=100)
		booking = customer_client.post("/bookings", json=payload).json()

		assert pay(customer_client, booking, 100, "deposit").status_code == 201
		current = customer_client.get(f"/bookings/{booking['id']}").json()
		assert current["paymentStatus"] == "paid"
		assert current["depositPaid"] is True

		response = pay(customer_client, booking, 100, "final")
		assert response.status_code == 422
		assert response.json()["message"] == "Nothing is outstanding on this booking"

	def test_booking_without_deposit_is_paid_in_full(self, customer_client, attraction):
		payload = booking_payload(attraction, totalPriceUSD=100, totalPriceKES=13000, depositAmount=0)
		booking = customer_client.post("/bookings", json=payload).json()

		response = pay(customer_client, booking, 100, "deposit")
		assert response.status_code == 422
		assert "no deposit" in response.json()["message"]

		assert pay(customer_client, booking, 100, "final").status_code == 201
		assert customer_client.get(f"/bookings/{booking['id']}").json()["paymentStatus"] == "paid"
