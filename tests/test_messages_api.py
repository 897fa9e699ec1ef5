from conftest import booking_payload


class TestMessages:
	def test_customer_and_staff_conversation(self, customer_client, admin_client, customer, admin):
		response = customer_client.post("/messages", json={"recipientId": admin.id, "content": "Is lunch included?"})
		assert response.status_code == 201, response.text
		response = admin_client.post("/messages", json={"recipientId": customer.id, "content": "Yes, a packed lunch."})
		assert response.status_code == 201

		thread = customer_client.get("/messages", params={"userId": admin.id}).json()
		assert [m["content"] for m in thread] == ["Is lunch included?", "Yes, a packed lunch."]
		assert thread[0]["isRead"] is False

		marked = admin_client.post("/messages/read", params={"userId": customer.id}).json()
		assert marked["data"] == {"updated": 1}
		thread = admin_client.get("/messages", params={"userId": customer.id}).json()
		assert thread[0]["isRead"] is True
		assert thread[1]["isRead"] is False

	def test_customers_cannot_message_each_other(self, make_client, customer_client):
		other = make_client()
		registered = other.post(
			"/auth/register", json={"name": "Other", "email": "other@example.com", "password": "long-enough-pw"}
		).json()
		response = customer_client.post("/messages", json={"recipientId": registered["user"]["id"], "content": "hi"})
		assert response.status_code == 403

	def test_unknown_recipient(self, customer_client):
		response = customer_client.post("/messages", json={"recipientId": "missing", "content": "hello"})
		assert response.status_code == 404

	def test_requires_session(self, client, admin):
		assert client.post("/messages", json={"recipientId": admin.id, "content": "hello"}).status_code == 401

	def test_booking_reference_must_be_own(self, customer_client, admin_client, client, admin, customer, attraction):
		own = customer_client.post("/bookings", json=booking_payload(attraction)).json()["id"]
		others = client.post("/bookings", json=booking_payload(attraction, email="walkin@example.com")).json()["id"]

		payload = {"recipientId": admin.id, "content": "About my trip", "bookingId": others}
		response = customer_client.post("/messages", json=payload)
		assert response.status_code == 404
		assert response.json()["message"] == "Booking not found"

		payload["bookingId"] = own
		assert customer_client.post("/messages", json=payload).json()["bookingId"] == own
		response = admin_client.post("/messages", json={"recipientId": customer.id, "content": "Noted", "bookingId": others})
		assert response.status_code == 201

	def test_chat_users(self, customer_client, admin_client, customer, admin):
		customer_client.post("/messages", json={"recipientId": admin.id, "content": "Hello"})
		customer_client.post("/messages", json={"recipientId": admin.id, "content": "Any news?"})

		chats = admin_client.get("/messages/users").json()
		assert len(chats) == 1
		assert chats[0]["userId"] == customer.id
		assert chats[0]["name"] == customer.name
		assert chats[0]["lastMessage"] == "Any news?"
		assert chats[0]["unreadCount"] == 2

		admin_client.post("/messages/read", params={"userId": customer.id})
		assert admin_client.get("/messages/users").json()[0]["unreadCount"] == 0
		mine = customer_client.get("/messages/users").json()
		assert [(c["userId"], c["role"], c["unreadCount"]) for c in mine] == [(admin.id, "admin", 0)]
