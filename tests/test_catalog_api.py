from conftest import booking_payload


class TestCatalog:
	def test_list_and_featured_filter(self, client, attraction, safari):
		assert [a["id"] for a in client.get("/attractions").json()] == [attraction.id]
		assert client.get("/attractions", params={"featured": False}).json() == []
		safaris = client.get("/safaris").json()
		assert safaris[0]["priceKES"] == 39000
		assert safaris[0]["durationDays"] == 3

	def test_missing_item(self, client):
		response = client.get("/safaris/missing")
		assert response.status_code == 404
		assert response.json()["success"] is False

	def test_quote(self, client, attraction):
		response = client.post(
			"/quotes", json={"bookingType": "attraction", "itemId": attraction.id, "adults": 2, "children": 1}
		)
		assert response.status_code == 200, response.text
		body = response.json()
		assert body["childPriceUSD"] == 105
		assert body["totalPriceUSD"] == 405
		assert body["depositAmount"] == 122
		assert body["balanceUSD"] == 283
		assert body["totalPriceKES"] == 52650
		assert body["depositAmountKES"] + body["balanceKES"] == body["totalPriceKES"]

	def test_quote_rejects_empty_party(self, client, attraction):
		response = client.post(
			"/quotes", json={"bookingType": "attraction", "itemId": attraction.id, "adults": 0, "children": 2}
		)
		assert response.status_code == 422
		assert response.json()["error_code"] == "validation_error"

	def test_health(self, client):
		assert client.get("/health").json() == {"status": "ok"}


class TestCatalogAdmin:
	def test_create_update_delete(self, admin_client, client):
		response = admin_client.post(
			"/safaris",
			json={"name": "Amboseli 2-Day", "location": "Kajiado", "priceUSD": 250, "priceKES": 32500, "durationDays": 2},
		)
		assert response.status_code == 201, response.text
		safari_id = response.json()["id"]
		assert client.get(f"/safaris/{safari_id}").json()["durationDays"] == 2

		response = admin_client.put(f"/safaris/{safari_id}", json={"featured": True, "durationDays": 3})
		assert response.json()["featured"] is True
		assert response.json()["priceUSD"] == 250

		assert admin_client.delete(f"/safaris/{safari_id}").json()["success"] is True
		assert client.get(f"/safaris/{safari_id}").status_code == 404

	def test_price_change_keeps_existing_bookings(self, admin_client, client, attraction):
		booking_id = client.post("/bookings", json=booking_payload(attraction)).json()["id"]

		response = admin_client.put(f"/attractions/{attraction.id}", json={"priceUSD": 200, "priceKES": 26000})
		assert response.status_code == 200, response.text
		booking = admin_client.get(f"/bookings/{booking_id}").json()
		assert (booking["totalPriceUSD"], booking["totalPriceKES"]) == (405, 52650)

		quote = client.post("/quotes", json={"bookingType": "attraction", "itemId": attraction.id, "adults": 2, "children": 1})
		assert quote.json()["totalPriceUSD"] == 540

	def test_price_cannot_be_cleared_or_zero(self, admin_client, attraction):
		assert admin_client.put(f"/attractions/{attraction.id}", json={"priceUSD": None}).status_code == 422
		response = admin_client.put(f"/attractions/{attraction.id}", json={"priceKES": 0})
		assert response.status_code == 422
		assert response.json()["error_code"] == "validation_error"

	def test_customers_cannot_manage_catalog(self, customer_client, client, attraction):
		response = customer_client.put(f"/attractions/{attraction.id}", json={"priceUSD": 1})
		assert response.status_code == 403
		assert client.delete(f"/attractions/{attraction.id}").status_code == 401
		assert client.get(f"/attractions/{attraction.id}").json()["priceUSD"] == 150


class TestReviews:
	def test_resubmitting_replaces_review_and_recomputes_rating(self, customer_client, admin_client, client, attraction):
		review = {"attractionId": attraction.id, "rating": 2, "comment": "Crowded"}
		assert customer_client.post("/reviews", json=review).status_code == 201
		review.update(rating=4, comment="Better on a weekday")
		assert customer_client.post("/reviews", json=review).status_code == 201
		assert admin_client.post("/reviews", json={"attractionId": attraction.id, "rating": 5}).status_code == 201

		reviews = client.get("/reviews", params={"attractionId": attraction.id}).json()
		assert sorted(r["rating"] for r in reviews) == [4, 5]
		item = client.get(f"/attractions/{attraction.id}").json()
		assert item["reviewCount"] == 2
		assert item["rating"] == 4.5

	def test_rating_bounds_and_session(self, customer_client, client, attraction):
		assert customer_client.post("/reviews", json={"attractionId": attraction.id, "rating": 6}).status_code == 422
		assert client.post("/reviews", json={"attractionId": attraction.id, "rating": 3}).status_code == 401
		assert customer_client.post("/reviews", json={"attractionId": "missing", "rating": 3}).status_code == 404
