"""HTTP tests for ratings, orders and health probes."""

from bisbis import __version__


class TestRatings:
    def test_added_and_average_updated(self, client, store, taizu):
        store.seed_rating(taizu, 5)
        response = client.post("/ratings", json={"restaurantId": taizu, "rating": 4})
        assert response.status_code == 200
        assert response.content == b""
        assert store.restaurants[taizu]["average_rating"] == 4.5

    def test_out_of_range(self, client, taizu):
        response = client.post("/ratings", json={"restaurantId": taizu, "rating": 5.01})
        assert response.status_code == 400
        assert response.text == "Bad Request. rating must be a number between 0 and 5"

    def test_malformed_restaurant_id(self, client):
        response = client.post("/ratings", json={"restaurantId": "1", "rating": 4})
        assert response.status_code == 400
        assert response.text == "Bad Request. restaurantId must be a number"

    def test_unknown_restaurant(self, client):
        response = client.post("/ratings", json={"restaurantId": 3, "rating": 4})
        assert response.status_code == 404

    def test_store_failure(self, client, store, taizu):
        store.fail_on.add("recompute_average_rating")
        response = client.post("/ratings", json={"restaurantId": taizu, "rating": 4})
        assert response.status_code == 500
        assert store.ratings == {}

    def test_huge_integer_rating(self, client, taizu):
        body = b'{"restaurantId": %d, "rating": 1%s}' % (taizu, b"0" * 400)
        response = client.post("/ratings", content=body)
        assert response.status_code == 400
        assert response.text == "Bad Request. rating must be a number between 0 and 5"

    def test_huge_integer_restaurant_id(self, client):
        body = b'{"restaurantId": 1%s, "rating": 3}' % (b"0" * 400)
        response = client.post("/ratings", content=body)
        assert response.status_code == 400
        assert response.text == "Bad Request. restaurantId must be a number"


class TestOrders:
    def test_duplicate_dishes_merged(self, client, store, taizu):
        response = client.post(
            "/order",
            json={
                "restaurantId": taizu,
                "orderItems": [
                    {"dishId": 1, "amount": 2},
                    {"dishId": 2, "amount": 1},
                    {"dishId": 1, "amount": 3},
                ],
            },
        )
        assert response.status_code == 200
        assert response.json() == {"orderId": 1}
        assert store.orders[1]["order_items"] == [
            {"dishId": 1, "amount": 5},
            {"dishId": 2, "amount": 1},
        ]

    def test_dish_not_on_menu(self, client, store, taizu):
        response = client.post(
            "/order",
            json={"restaurantId": taizu, "orderItems": [{"dishId": 4, "amount": 1}]},
        )
        assert response.status_code == 404
        assert response.text.endswith("menu: 4")
        assert store.orders == {}

    def test_bad_item(self, client, taizu):
        response = client.post(
            "/order",
            json={"restaurantId": taizu, "orderItems": [{"dishId": 1, "amount": 0}]},
        )
        assert response.status_code == 400
        assert "amount property at index 0" in response.text

    def test_missing_items(self, client, taizu):
        response = client.post("/order", json={"restaurantId": taizu})
        assert response.status_code == 400
        assert response.text == "Bad Request. Required properties are missing: orderItems"

    def test_forbidden_id(self, client, taizu):
        response = client.post(
            "/order",
            json={"id": 1, "restaurantId": taizu, "orderItems": [{"dishId": 1, "amount": 1}]},
        )
        assert response.status_code == 422


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "version": __version__}

    def test_ready(self, client):
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json() == {"db": "ok"}

    def test_not_ready(self, client, store):
        store.fail_on.add("ping")
        assert client.get("/ready").status_code == 503
