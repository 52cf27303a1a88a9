import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from farm_service_api.app.core.db import Database
from farm_service_api.app.main import create_app


BOOKING = {
    "name": "Ann",
    "age": 30,
    "address": "Y",
    "farmSize": 2.5,
    "equipment": "tractor",
    "serviceDate": "2024-06-01",
}


class FarmServiceApiTests(unittest.TestCase):
    def setUp(self):
        self.database = Database(":memory:")
        self.client = TestClient(create_app(self.database))
        # Entering the client runs the lifespan (connect + schema).
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def register(self, **overrides):
        payload = {"telegramId": "u1", "name": "Ann", "phone": "555", "location": "X"}
        payload.update(overrides)
        return self.client.post("/api/register", json=payload)

    def test_register_book_and_list_scenario(self):
        response = self.register()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"success": True, "userId": 1, "message": "Registration successful"},
        )

        user = self.client.get("/api/user/u1").json()
        self.assertTrue(user["success"])
        self.assertEqual(user["data"]["id"], 1)
        self.assertEqual(user["data"]["telegramId"], "u1")
        self.assertEqual(user["data"]["name"], "Ann")
        self.assertEqual(user["data"]["phone"], "555")
        self.assertEqual(user["data"]["location"], "X")
        self.assertIsNotNone(user["data"]["registeredAt"])

        booking = self.client.post("/api/bookings", json={"userId": 1, **BOOKING}).json()
        self.assertEqual(
            booking,
            {"success": True, "bookingId": 1, "message": "Booking created successfully"},
        )

        listing = self.client.get("/api/bookings/1").json()
        self.assertTrue(listing["success"])
        self.assertEqual(len(listing["data"]), 1)
        row = listing["data"][0]
        self.assertEqual(row["id"], 1)
        self.assertEqual(row["userId"], 1)
        self.assertEqual(row["status"], "pending")
        self.assertEqual(row["farmSize"], 2.5)
        self.assertEqual(row["serviceDate"], "2024-06-01")
        self.assertIsNotNone(row["createdAt"])

    def test_register_twice_replaces_profile(self):
        first = self.register().json()
        second = self.register(name="Anna", phone="777", location="Z").json()
        self.assertEqual(first["userId"], second["userId"])

        data = self.client.get("/api/user/u1").json()["data"]
        self.assertEqual((data["name"], data["phone"], data["location"]), ("Anna", "777", "Z"))

        count = self.database.connection.execute(
            "SELECT COUNT(*) FROM users WHERE telegramId = 'u1'"
        ).fetchone()[0]
        self.assertEqual(count, 1)

    def test_register_without_location_clears_it(self):
        self.register()
        self.client.post("/api/register", json={"telegramId": "u1", "name": "Ann", "phone": "555"})
        self.assertIsNone(self.client.get("/api/user/u1").json()["data"]["location"])

    def test_numeric_telegram_id_is_stored_as_text(self):
        self.register(telegramId=123456789)
        data = self.client.get("/api/user/123456789").json()["data"]
        self.assertEqual(data["telegramId"], "123456789")

    def test_unknown_user_is_not_an_error(self):
        response = self.client.get("/api/user/nobody")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "data": None})

    def test_missing_required_field_returns_storage_error(self):
        response = self.client.post("/api/register", json={"telegramId": "u2", "phone": "555"})
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("NOT NULL constraint failed: users.name", body["error"])

    def test_booking_for_unknown_user_is_accepted(self):
        created = self.client.post("/api/bookings", json={"userId": 42, **BOOKING}).json()
        self.assertTrue(created["success"])
        data = self.client.get("/api/bookings/42").json()["data"]
        self.assertEqual([row["id"] for row in data], [created["bookingId"]])

    def test_booking_fields_are_not_validated(self):
        payload = {"userId": 1, **BOOKING, "age": -5, "serviceDate": "not-a-date"}
        self.assertTrue(self.client.post("/api/bookings", json=payload).json()["success"])
        row = self.client.get("/api/bookings/1").json()["data"][0]
        self.assertEqual(row["age"], -5)
        self.assertEqual(row["serviceDate"], "not-a-date")

    def test_booking_values_are_stored_as_sent(self):
        payload = {"userId": 1, **BOOKING, "age": "thirty", "farmSize": "2.5 acres"}
        response = self.client.post("/api/bookings", json=payload)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])

        row = self.client.get("/api/bookings/1").json()["data"][0]
        self.assertEqual(row["age"], "thirty")
        self.assertEqual(row["farmSize"], "2.5 acres")

    def test_textual_user_id_matches_numeric_rows(self):
        self.client.post("/api/bookings", json={"userId": "7", **BOOKING})
        data = self.client.get("/api/bookings/7").json()["data"]
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["userId"], 7)

    def test_non_numeric_user_id_lists_nothing(self):
        self.client.post("/api/bookings", json={"userId": 1, **BOOKING})
        self.client.post("/api/processing", json={"userId": 1, "question": "q", "response": "r", "type": "t"})

        for path in ("/api/bookings/abc", "/api/processing/abc"):
            response = self.client.get(path)
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"success": True, "data": []})

    def test_register_without_body_returns_storage_error(self):
        response = self.client.post("/api/register")
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertIn("NOT NULL constraint failed: users.name", body["error"])

    def test_booking_without_body_is_accepted(self):
        response = self.client.post("/api/bookings")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["bookingId"], 1)
        row = self.database.connection.execute("SELECT userId, status FROM bookings").fetchone()
        self.assertEqual(tuple(row), (None, "pending"))

    def test_bookings_are_listed_newest_first(self):
        for _ in range(3):
            self.client.post("/api/bookings", json={"userId": 1, **BOOKING})
        # Same-second inserts fall back to insertion order.
        data = self.client.get("/api/bookings/1").json()["data"]
        self.assertEqual([row["id"] for row in data], [3, 2, 1])

        conn = self.database.connection
        conn.execute("UPDATE bookings SET createdAt = '2024-01-03 10:00:00' WHERE id = 1")
        conn.execute("UPDATE bookings SET createdAt = '2024-01-01 10:00:00' WHERE id = 2")
        conn.execute("UPDATE bookings SET createdAt = '2024-01-02 10:00:00' WHERE id = 3")
        data = self.client.get("/api/bookings/1").json()["data"]
        self.assertEqual([row["id"] for row in data], [1, 3, 2])

    def test_bookings_are_filtered_by_user(self):
        self.client.post("/api/bookings", json={"userId": 1, **BOOKING})
        self.client.post("/api/bookings", json={"userId": 2, **BOOKING})
        data = self.client.get("/api/bookings/2").json()["data"]
        self.assertEqual([row["userId"] for row in data], [2])
        self.assertEqual(self.client.get("/api/bookings/3").json(), {"success": True, "data": []})

    def test_processing_guides(self):
        response = self.client.post(
            "/api/processing",
            json={"userId": 1, "question": "How to dry maize?", "response": "Slowly.", "type": "drying"},
        )
        self.assertEqual(
            response.json(),
            {"success": True, "guideId": 1, "message": "Processing guide saved"},
        )
        self.client.post(
            "/api/processing",
            json={"userId": 1, "question": "Storage?", "response": "Keep dry.", "type": "storage"},
        )

        data = self.client.get("/api/processing/1").json()["data"]
        self.assertEqual([row["type"] for row in data], ["storage", "drying"])
        self.assertEqual(data[1]["question"], "How to dry maize?")
        self.assertEqual(data[1]["response"], "Slowly.")
        self.assertEqual(self.client.get("/api/processing/9").json()["data"], [])

    def test_malformed_body_uses_error_envelope(self):
        response = self.client.post(
            "/api/register",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertTrue(body["error"])

    def test_query_failure_uses_error_envelope(self):
        self.database.connection.execute("DROP TABLE processingGuides")
        response = self.client.get("/api/processing/1")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"success": False, "error": "no such table: processingGuides"})

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})


class LifespanTests(unittest.TestCase):
    def test_database_is_closed_on_shutdown(self):
        database = Database(":memory:")
        with TestClient(create_app(database)) as client:
            self.assertTrue(database.is_connected)
            self.assertEqual(client.get("/api/bookings/1").json()["data"], [])
        self.assertFalse(database.is_connected)

    def test_startup_fails_when_database_cannot_be_opened(self):
        with tempfile.NamedTemporaryFile() as not_a_directory:
            # The database directory cannot be created below a regular file.
            database = Database(os.path.join(not_a_directory.name, "db.sqlite"))
            with self.assertRaises(OSError):
                with TestClient(create_app(database)):
                    pass
            self.assertFalse(database.is_connected)


if __name__ == "__main__":
    unittest.main()
