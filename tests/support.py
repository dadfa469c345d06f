import unittest

from fastapi.testclient import TestClient

from expense_api.config import Settings
from expense_api.main import create_app


class ApiTestCase(unittest.TestCase):
    """Runs every test against a fresh app backed by in-memory SQLite."""

    def setUp(self):
        self.app = create_app(Settings(database_url="sqlite://"))
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def register(self, name="Alice", email="alice@example.com", password="secret"):
        resp = self.client.post(
            "/register", json={"name": name, "email": email, "password": password}
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["id"]

    def category_id(self, name):
        categories = self.client.get("/categories").json()
        return next(c["id"] for c in categories if c["name"] == name)

    def auth(self, user_id):
        return {"User-ID": str(user_id)}

    def add_transaction(self, user_id, category, amount, date=None, description=""):
        body = {
            "category_id": self.category_id(category),
            "amount": amount,
            "description": description,
        }
        if date is not None:
            body["date"] = date
        resp = self.client.post("/transactions/", json=body, headers=self.auth(user_id))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def count_rows(self, orm_cls):
        for db in self.app.state.database.session():
            return db.query(orm_cls).count()
