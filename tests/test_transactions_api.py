import unittest
from datetime import date
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from expense_api.data.repositories.transaction_repository import TransactionORM
from tests.support import ApiTestCase


def _store_down():
    return OperationalError("SELECT", {}, Exception("db down"))


class TestUserIdHeader(ApiTestCase):
    def test_missing_header_never_reaches_store_or_handler(self):
        with patch(
            "expense_api.domain.services.auth_service.get_user"
        ) as get_user, patch(
            "expense_api.presentation.transactions_api.list_transactions"
        ) as handler_logic:
            for method, path in (
                ("get", "/transactions/"),
                ("post", "/transactions/"),
                ("get", "/transactions/summary?month=03&year=2024"),
            ):
                resp = self.client.request(method, path, json={})
                self.assertEqual(resp.status_code, 401, path)
                self.assertEqual(resp.json(), {"error": "User-ID header required"})
        get_user.assert_not_called()
        handler_logic.assert_not_called()

    def test_unknown_user_is_rejected(self):
        resp = self.client.get("/transactions/", headers=self.auth(999))
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"error": "Invalid user"})

    def test_out_of_range_user_ids_are_rejected(self):
        for raw in ("99999999999999999999999", "0", "-3"):
            resp = self.client.get("/transactions/", headers={"User-ID": raw})
            self.assertEqual(resp.status_code, 401, raw)
            self.assertEqual(resp.json(), {"error": "Invalid user"})

    def test_non_numeric_user_is_rejected(self):
        resp = self.client.get("/transactions/", headers={"User-ID": "abc"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json(), {"error": "Invalid user"})


class TestCreateTransaction(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.user_id = self.register()

    def test_create_returns_stored_record(self):
        body = self.add_transaction(
            self.user_id, "Food", -12.5, date="2024-03-15", description="Lunch"
        )
        self.assertIsInstance(body["id"], int)
        self.assertEqual(body["user_id"], self.user_id)
        self.assertEqual(body["category_id"], self.category_id("Food"))
        self.assertEqual(body["amount"], -12.5)
        self.assertEqual(body["description"], "Lunch")
        self.assertEqual(body["date"], "2024-03-15")

    def test_date_defaults_to_today(self):
        for given in (None, ""):
            body = self.add_transaction(self.user_id, "Food", 5, date=given)
            self.assertEqual(body["date"], date.today().isoformat())

    def test_unknown_category_rejected_without_insert(self):
        resp = self.client.post(
            "/transactions/",
            json={"category_id": 9999, "amount": 10, "description": "x"},
            headers=self.auth(self.user_id),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid category"})
        self.assertEqual(self.count_rows(TransactionORM), 0)

    def test_oversized_category_id_is_invalid_category(self):
        resp = self.client.post(
            "/transactions/",
            json={"category_id": 99999999999999999999999, "amount": 1},
            headers=self.auth(self.user_id),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "Invalid category"})
        self.assertEqual(self.count_rows(TransactionORM), 0)

    def test_non_finite_amount_is_bad_request(self):
        food = self.category_id("Food")
        for amount in ("Infinity", "-Infinity", "NaN"):
            resp = self.client.post(
                "/transactions/",
                content='{"category_id": %d, "amount": %s}' % (food, amount),
                headers={**self.auth(self.user_id), "Content-Type": "application/json"},
            )
            self.assertEqual(resp.status_code, 400, amount)
        self.assertEqual(self.count_rows(TransactionORM), 0)

    def test_store_failure_on_insert_is_generic_500(self):
        with patch(
            "expense_api.domain.services.transaction_service.add_transaction",
            side_effect=_store_down(),
        ):
            resp = self.client.post(
                "/transactions/",
                json={"category_id": self.category_id("Food"), "amount": 5},
                headers=self.auth(self.user_id),
            )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Could not create transaction"})

    def test_malformed_date_is_bad_request(self):
        resp = self.client.post(
            "/transactions/",
            json={
                "category_id": self.category_id("Food"),
                "amount": 10,
                "date": "15/03/2024",
            },
            headers=self.auth(self.user_id),
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.count_rows(TransactionORM), 0)


class TestListTransactions(ApiTestCase):
    def test_transactions_are_scoped_to_owner(self):
        alice = self.register(email="alice@example.com")
        bob = self.register(name="Bob", email="bob@example.com")
        created = self.add_transaction(alice, "Food", 40, date="2024-03-15")

        alice_list = self.client.get("/transactions/", headers=self.auth(alice))
        bob_list = self.client.get("/transactions/", headers=self.auth(bob))

        self.assertEqual(alice_list.status_code, 200)
        self.assertEqual([t["id"] for t in alice_list.json()], [created["id"]])
        self.assertEqual(bob_list.json(), [])

    def test_store_failure_is_generic_500(self):
        user_id = self.register()
        with patch(
            "expense_api.domain.services.transaction_service.get_user_transactions",
            side_effect=_store_down(),
        ):
            resp = self.client.get("/transactions/", headers=self.auth(user_id))
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "Could not fetch transactions"})


if __name__ == "__main__":
    unittest.main()
