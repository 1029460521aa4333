"""JSON invoice route tests."""

from __future__ import annotations

import copy
import unittest

from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.main import create_app
from app.repositories.samples import SampleInvoiceStore


class InvoiceApiTests(unittest.TestCase):
    def setUp(self) -> None:
        get_settings.cache_clear()
        self.settings = get_settings()
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)
        self.public_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": "",
            "x-api-key": "",
        }
        self.auth_headers = {**self.public_headers, "x-api-key": self.settings.api_key}

    def tearDown(self) -> None:
        get_settings.cache_clear()

    def test_health(self) -> None:
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "OK"})

    def test_stats_are_public_and_summarise_samples(self) -> None:
        response = self.client.get("/api/e-invoice/stats", headers=self.public_headers)

        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["total_samples"], 3)
        self.assertEqual(data["generated_invoices"], 0)
        self.assertEqual(data["document_types"], {"INV": 2, "CRN": 1})

    def test_samples_are_public(self) -> None:
        response = self.client.get("/api/e-invoice/samples", headers=self.public_headers)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["count"], 3)
        self.assertEqual([summary["id"] for summary in body["data"]], ["1", "2", "3"])
        self.assertEqual(body["data"][2]["document_type"], "CRN")

    def test_schema_is_published(self) -> None:
        response = self.client.get("/api/e-invoice/schema", headers=self.public_headers)

        self.assertEqual(response.status_code, 200)
        schema = response.json()["schema"]
        self.assertEqual(schema["type"], "object")
        self.assertIn("ItemList", schema["required"])

    def test_invoices_require_authentication(self) -> None:
        anonymous = self.client.get("/api/e-invoice/invoices", headers=self.public_headers)
        authenticated = self.client.get("/api/e-invoice/invoices", headers=self.auth_headers)

        self.assertEqual(anonymous.status_code, 401)
        self.assertEqual(authenticated.status_code, 200)
        body = authenticated.json()
        self.assertEqual(body["count"], 3)
        self.assertIsInstance(body["data"], list)
        self.assertEqual(body["data"][0]["Version"], "1.1")

    def test_generate_dynamic_returns_requested_count_and_updates_stats(self) -> None:
        response = self.client.post("/api/e-invoice/generate-dynamic", json={"count": 2}, headers=self.auth_headers)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["count"], 2)
        self.assertEqual(len(body["data"]), 2)
        self.assertNotEqual(body["data"][0]["DocDtls"]["No"], body["data"][1]["DocDtls"]["No"])

        stats = self.client.get("/api/e-invoice/stats", headers=self.public_headers).json()["data"]
        self.assertEqual(stats["generated_invoices"], 2)

    def test_generate_dynamic_defaults_to_one_invoice(self) -> None:
        response = self.client.post("/api/e-invoice/generate-dynamic", headers=self.auth_headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["count"], 1)

    def test_generate_dynamic_rejects_out_of_range_count(self) -> None:
        response = self.client.post("/api/e-invoice/generate-dynamic", json={"count": 0}, headers=self.auth_headers)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "INVALID_PAYLOAD")

    def test_validate_accepts_sample_and_reports_errors(self) -> None:
        invoice = copy.deepcopy(SampleInvoiceStore().get_sample("1"))

        valid = self.client.post("/api/e-invoice/validate", json=invoice, headers=self.auth_headers)
        self.assertEqual(valid.status_code, 200)
        self.assertTrue(valid.json()["valid"])
        self.assertEqual(valid.json()["errors"], [])

        del invoice["Version"]
        invoice["TranDtls"]["SupTyp"] = "XYZ"
        invalid = self.client.post("/api/e-invoice/validate", json=invoice, headers=self.auth_headers)

        self.assertEqual(invalid.status_code, 200)
        body = invalid.json()
        self.assertFalse(body["valid"])
        self.assertEqual(body["message"], "Validation Failed")
        self.assertEqual(body["errors"][0], "root: Missing required field 'Version'")
        self.assertTrue(body["errors"][1].startswith("root.TranDtls.SupTyp: Value 'XYZ' is not in allowed enum"))

    def test_validate_requires_authentication(self) -> None:
        response = self.client.post("/api/e-invoice/validate", json={}, headers=self.public_headers)

        self.assertEqual(response.status_code, 401)

    def test_unknown_route_with_headers_is_not_found(self) -> None:
        response = self.client.get("/api/e-invoice/ghost", headers=self.public_headers)

        self.assertEqual(response.status_code, 404)


class StrictPostApiTests(unittest.TestCase):
    def setUp(self) -> None:
        get_settings.cache_clear()
        self.client = TestClient(create_app())
        self.headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": "",
            "x-api-key": "",
        }

    def tearDown(self) -> None:
        get_settings.cache_clear()

    def test_well_formed_json_is_echoed(self) -> None:
        response = self.client.post("/api/edge-cases/strict-post", json={"name": "test"}, headers=self.headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "received": {"name": "test"}})

    def test_malformed_json_is_bad_request(self) -> None:
        response = self.client.post(
            "/api/edge-cases/strict-post",
            content='{"name": "test", "broken": }',
            headers=self.headers,
        )

        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["code"], "INVALID_PAYLOAD")
        self.assertTrue(body["details"]["errors"])

    def test_non_object_json_is_bad_request(self) -> None:
        response = self.client.post("/api/edge-cases/strict-post", json=[1, 2, 3], headers=self.headers)

        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
