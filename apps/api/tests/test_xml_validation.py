"""XML sample and validation endpoint tests."""

from __future__ import annotations

import copy
import unittest

from fastapi.testclient import TestClient
import xmltodict

from app.adapters.xml_codec import XmlPayloadError, invoice_to_xml, render_validation_response, xml_to_invoice
from app.core.config import get_settings
from app.domain.invoice_schema import INVOICE_SCHEMA
from app.domain.schema_tree import validate
from app.main import create_app
from app.repositories.samples import SampleInvoiceStore
from app.routes.dependencies import get_validation_service
from app.services.validation import InvoiceValidationService

XML_HEADERS = {
    "Content-Type": "application/xml",
    "Accept": "application/xml",
    "Authorization": "Bearer placeholder",
    "x-api-key": "placeholder",
}

VALIDATE_PATH = "/api/e-invoice-xml/validate"


class _CrashingValidationService(InvoiceValidationService):
    def validate_xml(self, xml: str | bytes):
        raise RuntimeError("validator exploded")


class XmlCodecTests(unittest.TestCase):
    def test_single_item_invoice_survives_round_trip_as_list(self) -> None:
        invoice = SampleInvoiceStore().get_sample("2")
        self.assertEqual(len(invoice["ItemList"]), 1)

        parsed = xml_to_invoice(invoice_to_xml(invoice))

        self.assertIsInstance(parsed["ItemList"], list)
        self.assertEqual(len(parsed["ItemList"]), 1)
        self.assertEqual(parsed["ItemList"][0]["HsnCd"], invoice["ItemList"][0]["HsnCd"])
        self.assertEqual(parsed["Version"], "1.1")

    def test_rendered_sample_uses_item_elements(self) -> None:
        xml = invoice_to_xml(SampleInvoiceStore().get_sample("1"))

        self.assertIn("<Invoice>", xml)
        self.assertEqual(xml.count("<Item>"), 2)

    def test_attributes_are_ignored(self) -> None:
        parsed = xml_to_invoice('<Invoice lang="en"><Version note="x">1.1</Version></Invoice>')

        self.assertEqual(parsed, {"Version": "1.1"})

    def test_empty_invoice_element_parses_as_empty_object(self) -> None:
        self.assertEqual(xml_to_invoice("<Invoice/>"), {})

    def test_empty_string_field_survives_round_trip(self) -> None:
        invoice = copy.deepcopy(SampleInvoiceStore().get_sample("1"))
        invoice["DocDtls"]["No"] = ""
        self.assertEqual(validate(invoice, INVOICE_SCHEMA), [])

        parsed = xml_to_invoice(invoice_to_xml(invoice))

        self.assertEqual(parsed["DocDtls"]["No"], "")
        self.assertEqual(validate(parsed, INVOICE_SCHEMA), [])

    def test_declared_encoding_is_honoured_for_bytes(self) -> None:
        payload = '<?xml version="1.0" encoding="ISO-8859-1"?><Invoice><Version>1.1</Version><Note>Café</Note></Invoice>'

        parsed = xml_to_invoice(payload.encode("iso-8859-1"))

        self.assertEqual(parsed, {"Version": "1.1", "Note": "Café"})

    def test_invalid_utf8_bytes_are_rejected(self) -> None:
        with self.assertRaises(XmlPayloadError) as context:
            xml_to_invoice(b"<Invoice><Version>\xff\xfe1.1</Version></Invoice>")

        self.assertTrue(str(context.exception).startswith("Invalid XML Format"))

    def test_unparseable_and_wrong_root_payloads_raise(self) -> None:
        for payload in ("<Invoice><Version>1.1</Invoice>", "not xml at all", "<Receipt><Version>1.1</Version></Receipt>"):
            with self.subTest(payload=payload):
                with self.assertRaises(XmlPayloadError):
                    xml_to_invoice(payload)

    def test_validation_response_lists_each_error(self) -> None:
        rendered = xmltodict.parse(render_validation_response(False, "Validation Failed", ["a", "b"]))

        self.assertEqual(rendered["ValidationResponse"]["Valid"], "false")
        self.assertEqual(rendered["ValidationResponse"]["Errors"]["Error"], ["a", "b"])


class XmlApiTests(unittest.TestCase):
    def setUp(self) -> None:
        get_settings.cache_clear()
        self.app = create_app()
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.app.dependency_overrides.clear()
        get_settings.cache_clear()

    def _sample_xml(self, sample_id: str = "1") -> str:
        response = self.client.get(f"/api/e-invoice-xml/{sample_id}", headers=XML_HEADERS)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.headers["content-type"].startswith("application/xml"))
        return response.text

    def test_sample_xml_validates(self) -> None:
        response = self.client.post(VALIDATE_PATH, content=self._sample_xml(), headers=XML_HEADERS)

        self.assertEqual(response.status_code, 200)
        self.assertIn("<Valid>true</Valid>", response.text)
        self.assertIn("XML is valid against the Invoice Schema", response.text)

    def test_every_sample_validates(self) -> None:
        for sample_id in ("1", "2", "3"):
            with self.subTest(sample_id=sample_id):
                response = self.client.post(VALIDATE_PATH, content=self._sample_xml(sample_id), headers=XML_HEADERS)
                self.assertIn("<Valid>true</Valid>", response.text)

    def test_schema_violation_is_reported_with_success_status(self) -> None:
        xml = self._sample_xml().replace("<Version>1.1</Version>", "")

        response = self.client.post(VALIDATE_PATH, content=xml, headers=XML_HEADERS)

        self.assertEqual(response.status_code, 200)
        self.assertIn("<Valid>false</Valid>", response.text)
        self.assertIn("<Error>root: Missing required field 'Version'</Error>", response.text)

    def test_numeric_text_passes_number_checks(self) -> None:
        xml = self._sample_xml()
        parsed = xml_to_invoice(xml)

        self.assertIsInstance(parsed["ValDtls"]["TotInvVal"], str)
        response = self.client.post(VALIDATE_PATH, content=xml, headers=XML_HEADERS)
        self.assertIn("<Valid>true</Valid>", response.text)

    def test_bad_payloads_are_rejected(self) -> None:
        cases = {
            "empty": "",
            "whitespace": "   \n",
            "malformed": "<Invoice><Version>1.1</Invoice>",
            "wrong root": "<Receipt><Version>1.1</Version></Receipt>",
        }
        for label, payload in cases.items():
            with self.subTest(case=label):
                response = self.client.post(VALIDATE_PATH, content=payload, headers=XML_HEADERS)
                self.assertEqual(response.status_code, 400)
                self.assertIn("<Valid>false</Valid>", response.text)

    def test_invalid_utf8_body_is_bad_request(self) -> None:
        response = self.client.post(
            VALIDATE_PATH,
            content=b"<Invoice><Version>\xff1.1</Version></Invoice>",
            headers=XML_HEADERS,
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid XML Format", response.text)

    def test_latin1_declared_body_is_decoded(self) -> None:
        xml = self._sample_xml().replace('encoding="utf-8"', 'encoding="ISO-8859-1"')
        xml = xml.replace("Tata Digital Traders Pvt Ltd", "Tata Café Traders")

        response = self.client.post(VALIDATE_PATH, content=xml.encode("iso-8859-1"), headers=XML_HEADERS)

        self.assertEqual(response.status_code, 200)
        self.assertIn("<Valid>true</Valid>", response.text)

    def test_unknown_sample_lists_available_ids(self) -> None:
        response = self.client.get("/api/e-invoice-xml/999", headers=XML_HEADERS)

        self.assertEqual(response.status_code, 404)
        body = xmltodict.parse(response.text)["Error"]
        self.assertEqual(body["Message"], "Sample 999 not found")
        self.assertEqual(body["AvailableSamples"], "1, 2, 3")

    def test_unexpected_failure_returns_xml_server_error(self) -> None:
        self.app.dependency_overrides[get_validation_service] = lambda: _CrashingValidationService()

        with self.assertLogs("app.routes.xml_invoices", level="ERROR"):
            response = self.client.post(VALIDATE_PATH, content="<Invoice/>", headers=XML_HEADERS)

        self.assertEqual(response.status_code, 500)
        self.assertIn("<Message>Internal Server Error</Message>", response.text)

    def test_xml_routes_are_behind_the_header_gate(self) -> None:
        response = self.client.post(VALIDATE_PATH, content="<Invoice/>", headers={"Content-Type": "application/xml"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "MISSING_HEADERS")


if __name__ == "__main__":
    unittest.main()
