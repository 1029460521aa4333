"""Invoice validation service layer."""

from dataclasses import dataclass, field
import logging
from typing import Any

from app.adapters.xml_codec import xml_to_invoice
from app.domain.invoice_schema import INVOICE_SCHEMA
from app.domain.schema_tree import SchemaNode, validate

logger = logging.getLogger(__name__)

VALID_JSON_MESSAGE = "Invoice is valid against the Invoice Schema"
VALID_XML_MESSAGE = "XML is valid against the Invoice Schema"
INVALID_MESSAGE = "Validation Failed"


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    message: str
    errors: list[str] = field(default_factory=list)


class InvoiceValidationService:
    def __init__(self, schema: SchemaNode = INVOICE_SCHEMA) -> None:
        self._schema = schema

    def validate_document(self, document: Any, *, source: str = "json") -> ValidationResult:
        errors = validate(document, self._schema)
        if errors:
            logger.info("invoice.validation_failed source=%s error_count=%s", source, len(errors))
            return ValidationResult(valid=False, message=INVALID_MESSAGE, errors=errors)

        valid_message = VALID_XML_MESSAGE if source == "xml" else VALID_JSON_MESSAGE
        return ValidationResult(valid=True, message=valid_message)

    def validate_xml(self, xml: str | bytes) -> ValidationResult:
        """Validate an ``<Invoice>`` document; raises ``XmlPayloadError`` if it cannot be parsed."""
        return self.validate_document(xml_to_invoice(xml), source="xml")
