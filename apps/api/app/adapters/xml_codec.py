"""Conversion between invoice dicts and the XML wire format."""

from __future__ import annotations

from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

INVOICE_ROOT = "Invoice"
ITEM_LIST = "ItemList"
ITEM_ELEMENT = "Item"


class XmlPayloadError(ValueError):
    """Raised when an XML payload cannot be turned into an invoice tree."""


def invoice_to_xml(invoice: dict[str, Any]) -> str:
    """Render an invoice with ``ItemList`` wrapped as repeated ``<Item>`` elements."""
    document = dict(invoice)
    if ITEM_LIST in document:
        document[ITEM_LIST] = {ITEM_ELEMENT: list(document[ITEM_LIST])}
    return xmltodict.unparse({INVOICE_ROOT: document}, pretty=True, indent="    ")


def xml_to_invoice(xml: str | bytes) -> Any:
    """Parse an ``<Invoice>`` document into the shape the invoice schema expects.

    Attributes are dropped, text stays text, empty leaf elements become empty
    strings, and ``ItemList/Item`` is flattened into a list even when a single
    item is present. Bytes are decoded by expat using the declared encoding.
    """
    try:
        parsed = xmltodict.parse(xml, xml_attribs=False, force_list=(ITEM_ELEMENT,))
    except ExpatError as exc:
        raise XmlPayloadError(f"Invalid XML Format: {exc}") from exc

    if not isinstance(parsed, dict) or INVOICE_ROOT not in parsed:
        raise XmlPayloadError(f"XML root must be <{INVOICE_ROOT}>")

    # An empty <Invoice/> parses to None; validate it as an empty object.
    data = _to_plain(parsed[INVOICE_ROOT] or {})
    if isinstance(data, dict):
        item_list = data.get(ITEM_LIST)
        if isinstance(item_list, dict) and ITEM_ELEMENT in item_list:
            data[ITEM_LIST] = item_list[ITEM_ELEMENT]
    return data


def _to_plain(node: Any) -> Any:
    if node is None:
        return ""
    if isinstance(node, dict):
        return {key: _to_plain(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_to_plain(value) for value in node]
    return node


def render_validation_response(valid: bool, message: str | None = None, errors: list[str] | None = None) -> str:
    body: dict[str, Any] = {"Valid": "true" if valid else "false"}
    if message:
        body["Message"] = message
    if errors:
        body["Errors"] = {"Error": list(errors)}
    return xmltodict.unparse({"ValidationResponse": body}, pretty=True, indent="    ")


def render_error(message: str, **fields: str) -> str:
    body: dict[str, Any] = {"Message": message}
    body.update(fields)
    return xmltodict.unparse({"Error": body}, pretty=True, indent="    ")


__all__ = [
    "XmlPayloadError",
    "invoice_to_xml",
    "render_error",
    "render_validation_response",
    "xml_to_invoice",
]
