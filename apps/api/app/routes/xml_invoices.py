"""E-invoice XML routes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status

from app.adapters.xml_codec import (
    XmlPayloadError,
    invoice_to_xml,
    render_error,
    render_validation_response,
)
from app.errors import ResourceNotFoundError
from app.routes.dependencies import get_invoice_service, get_validation_service
from app.services.invoices import InvoiceService
from app.services.validation import InvoiceValidationService

router = APIRouter(prefix="/e-invoice-xml", tags=["E-Invoice XML"])
logger = logging.getLogger(__name__)

XML_MEDIA_TYPE = "application/xml"


def _xml(content: str, status_code: int = status.HTTP_200_OK) -> Response:
    return Response(content=content, status_code=status_code, media_type=XML_MEDIA_TYPE)


@router.post("/validate", response_class=Response, responses={200: {"content": {XML_MEDIA_TYPE: {}}}})
async def validate_xml(
    request: Request,
    service: Annotated[InvoiceValidationService, Depends(get_validation_service)],
) -> Response:
    raw = await request.body()
    if not raw.strip():
        return _xml(
            render_validation_response(False, errors=["Empty or invalid XML payload"]),
            status.HTTP_400_BAD_REQUEST,
        )

    try:
        result = service.validate_xml(raw)
    except XmlPayloadError as exc:
        return _xml(render_validation_response(False, errors=[str(exc)]), status.HTTP_400_BAD_REQUEST)
    except Exception:
        logger.exception("xml.validation_crashed path=%s", request.url.path)
        return _xml(render_error("Internal Server Error"), status.HTTP_500_INTERNAL_SERVER_ERROR)

    # Schema violations are a successful call with a negative verdict.
    return _xml(render_validation_response(result.valid, result.message, result.errors))


@router.get("/{sample_id}", response_class=Response, responses={200: {"content": {XML_MEDIA_TYPE: {}}}})
async def get_xml_sample(
    sample_id: str,
    service: Annotated[InvoiceService, Depends(get_invoice_service)],
) -> Response:
    try:
        invoice = service.get_invoice(sample_id)
    except ResourceNotFoundError as exc:
        return _xml(
            render_error(exc.payload.message, AvailableSamples=", ".join(service.available_sample_ids())),
            status.HTTP_404_NOT_FOUND,
        )
    return _xml(invoice_to_xml(invoice))
