"""E-invoice JSON routes."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from app.domain.invoice_schema import INVOICE_SCHEMA
from app.domain.schema_tree import schema_to_dict
from app.routes.dependencies import (
    get_authenticated_principal,
    get_invoice_service,
    get_validation_service,
)
from app.schemas.auth import AuthPrincipal
from app.schemas.error import ErrorResponse
from app.schemas.invoice import (
    GenerateInvoicesRequest,
    InvoiceListResponse,
    InvoiceValidationResponse,
    SampleListResponse,
    StatsResponse,
)
from app.services.invoices import InvoiceService
from app.services.validation import InvoiceValidationService

router = APIRouter(prefix="/e-invoice", tags=["E-Invoice"])

_AUTH_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
}


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    service: Annotated[InvoiceService, Depends(get_invoice_service)],
) -> StatsResponse:
    return StatsResponse(data=service.stats())


@router.get("/samples", response_model=SampleListResponse)
async def list_samples(
    service: Annotated[InvoiceService, Depends(get_invoice_service)],
) -> SampleListResponse:
    summaries = service.list_summaries()
    return SampleListResponse(count=len(summaries), data=summaries)


@router.get("/schema")
async def get_schema() -> dict[str, Any]:
    return {"success": True, "schema": schema_to_dict(INVOICE_SCHEMA)}


@router.get("/invoices", response_model=InvoiceListResponse, responses=_AUTH_RESPONSES)
async def list_invoices(
    _: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[InvoiceService, Depends(get_invoice_service)],
) -> InvoiceListResponse:
    invoices = service.list_invoices()
    return InvoiceListResponse(count=len(invoices), data=invoices)


@router.post("/generate-dynamic", response_model=InvoiceListResponse, responses=_AUTH_RESPONSES)
async def generate_dynamic(
    _: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[InvoiceService, Depends(get_invoice_service)],
    payload: GenerateInvoicesRequest | None = None,
) -> InvoiceListResponse:
    count = payload.count if payload else 1
    invoices = service.generate(count)
    return InvoiceListResponse(count=len(invoices), data=invoices)


@router.post("/validate", response_model=InvoiceValidationResponse, responses=_AUTH_RESPONSES)
async def validate_invoice(
    document: Annotated[Any, Body()],
    _: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
    service: Annotated[InvoiceValidationService, Depends(get_validation_service)],
) -> InvoiceValidationResponse:
    result = service.validate_document(document)
    return InvoiceValidationResponse(valid=result.valid, message=result.message, errors=result.errors)
