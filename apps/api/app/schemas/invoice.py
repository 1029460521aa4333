"""Invoice API schemas."""

from typing import Any

from pydantic import BaseModel, Field


class SampleSummary(BaseModel):
    id: str
    document_type: str
    document_number: str
    seller: str
    buyer: str
    total_value: float


class InvoiceStats(BaseModel):
    total_samples: int
    generated_invoices: int
    document_types: dict[str, int]
    total_invoice_value: float


class StatsResponse(BaseModel):
    success: bool = True
    data: InvoiceStats


class SampleListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[SampleSummary]


class InvoiceListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[dict[str, Any]]


class GenerateInvoicesRequest(BaseModel):
    count: int = Field(default=1, ge=1, le=100)


class InvoiceValidationResponse(BaseModel):
    success: bool = True
    valid: bool
    message: str
    errors: list[str] = Field(default_factory=list)
