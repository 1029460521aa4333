"""Invoice sample service layer."""

from collections import Counter
from typing import Any

from app.errors import ResourceNotFoundError
from app.repositories.samples import SampleInvoiceStore
from app.schemas.invoice import InvoiceStats, SampleSummary


class InvoiceService:
    def __init__(self, store: SampleInvoiceStore) -> None:
        self._store = store

    def list_invoices(self) -> list[dict[str, Any]]:
        return self._store.list_samples()

    def get_invoice(self, sample_id: str) -> dict[str, Any]:
        invoice = self._store.get_sample(sample_id)
        if invoice is None:
            raise ResourceNotFoundError(f"Sample {sample_id} not found")
        return invoice

    def available_sample_ids(self) -> list[str]:
        return list(self._store.samples)

    def list_summaries(self) -> list[SampleSummary]:
        return [
            SampleSummary(
                id=sample_id,
                document_type=invoice["DocDtls"]["Typ"],
                document_number=invoice["DocDtls"]["No"],
                seller=invoice["SellerDtls"]["LglNm"],
                buyer=invoice["BuyerDtls"]["LglNm"],
                total_value=invoice["ValDtls"]["TotInvVal"],
            )
            for sample_id, invoice in self._store.samples.items()
        ]

    def generate(self, count: int) -> list[dict[str, Any]]:
        return self._store.generate(count)

    def stats(self) -> InvoiceStats:
        samples = self._store.list_samples()
        return InvoiceStats(
            total_samples=len(samples),
            generated_invoices=self._store.generated_count,
            document_types=dict(Counter(invoice["DocDtls"]["Typ"] for invoice in samples)),
            total_invoice_value=round(sum(invoice["ValDtls"]["TotInvVal"] for invoice in samples), 2),
        )
