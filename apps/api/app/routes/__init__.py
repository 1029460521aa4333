"""Route modules."""

from .edge_cases import router as edge_cases_router
from .invoices import router as invoices_router
from .xml_invoices import router as xml_invoices_router

__all__ = ["edge_cases_router", "invoices_router", "xml_invoices_router"]
