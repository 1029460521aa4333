"""In-memory invoice samples used by the mock API and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
import random
from typing import Any

_SELLERS: tuple[dict[str, str], ...] = (
    {"Gstin": "29AABCT1332L1ZT", "LglNm": "Tata Digital Traders Pvt Ltd", "Stcd": "29"},
    {"Gstin": "27AAACR5055K1Z5", "LglNm": "Reliance Retail Supplies Ltd", "Stcd": "27"},
    {"Gstin": "07AAGFF2194N1Z1", "LglNm": "Delhi Fabrication Works", "Stcd": "07"},
)

_BUYERS: tuple[dict[str, str], ...] = (
    {"Gstin": "29AWGPV7107B1Z1", "LglNm": "Bangalore Office Solutions", "Stcd": "29", "Pos": "29"},
    {"Gstin": "33AAACH7409R1Z8", "LglNm": "Chennai Hardware Mart", "Stcd": "33", "Pos": "33"},
    {"Gstin": "24AAACC1206D1ZM", "LglNm": "Ahmedabad Components LLP", "Stcd": "24", "Pos": "24"},
)

_PRODUCTS: tuple[tuple[str, str, str, float], ...] = (
    ("Laptop Computer", "84713010", "NOS", 18.0),
    ("Office Chair", "94013000", "NOS", 18.0),
    ("Printer Paper A4", "48025690", "BOX", 12.0),
    ("LED Monitor", "85285200", "NOS", 18.0),
    ("Steel Rods", "72142090", "KGS", 18.0),
    ("Basmati Rice", "10063020", "KGS", 5.0),
)


def _round(value: float) -> float:
    return round(value, 2)


def build_item(serial: int, product: tuple[str, str, str, float], qty: float, unit_price: float, *, inter_state: bool) -> dict[str, Any]:
    description, hsn_code, unit, gst_rate = product
    total = _round(qty * unit_price)
    tax = _round(total * gst_rate / 100)
    igst = tax if inter_state else 0.0
    cgst = 0.0 if inter_state else _round(tax / 2)
    sgst = 0.0 if inter_state else _round(tax - cgst)
    return {
        "SlNo": str(serial),
        "PrdDesc": description,
        "HsnCd": hsn_code,
        "Qty": qty,
        "Unit": unit,
        "UnitPrice": unit_price,
        "TotAmt": total,
        "AssAmt": total,
        "GstRt": gst_rate,
        "IgstAmt": igst,
        "CgstAmt": cgst,
        "SgstAmt": sgst,
        "TotItemVal": _round(total + igst + cgst + sgst),
    }


def build_invoice(
    *,
    document_number: str,
    document_date: date,
    seller: dict[str, str],
    buyer: dict[str, str],
    items: list[tuple[tuple[str, str, str, float], float, float]],
    supply_type: str = "B2B",
    document_type: str = "INV",
) -> dict[str, Any]:
    inter_state = seller["Stcd"] != buyer["Pos"]
    item_list = [
        build_item(index, product, qty, unit_price, inter_state=inter_state)
        for index, (product, qty, unit_price) in enumerate(items, start=1)
    ]
    return {
        "Version": "1.1",
        "TranDtls": {"SupTyp": supply_type, "RegRev": "N"},
        "DocDtls": {"Typ": document_type, "No": document_number, "Dt": document_date.strftime("%d/%m/%Y")},
        "SellerDtls": dict(seller),
        "BuyerDtls": dict(buyer),
        "ItemList": item_list,
        "ValDtls": {
            "AssVal": _round(sum(item["AssAmt"] for item in item_list)),
            "CgstVal": _round(sum(item["CgstAmt"] for item in item_list)),
            "SgstVal": _round(sum(item["SgstAmt"] for item in item_list)),
            "IgstVal": _round(sum(item["IgstAmt"] for item in item_list)),
            "TotInvVal": _round(sum(item["TotItemVal"] for item in item_list)),
        },
    }


def _default_samples() -> dict[str, dict[str, Any]]:
    issued = date(2024, 4, 1)
    return {
        "1": build_invoice(
            document_number="INV/2024/0001",
            document_date=issued,
            seller=_SELLERS[0],
            buyer=_BUYERS[0],
            items=[(_PRODUCTS[0], 2, 55000.0), (_PRODUCTS[1], 4, 7500.0)],
        ),
        "2": build_invoice(
            document_number="INV/2024/0002",
            document_date=issued + timedelta(days=3),
            seller=_SELLERS[1],
            buyer=_BUYERS[1],
            items=[(_PRODUCTS[3], 10, 12999.0)],
        ),
        "3": build_invoice(
            document_number="CRN/2024/0001",
            document_date=issued + timedelta(days=10),
            seller=_SELLERS[2],
            buyer=_BUYERS[2],
            items=[(_PRODUCTS[2], 50, 320.0), (_PRODUCTS[4], 250, 62.5), (_PRODUCTS[5], 100, 95.0)],
            document_type="CRN",
        ),
    }


@dataclass(slots=True)
class SampleInvoiceStore:
    """Deterministic sample invoices plus a seeded generator for dynamic ones."""

    samples: dict[str, dict[str, Any]] = field(default_factory=_default_samples)
    seed: int = 2024
    generated_count: int = 0
    _rng: random.Random = field(init=False)

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def get_sample(self, sample_id: str) -> dict[str, Any] | None:
        return self.samples.get(sample_id)

    def list_samples(self) -> list[dict[str, Any]]:
        return list(self.samples.values())

    def generate(self, count: int) -> list[dict[str, Any]]:
        invoices = []
        for _ in range(count):
            self.generated_count += 1
            products = self._rng.sample(_PRODUCTS, k=self._rng.randint(1, 3))
            invoices.append(
                build_invoice(
                    document_number=f"DYN/2024/{self.generated_count:05d}",
                    document_date=date(2024, 4, 1) + timedelta(days=self._rng.randint(0, 364)),
                    seller=self._rng.choice(_SELLERS),
                    buyer=self._rng.choice(_BUYERS),
                    items=[
                        (product, self._rng.randint(1, 20), _round(self._rng.uniform(50, 5000)))
                        for product in products
                    ],
                    supply_type=self._rng.choice(("B2B", "SEZWP", "SEZWOP")),
                )
            )
        return invoices
