"""GST e-invoice (IRN schema v1.1) structure used for JSON and XML validation."""

from app.domain.schema_tree import ArraySchema, ObjectSchema, PrimitiveSchema

GSTIN_PATTERN = r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z]{1}[1-9A-Z]{1}Z[0-9A-Z]{1}$"

SUPPLY_TYPES: tuple[str, ...] = ("B2B", "SEZWP", "SEZWOP", "EXPWP", "EXPWOP", "DEXP")
DOCUMENT_TYPES: tuple[str, ...] = ("INV", "CRN", "DBN")

_STRING = PrimitiveSchema(type="string")
_NUMBER = PrimitiveSchema(type="number")

_ITEM_FIELDS: tuple[tuple[str, PrimitiveSchema], ...] = (
    ("SlNo", _STRING),
    ("PrdDesc", _STRING),
    ("HsnCd", _STRING),
    ("Qty", _NUMBER),
    ("Unit", _STRING),
    ("UnitPrice", _NUMBER),
    ("TotAmt", _NUMBER),
    ("AssAmt", _NUMBER),
    ("GstRt", _NUMBER),
    ("IgstAmt", _NUMBER),
    ("CgstAmt", _NUMBER),
    ("SgstAmt", _NUMBER),
    ("TotItemVal", _NUMBER),
)

_VALUE_FIELDS: tuple[str, ...] = ("AssVal", "CgstVal", "SgstVal", "IgstVal", "TotInvVal")

INVOICE_SCHEMA = ObjectSchema(
    required=("Version", "TranDtls", "DocDtls", "SellerDtls", "BuyerDtls", "ItemList", "ValDtls"),
    properties={
        "Version": PrimitiveSchema(type="string", enum=("1.1",)),
        "TranDtls": ObjectSchema(
            required=("SupTyp", "RegRev"),
            properties={
                "SupTyp": PrimitiveSchema(type="string", enum=SUPPLY_TYPES),
                "RegRev": PrimitiveSchema(type="string", enum=("Y", "N")),
            },
        ),
        "DocDtls": ObjectSchema(
            required=("Typ", "No", "Dt"),
            properties={
                "Typ": PrimitiveSchema(type="string", enum=DOCUMENT_TYPES),
                "No": _STRING,
                "Dt": _STRING,
            },
        ),
        "SellerDtls": ObjectSchema(
            required=("Gstin", "LglNm", "Stcd"),
            properties={
                "Gstin": PrimitiveSchema(type="string", pattern=GSTIN_PATTERN),
                "LglNm": _STRING,
                "Stcd": _STRING,
            },
        ),
        "BuyerDtls": ObjectSchema(
            required=("Gstin", "LglNm", "Stcd", "Pos"),
            properties={
                "Gstin": _STRING,
                "LglNm": _STRING,
                "Stcd": _STRING,
                "Pos": _STRING,
            },
        ),
        "ItemList": ArraySchema(
            min_items=1,
            max_items=1000,
            items=ObjectSchema(
                required=tuple(name for name, _ in _ITEM_FIELDS),
                properties=dict(_ITEM_FIELDS),
            ),
        ),
        "ValDtls": ObjectSchema(
            required=_VALUE_FIELDS,
            properties={name: _NUMBER for name in _VALUE_FIELDS},
        ),
    },
)
