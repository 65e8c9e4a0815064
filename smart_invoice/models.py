# smart_invoice/models.py
"""
Typed records passed between the pipeline stages. Every stage returns new
instances; nothing here is mutated after construction.
"""
from dataclasses import dataclass, field, fields


@dataclass(frozen=True)
class CustomerData:
    """One customer's billing identity from the Customer Master file."""

    sap_code: str
    customer_name: str
    address: str
    gstin: str
    pan: str
    email: str = ""
    mobile: str = ""


@dataclass(frozen=True)
class InvoiceData:
    """One aggregated billing line per SAP code."""

    sap_code: str
    customer_name: str
    customer_name_for_matching: str
    district: str
    quantity_lifted: float
    godown_rent: float
    loading_charges: float
    unloading_charges: float
    local_transportation: float
    freight_balance: float
    main_bill_amount: float
    total_value: float
    zone: str
    plant: str
    row_count: int


@dataclass(frozen=True)
class MergedInvoiceData(InvoiceData):
    """An InvoiceData row with the customer record it was reconciled to."""

    customer: CustomerData
    match_tier: str = "unmatched"

    @classmethod
    def from_invoice(cls, invoice, customer, match_tier):
        values = {f.name: getattr(invoice, f.name) for f in fields(InvoiceData)}
        return cls(**values, customer=customer, match_tier=match_tier)


@dataclass(frozen=True)
class LineItem:
    description: str
    hsn_sac: str
    amount: float
    quantity: float = None
    rate: float = None


@dataclass(frozen=True)
class DocumentValues:
    """Everything a renderer needs to print one document for one customer."""

    doc_type: str
    state: str
    inter_state: bool
    line_items: tuple
    subtotal: float
    cgst: float
    sgst: float
    igst: float
    total: float
    amount_in_words: str
    service_description: str
    bill_to_address: tuple
    bill_to_gstin: str

    @property
    def tax_total(self):
        return self.cgst + self.sgst + self.igst


@dataclass(frozen=True)
class SummaryTotals:
    godown_rent_total: float = 0.0
    main_bill_amount_total: float = 0.0
    freight_balance_total: float = 0.0
    combined_total: float = 0.0
    customer_count: int = 0


@dataclass(frozen=True)
class GeneratedDocument:
    id: str
    customer_name: str
    sap_code: str
    doc_type: str
    kind: str
    amount: float
    file_name: str
    content: bytes = field(repr=False, default=b"")
